"""
Request-scoped analytics: each function loads its slice of the store, runs the
engines over it in memory and returns a response model. Nothing is cached
between calls; the terminal stage and review stages are resolved per request.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_funnel.core.config import settings
from hiring_funnel.core.numbers import percent_tenth
from hiring_funnel.core.stage_roles import resolve_review_stage_ids, resolve_terminal_stage_id
from hiring_funnel.schemas.analytics import (
    DropoffOut,
    HiringMetricsOut,
    PerformanceOut,
    ReviewLatencyOut,
    SourcePerformanceRow,
)
from hiring_funnel.services import analytics_store as store
from hiring_funnel.services.analytics_store import AnalyticsQuery
from hiring_funnel.services.funnel import compute_dropoff
from hiring_funnel.services.performance import (
    compute_hiring_manager_performance,
    compute_recruiter_performance,
    referenced_user_ids,
)
from hiring_funnel.services.review_latency import (
    empty_review_latency,
    measure_review_latency,
    summarize_review_latency,
)
from hiring_funnel.services.source_performance import compute_source_performance
from hiring_funnel.services.stage_history import reconstruct_timelines
from hiring_funnel.services.time_in_stage import compute_time_in_stage
from hiring_funnel.services.time_to_fill import compute_time_to_fill, summarize_time_to_fill

logger = logging.getLogger("hf.analytics")


async def get_hiring_metrics(session: AsyncSession, query: AnalyticsQuery) -> HiringMetricsOut:
    stages = await store.load_stages(session)

    by_job = []
    terminal_stage_id = resolve_terminal_stage_id(stages)
    if terminal_stage_id is not None:
        hire_events = await store.load_transitions(session, query, to_stage=terminal_stage_id)
        applications = await store.load_applications_by_id(session, (e.application_id for e in hire_events))
        jobs = await store.load_jobs_by_id(session, (a.job_id for a in applications.values()))
        by_job = compute_time_to_fill(hire_events, applications=applications, jobs=jobs, job_id=query.job_id)
    time_to_fill = summarize_time_to_fill(by_job)

    timelines = reconstruct_timelines(await store.load_transitions(session, query))
    time_in_stage = compute_time_in_stage(stages, timelines.values())

    total_applications = await store.count_applications(session, query)
    total_hires = sum(metric.hired_count for metric in by_job)

    logger.info(
        "hiring_metrics_computed",
        extra={"hires": total_hires, "applications": total_applications, "timelines": len(timelines)},
    )
    return HiringMetricsOut(
        time_to_fill=time_to_fill,
        time_in_stage=time_in_stage,
        total_applications=total_applications,
        total_hires=total_hires,
        conversion_rate=percent_tenth(total_hires, total_applications),
    )


async def get_dropoff(session: AsyncSession, query: AnalyticsQuery) -> DropoffOut:
    stages = await store.load_stages(session)
    applications = await store.load_applications(session, query)
    logger.info("dropoff_computed", extra={"stages": len(stages), "applications": len(applications)})
    return compute_dropoff(stages, applications)


async def get_source_performance(session: AsyncSession, query: AnalyticsQuery) -> list[SourcePerformanceRow]:
    applications = await store.load_applications(session, query)
    logger.info("source_performance_computed", extra={"applications": len(applications)})
    return compute_source_performance(
        applications,
        shortlist_statuses=settings.shortlist_statuses,
        hired_statuses=settings.hired_statuses,
    )


async def get_review_latency(
    session: AsyncSession,
    query: AnalyticsQuery,
    *,
    review_stage_ids: Iterable[int] | None = None,
    next_stage_ids: Iterable[int] | None = None,
    wait_buckets: Iterable[float] | None = None,
) -> ReviewLatencyOut:
    stages = await store.load_stages(session)
    review_ids = resolve_review_stage_ids(
        stages,
        explicit_ids=review_stage_ids,
        keyword=settings.review_stage_keyword,
    )
    if not review_ids:
        logger.info("review_latency_no_review_stages")
        return empty_review_latency()

    timelines = reconstruct_timelines(await store.load_transitions(session, query))
    samples = measure_review_latency(timelines.values(), review_ids, next_stage_ids)
    logger.info(
        "review_latency_computed",
        extra={"samples": len(samples.durations), "waiting": samples.waiting_count, "review_stages": review_ids},
    )
    return summarize_review_latency(samples, wait_buckets)


async def get_performance(session: AsyncSession, query: AnalyticsQuery) -> PerformanceOut:
    jobs = await store.load_jobs(session, query)
    if not jobs:
        return PerformanceOut(recruiters=[], hiring_managers=[])

    applications = await store.load_applications(session, query, job_ids=[job.id for job in jobs])
    history = await store.load_transitions_for_applications(session, (app.id for app in applications))
    timelines = reconstruct_timelines(history)

    stages = await store.load_stages(session)
    review_ids = resolve_review_stage_ids(stages, keyword=settings.review_stage_keyword)
    names = await store.load_display_names(session, referenced_user_ids(jobs))
    logger.info("performance_computed", extra={"jobs": len(jobs), "applications": len(applications)})

    return PerformanceOut(
        recruiters=compute_recruiter_performance(jobs, applications, timelines, names),
        hiring_managers=compute_hiring_manager_performance(
            jobs,
            applications,
            timelines,
            names,
            review_stage_ids=review_ids,
        ),
    )
