from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Mapping

from hiring_funnel.core.datetime_utils import coerce_timestamp, days_between
from hiring_funnel.core.numbers import mean_tenth
from hiring_funnel.models.application import RecApplication
from hiring_funnel.models.job import RecJob
from hiring_funnel.schemas.analytics import HiringManagerPerformance, RecruiterPerformance
from hiring_funnel.services.review_latency import measure_review_latency
from hiring_funnel.services.stage_history import ApplicationTimeline, first_action_at


def recruiter_label(user_id: int, names: Mapping[int, str]) -> str:
    return names.get(user_id) or f"Recruiter #{user_id}"


def hiring_manager_label(user_id: int, names: Mapping[int, str]) -> str:
    return names.get(user_id) or f"HM #{user_id}"


def referenced_user_ids(jobs: Iterable[RecJob]) -> set[int]:
    ids: set[int] = set()
    for job in jobs:
        ids.add(job.posted_by)
        if job.hiring_manager_id is not None:
            ids.add(job.hiring_manager_id)
    return ids


def _applications_by_job(applications: Iterable[RecApplication]) -> dict[int, list[RecApplication]]:
    grouped: dict[int, list[RecApplication]] = defaultdict(list)
    for application in applications:
        grouped[application.job_id].append(application)
    return grouped


def compute_recruiter_performance(
    jobs: Iterable[RecJob],
    applications: Iterable[RecApplication],
    timelines: Mapping[int, ApplicationTimeline],
    names: Mapping[int, str],
) -> list[RecruiterPerformance]:
    jobs = list(jobs)
    apps_by_job = _applications_by_job(applications)

    job_ids_by_recruiter: dict[int, list[int]] = defaultdict(list)
    for job in jobs:
        job_ids_by_recruiter[job.posted_by].append(job.id)

    out: list[RecruiterPerformance] = []
    for recruiter_id in sorted(job_ids_by_recruiter):
        job_ids = job_ids_by_recruiter[recruiter_id]
        recruiter_apps = [app for jid in job_ids for app in apps_by_job.get(jid, [])]

        first_action_days: list[float] = []
        stage_move_days: list[float] = []
        for application in recruiter_apps:
            timeline = timelines.get(application.id)
            applied_at = coerce_timestamp(application.applied_at)
            acted_at = first_action_at(timeline, application.stage_changed_at)
            if applied_at is not None and acted_at is not None:
                delta = days_between(applied_at, acted_at)
                if delta >= 0:
                    first_action_days.append(delta)
            if timeline:
                stage_move_days.extend(gap for gap in timeline.gaps_in_days() if gap >= 0)

        out.append(
            RecruiterPerformance(
                id=recruiter_id,
                name=recruiter_label(recruiter_id, names),
                jobs_handled=len(job_ids),
                candidates_screened=len(recruiter_apps),
                avg_first_action_days=mean_tenth(first_action_days),
                avg_stage_move_days=mean_tenth(stage_move_days),
            )
        )
    return out


def compute_hiring_manager_performance(
    jobs: Iterable[RecJob],
    applications: Iterable[RecApplication],
    timelines: Mapping[int, ApplicationTimeline],
    names: Mapping[int, str],
    *,
    review_stage_ids: Iterable[int],
) -> list[HiringManagerPerformance]:
    review_ids = list(review_stage_ids)
    apps_by_job = _applications_by_job(applications)

    job_ids_by_manager: dict[int, list[int]] = defaultdict(list)
    for job in jobs:
        if job.hiring_manager_id is not None:
            job_ids_by_manager[job.hiring_manager_id].append(job.id)

    out: list[HiringManagerPerformance] = []
    for manager_id in sorted(job_ids_by_manager):
        job_ids = job_ids_by_manager[manager_id]
        manager_timelines = [
            timelines[app.id]
            for jid in job_ids
            for app in apps_by_job.get(jid, [])
            if app.id in timelines
        ]
        if review_ids:
            samples = measure_review_latency(manager_timelines, review_ids)
            durations, waiting = samples.durations, samples.waiting_count
        else:
            durations, waiting = [], 0

        out.append(
            HiringManagerPerformance(
                id=manager_id,
                name=hiring_manager_label(manager_id, names),
                jobs_owned=len(job_ids),
                avg_feedback_days=mean_tenth(durations),
                waiting_count=waiting,
                sample_size=len(durations),
            )
        )
    return out
