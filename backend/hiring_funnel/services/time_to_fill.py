from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping

from hiring_funnel.core.datetime_utils import coerce_timestamp, days_between
from hiring_funnel.core.numbers import round_days
from hiring_funnel.models.application import RecApplication
from hiring_funnel.models.job import RecJob
from hiring_funnel.schemas.analytics import TimeToFillMetric, TimeToFillSummary
from hiring_funnel.services.stage_history import TransitionLike

logger = logging.getLogger("hf.analytics")


@dataclass
class _JobAccumulator:
    job_title: str
    total_days: int = 0
    count: int = 0
    oldest_hire: datetime | None = None
    newest_hire: datetime | None = None

    def add(self, days: int, hired_at: datetime) -> None:
        self.total_days += days
        self.count += 1
        if self.oldest_hire is None or hired_at < self.oldest_hire:
            self.oldest_hire = hired_at
        if self.newest_hire is None or hired_at > self.newest_hire:
            self.newest_hire = hired_at


def compute_time_to_fill(
    hire_events: Iterable[TransitionLike],
    *,
    applications: Mapping[int, RecApplication],
    jobs: Mapping[int, RecJob],
    job_id: int | None = None,
) -> list[TimeToFillMetric]:
    """
    Days from application to hire, grouped by job.

    `hire_events` are transitions into the terminal stage; events whose application
    or job is out of scope (or whose timestamps are unreadable) are ignored.
    """
    per_job: dict[int, _JobAccumulator] = {}
    unreadable = 0
    for event in hire_events:
        application = applications.get(event.application_id)
        if application is None:
            continue
        if job_id is not None and application.job_id != job_id:
            continue
        job = jobs.get(application.job_id)
        if job is None:
            continue
        hired_at = coerce_timestamp(event.changed_at)
        applied_at = coerce_timestamp(application.applied_at)
        if hired_at is None or applied_at is None:
            unreadable += 1
            continue

        days_to_fill = round_days(days_between(applied_at, hired_at))
        per_job.setdefault(application.job_id, _JobAccumulator(job_title=job.title)).add(days_to_fill, hired_at)

    if unreadable:
        logger.debug("time_to_fill_unreadable_events", extra={"skipped": unreadable})

    return [
        TimeToFillMetric(
            job_id=jid,
            job_title=acc.job_title,
            average_days=round_days(acc.total_days / acc.count),
            hired_count=acc.count,
            oldest_hire_date=acc.oldest_hire,
            newest_hire_date=acc.newest_hire,
        )
        for jid, acc in sorted(per_job.items())
    ]


def summarize_time_to_fill(by_job: list[TimeToFillMetric]) -> TimeToFillSummary:
    # Weighted by hire volume, not a mean of per-job means.
    total_hires = sum(metric.hired_count for metric in by_job)
    total_days = sum(metric.average_days * metric.hired_count for metric in by_job)
    overall = round_days(total_days / total_hires) if total_hires > 0 else None
    return TimeToFillSummary(overall=overall, by_job=by_job)
