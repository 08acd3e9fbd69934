"""
Review latency: elapsed days between an application's first entry into a
review-classified stage and the transition that resolved it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from hiring_funnel.core.datetime_utils import days_between
from hiring_funnel.core.numbers import mean_tenth
from hiring_funnel.schemas.analytics import ReviewLatencyOut, WaitBucket
from hiring_funnel.services.stage_history import ApplicationTimeline

logger = logging.getLogger("hf.analytics")


@dataclass
class ReviewLatencySamples:
    durations: list[float] = field(default_factory=list)
    waiting_count: int = 0
    discarded: int = 0


def measure_review_latency(
    timelines: Iterable[ApplicationTimeline],
    review_stage_ids: Iterable[int],
    next_stage_ids: Iterable[int] | None = None,
) -> ReviewLatencySamples:
    review_ids = set(review_stage_ids)
    next_ids = set(next_stage_ids or [])
    samples = ReviewLatencySamples()

    for timeline in timelines:
        entry_index = timeline.first_index_into(review_ids)
        if entry_index is None:
            continue
        review_entry = timeline.entries[entry_index]
        later = timeline.entries[entry_index + 1 :]
        resolution = next((e for e in later if not next_ids or e.stage_id in next_ids), None)
        if resolution is None:
            samples.waiting_count += 1
            continue
        days = days_between(review_entry.entered_at, resolution.entered_at)
        if days < 0:
            # Clock skew or bad data; dropped rather than clamped.
            samples.discarded += 1
            continue
        samples.durations.append(days)

    if samples.discarded:
        logger.debug("review_latency_negative_samples", extra={"discarded": samples.discarded})
    return samples


def _format_threshold(value: float) -> str:
    return f"{value:g}"


def normalize_thresholds(thresholds: Iterable[float] | None) -> list[float]:
    return sorted({float(t) for t in thresholds or [] if t > 0})


def bucketize(durations: Sequence[float], thresholds: Iterable[float] | None) -> list[WaitBucket]:
    """
    Thresholds [2, 3, 5] yield buckets "<= 2d", "2-3d", "3-5d" and "> 5d".
    A sample lands in the first bucket whose upper bound it does not exceed.
    """
    bounds = normalize_thresholds(thresholds)
    if not bounds:
        return []

    counts = [0] * (len(bounds) + 1)
    for duration in durations:
        index = next((i for i, bound in enumerate(bounds) if duration <= bound), len(bounds))
        counts[index] += 1

    labels = [f"<= {_format_threshold(bounds[0])}d"]
    for lower, upper in zip(bounds, bounds[1:]):
        labels.append(f"{_format_threshold(lower)}-{_format_threshold(upper)}d")
    labels.append(f"> {_format_threshold(bounds[-1])}d")

    return [WaitBucket(label=label, count=count) for label, count in zip(labels, counts)]


def empty_review_latency() -> ReviewLatencyOut:
    return ReviewLatencyOut(average_days=None, waiting_count=0, sample_size=0, buckets=[])


def summarize_review_latency(
    samples: ReviewLatencySamples,
    thresholds: Iterable[float] | None = None,
) -> ReviewLatencyOut:
    return ReviewLatencyOut(
        average_days=mean_tenth(samples.durations),
        waiting_count=samples.waiting_count,
        sample_size=len(samples.durations),
        buckets=bucketize(samples.durations, thresholds),
    )
