from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from hiring_funnel.core.datetime_utils import days_between
from hiring_funnel.core.numbers import round_days, round_tenth
from hiring_funnel.core.stage_roles import StageLike, ordered_stages
from hiring_funnel.schemas.analytics import TimeInStageMetric
from hiring_funnel.services.stage_history import ApplicationTimeline


@dataclass
class _StageAccumulator:
    total_days: int = 0
    count: int = 0
    min_days: float = math.inf
    max_days: float = -math.inf

    def add(self, days: int) -> None:
        self.total_days += days
        self.count += 1
        self.min_days = min(self.min_days, days)
        self.max_days = max(self.max_days, days)


def compute_time_in_stage(
    stages: Iterable[StageLike],
    timelines: Iterable[ApplicationTimeline],
) -> list[TimeInStageMetric]:
    """
    Residency per stage over closed intervals only; the open interval of an
    application's current stage never contributes. Every stage is reported,
    in funnel order, with zeros when it has no samples.
    """
    per_stage: dict[int, _StageAccumulator] = {}
    for timeline in timelines:
        for interval in timeline.closed_intervals():
            days = round_days(days_between(interval.entered_at, interval.exited_at))
            per_stage.setdefault(interval.stage_id, _StageAccumulator()).add(days)

    out: list[TimeInStageMetric] = []
    for stage in ordered_stages(stages):
        acc = per_stage.get(stage.id)
        if acc is None or acc.count == 0:
            out.append(
                TimeInStageMetric(
                    stage_id=stage.id,
                    stage_name=stage.name,
                    stage_order=stage.order,
                    average_days=0,
                    transition_count=0,
                    min_days=0,
                    max_days=0,
                )
            )
            continue
        out.append(
            TimeInStageMetric(
                stage_id=stage.id,
                stage_name=stage.name,
                stage_order=stage.order,
                average_days=round_tenth(acc.total_days / acc.count),
                transition_count=acc.count,
                min_days=0 if acc.min_days == math.inf else int(acc.min_days),
                max_days=0 if acc.max_days == -math.inf else int(acc.max_days),
            )
        )
    return out
