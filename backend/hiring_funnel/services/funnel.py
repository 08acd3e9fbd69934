from __future__ import annotations

from collections import Counter
from typing import Iterable

from hiring_funnel.core.numbers import round_half_up
from hiring_funnel.core.stage_roles import StageLike, ordered_stages
from hiring_funnel.models.application import RecApplication
from hiring_funnel.schemas.analytics import DropoffOut, StageConversion, StageOccupancy


def compute_dropoff(stages: Iterable[StageLike], applications: Iterable[RecApplication]) -> DropoffOut:
    """Point-in-time occupancy per stage from `current_stage`; the transition log is not consulted."""
    occupancy: Counter[int | None] = Counter(app.current_stage for app in applications)

    counts = [
        StageOccupancy(stage_id=stage.id, name=stage.name, order=stage.order, count=occupancy.get(stage.id, 0))
        for stage in ordered_stages(stages)
    ]

    conversions: list[StageConversion] = []
    for index, row in enumerate(counts):
        if index == 0:
            conversions.append(StageConversion(name=row.name, count=row.count, rate=100))
            continue
        previous = counts[index - 1].count
        rate = int(round_half_up(row.count / previous * 100)) if previous > 0 else 0
        conversions.append(StageConversion(name=row.name, count=row.count, rate=rate))

    return DropoffOut(stages=counts, unassigned=occupancy.get(None, 0), conversions=conversions)
