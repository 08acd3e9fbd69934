from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from hiring_funnel.core.numbers import percent_tenth
from hiring_funnel.models.application import RecApplication
from hiring_funnel.schemas.analytics import SourcePerformanceRow

UNKNOWN_SOURCE = "unknown"


@dataclass
class _SourceCounts:
    apps: int = 0
    shortlist: int = 0
    hires: int = 0


def source_key(raw: str | None) -> str:
    return (raw or "").strip() or UNKNOWN_SOURCE


def compute_source_performance(
    applications: Iterable[RecApplication],
    *,
    shortlist_statuses: Iterable[str],
    hired_statuses: Iterable[str],
) -> list[SourcePerformanceRow]:
    shortlist = {s.lower() for s in shortlist_statuses}
    hired = {s.lower() for s in hired_statuses}

    grouped: dict[str, _SourceCounts] = {}
    for application in applications:
        counts = grouped.setdefault(source_key(application.source), _SourceCounts())
        status = (application.status or "").lower()
        counts.apps += 1
        if status in shortlist:
            counts.shortlist += 1
        if status in hired:
            counts.hires += 1

    rows = [
        SourcePerformanceRow(
            source=source,
            apps=counts.apps,
            shortlist=counts.shortlist,
            hires=counts.hires,
            conversion=percent_tenth(counts.hires, counts.apps),
        )
        for source, counts in grouped.items()
    ]
    rows.sort(key=lambda row: (-row.apps, row.source))
    return rows
