"""
Rebuilds per-application stage timelines from the append-only transition log.

Transitions for one application are ordered by `changed_at`, ties broken by the
transition id (ascending). Every entry except the last closes the interval opened
by its predecessor; the last entry is the open interval of the current stage.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Protocol

from hiring_funnel.core.datetime_utils import coerce_timestamp, days_between

logger = logging.getLogger("hf.analytics")


class TransitionLike(Protocol):
    id: int | None
    application_id: int
    to_stage: int
    changed_at: object
    changed_by: int | None


@dataclass(frozen=True)
class StageEntry:
    stage_id: int
    entered_at: datetime
    transition_id: int | None = None
    changed_by: int | None = None


@dataclass(frozen=True)
class StageInterval:
    stage_id: int
    entered_at: datetime
    exited_at: datetime | None

    @property
    def is_open(self) -> bool:
        return self.exited_at is None

    @property
    def days(self) -> float | None:
        if self.exited_at is None:
            return None
        return days_between(self.entered_at, self.exited_at)


@dataclass
class ApplicationTimeline:
    application_id: int
    entries: list[StageEntry] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.entries)

    @property
    def first_entry(self) -> StageEntry | None:
        return self.entries[0] if self.entries else None

    def intervals(self) -> list[StageInterval]:
        out: list[StageInterval] = []
        for index, entry in enumerate(self.entries):
            exit_entry = self.entries[index + 1] if index + 1 < len(self.entries) else None
            out.append(
                StageInterval(
                    stage_id=entry.stage_id,
                    entered_at=entry.entered_at,
                    exited_at=exit_entry.entered_at if exit_entry else None,
                )
            )
        return out

    def closed_intervals(self) -> list[StageInterval]:
        return [interval for interval in self.intervals() if not interval.is_open]

    def open_interval(self) -> StageInterval | None:
        if not self.entries:
            return None
        return self.intervals()[-1]

    def gaps_in_days(self) -> Iterator[float]:
        """Elapsed days between consecutive entries."""
        for interval in self.closed_intervals():
            yield interval.days

    def first_index_into(self, stage_ids: Iterable[int]) -> int | None:
        wanted = set(stage_ids)
        for index, entry in enumerate(self.entries):
            if entry.stage_id in wanted:
                return index
        return None


def _sort_key(entry: StageEntry) -> tuple:
    # Rows without an id (not yet flushed) sort after persisted rows at the same instant.
    return (entry.entered_at, entry.transition_id is None, entry.transition_id or 0)


def reconstruct_timelines(transitions: Iterable[TransitionLike]) -> dict[int, ApplicationTimeline]:
    """
    Groups transitions by application and orders each group.

    Accepts any iterable so callers can hand over a materialized list or a lazy
    source. Transitions whose `changed_at` is not a readable timestamp are dropped.
    """
    grouped: dict[int, list[StageEntry]] = defaultdict(list)
    skipped = 0
    for transition in transitions:
        entered_at = coerce_timestamp(transition.changed_at)
        if entered_at is None:
            skipped += 1
            continue
        grouped[transition.application_id].append(
            StageEntry(
                stage_id=transition.to_stage,
                entered_at=entered_at,
                transition_id=transition.id,
                changed_by=transition.changed_by,
            )
        )
    if skipped:
        logger.debug("stage_history_skipped_rows", extra={"skipped": skipped})

    timelines: dict[int, ApplicationTimeline] = {}
    for application_id in sorted(grouped):
        entries = sorted(grouped[application_id], key=_sort_key)
        timelines[application_id] = ApplicationTimeline(application_id=application_id, entries=entries)
    return timelines


def first_action_at(timeline: ApplicationTimeline | None, stage_changed_at: datetime | None) -> datetime | None:
    """First recorded movement of an application; legacy rows fall back to the cached `stage_changed_at`."""
    if timeline and timeline.first_entry:
        return timeline.first_entry.entered_at
    return coerce_timestamp(stage_changed_at)
