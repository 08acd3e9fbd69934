from __future__ import annotations

from typing import Iterable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_funnel.core.config import settings
from hiring_funnel.core.numbers import round_tenth
from hiring_funnel.core.roles import sees_all_jobs
from hiring_funnel.core.stage_roles import StageLike
from hiring_funnel.models.application import RecApplication
from hiring_funnel.models.job import RecJob
from hiring_funnel.models.stage_history import RecStageTransition
from hiring_funnel.schemas.analytics import StageHistoryEntryOut
from hiring_funnel.schemas.user import UserContext
from hiring_funnel.services import analytics_store as store
from hiring_funnel.services.stage_history import reconstruct_timelines


def build_history_entries(
    transitions: Iterable[RecStageTransition],
    stages: Iterable[StageLike],
) -> list[StageHistoryEntryOut]:
    """Newest first; each row carries how long the stage it entered lasted (None while open)."""
    rows = list(transitions)
    names: Mapping[int, str] = {stage.id: stage.name for stage in stages}

    durations: dict[int, float] = {}
    for timeline in reconstruct_timelines(rows).values():
        for entry, interval in zip(timeline.entries, timeline.intervals()):
            if entry.transition_id is not None and not interval.is_open:
                durations[entry.transition_id] = round_tenth(interval.days)

    out = [
        StageHistoryEntryOut(
            id=row.id,
            application_id=row.application_id,
            from_stage=row.from_stage,
            from_stage_name=names.get(row.from_stage) if row.from_stage is not None else None,
            to_stage=row.to_stage,
            to_stage_name=names.get(row.to_stage),
            changed_at=row.changed_at,
            changed_by=row.changed_by,
            notes=row.notes,
            days_in_stage=durations.get(row.id),
        )
        for row in rows
    ]
    out.sort(key=lambda e: (e.changed_at is not None, e.changed_at, e.id), reverse=True)
    return out


def can_view_application(user: UserContext, job: RecJob | None) -> bool:
    if job is None:
        return False
    return sees_all_jobs(user.roles) or job.posted_by == user.user_id


async def get_application_history(
    session: AsyncSession,
    *,
    application: RecApplication,
) -> list[StageHistoryEntryOut]:
    transitions = await store.load_application_history(
        session,
        application.id,
        limit=settings.history_row_cap,
    )
    stages = await store.load_stages(session)
    return build_history_entries(transitions, stages)
