from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from hiring_funnel.core.roles import sees_all_jobs
from hiring_funnel.models.application import RecApplication
from hiring_funnel.models.job import RecJob
from hiring_funnel.models.pipeline_stage import RecPipelineStage
from hiring_funnel.models.stage_history import RecStageTransition
from hiring_funnel.models.user import RecUser
from hiring_funnel.schemas.user import UserContext

_TRANSITION_ORDER = (
    RecStageTransition.application_id.asc(),
    RecStageTransition.changed_at.asc(),
    RecStageTransition.id.asc(),
)


@dataclass(frozen=True)
class AnalyticsQuery:
    start_date: datetime | None = None
    end_date: datetime | None = None
    job_id: int | None = None
    # None means every job; otherwise only jobs posted by this user.
    owner_id: int | None = None

    @classmethod
    def for_user(
        cls,
        user: UserContext,
        *,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        job_id: int | None = None,
    ) -> "AnalyticsQuery":
        owner_id = None if sees_all_jobs(user.roles) else user.user_id
        return cls(start_date=start_date, end_date=end_date, job_id=job_id, owner_id=owner_id)


def _apply_range(stmt: Select, column, query: AnalyticsQuery) -> Select:
    if query.start_date is not None:
        stmt = stmt.where(column >= query.start_date)
    if query.end_date is not None:
        stmt = stmt.where(column <= query.end_date)
    return stmt


def _apply_job_scope(stmt: Select, query: AnalyticsQuery) -> Select:
    """Expects RecJob to be part of the FROM clause."""
    if query.job_id is not None:
        stmt = stmt.where(RecJob.id == query.job_id)
    if query.owner_id is not None:
        stmt = stmt.where(RecJob.posted_by == query.owner_id)
    return stmt


async def load_stages(session: AsyncSession) -> list[RecPipelineStage]:
    rows = await session.execute(select(RecPipelineStage).order_by(RecPipelineStage.order, RecPipelineStage.id))
    return list(rows.scalars().all())


async def load_jobs(session: AsyncSession, query: AnalyticsQuery) -> list[RecJob]:
    stmt = _apply_job_scope(select(RecJob), query).order_by(RecJob.id)
    return list((await session.execute(stmt)).scalars().all())


async def load_applications(
    session: AsyncSession,
    query: AnalyticsQuery,
    *,
    job_ids: Sequence[int] | None = None,
) -> list[RecApplication]:
    """In-scope applications filtered by `applied_at`."""
    stmt = select(RecApplication).join(RecJob, RecJob.id == RecApplication.job_id)
    stmt = _apply_job_scope(stmt, query)
    stmt = _apply_range(stmt, RecApplication.applied_at, query)
    if job_ids is not None:
        if not job_ids:
            return []
        stmt = stmt.where(RecApplication.job_id.in_(list(job_ids)))
    return list((await session.execute(stmt.order_by(RecApplication.id))).scalars().all())


async def count_applications(session: AsyncSession, query: AnalyticsQuery) -> int:
    stmt = select(func.count()).select_from(RecApplication).join(RecJob, RecJob.id == RecApplication.job_id)
    stmt = _apply_job_scope(stmt, query)
    stmt = _apply_range(stmt, RecApplication.applied_at, query)
    return int((await session.execute(stmt)).scalar_one() or 0)


async def load_transitions(
    session: AsyncSession,
    query: AnalyticsQuery,
    *,
    to_stage: int | None = None,
) -> list[RecStageTransition]:
    """Transitions of in-scope applications with `changed_at` inside the range."""
    stmt = (
        select(RecStageTransition)
        .join(RecApplication, RecApplication.id == RecStageTransition.application_id)
        .join(RecJob, RecJob.id == RecApplication.job_id)
    )
    stmt = _apply_job_scope(stmt, query)
    stmt = _apply_range(stmt, RecStageTransition.changed_at, query)
    if to_stage is not None:
        stmt = stmt.where(RecStageTransition.to_stage == to_stage)
    return list((await session.execute(stmt.order_by(*_TRANSITION_ORDER))).scalars().all())


async def load_transitions_for_applications(
    session: AsyncSession,
    application_ids: Iterable[int],
) -> list[RecStageTransition]:
    ids = list(application_ids)
    if not ids:
        return []
    stmt = select(RecStageTransition).where(RecStageTransition.application_id.in_(ids)).order_by(*_TRANSITION_ORDER)
    return list((await session.execute(stmt)).scalars().all())


async def load_applications_by_id(session: AsyncSession, application_ids: Iterable[int]) -> dict[int, RecApplication]:
    ids = sorted(set(application_ids))
    if not ids:
        return {}
    rows = await session.execute(select(RecApplication).where(RecApplication.id.in_(ids)))
    return {app.id: app for app in rows.scalars().all()}


async def load_jobs_by_id(session: AsyncSession, job_ids: Iterable[int]) -> dict[int, RecJob]:
    ids = sorted(set(job_ids))
    if not ids:
        return {}
    rows = await session.execute(select(RecJob).where(RecJob.id.in_(ids)))
    return {job.id: job for job in rows.scalars().all()}


async def load_display_names(session: AsyncSession, user_ids: Iterable[int]) -> dict[int, str]:
    ids = sorted(set(user_ids))
    if not ids:
        return {}
    rows = await session.execute(select(RecUser).where(RecUser.id.in_(ids)))
    return {user.id: user.display_name for user in rows.scalars().all()}


async def load_application_history(
    session: AsyncSession,
    application_id: int,
    *,
    limit: int,
) -> list[RecStageTransition]:
    stmt = (
        select(RecStageTransition)
        .where(RecStageTransition.application_id == application_id)
        .order_by(RecStageTransition.changed_at.desc(), RecStageTransition.id.desc())
        .limit(limit)
    )
    return list((await session.execute(stmt)).scalars().all())
