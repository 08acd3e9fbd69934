from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_funnel.api import deps
from hiring_funnel.api.params import (
    expand_end_of_day,
    parse_datetime,
    parse_id_list,
    parse_job_id,
    parse_positive_numbers,
)
from hiring_funnel.schemas.analytics import (
    DropoffOut,
    HiringMetricsOut,
    PerformanceOut,
    ReviewLatencyOut,
    SourcePerformanceRow,
)
from hiring_funnel.schemas.user import UserContext
from hiring_funnel.services import analytics
from hiring_funnel.services.analytics_store import AnalyticsQuery

router = APIRouter(prefix="/analytics", tags=["analytics"])


def analytics_query(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    job_id: str | None = Query(default=None, alias="jobId"),
    user: UserContext = Depends(deps.get_analytics_user),
) -> AnalyticsQuery:
    return AnalyticsQuery.for_user(
        user,
        start_date=parse_datetime(start_date, field="startDate"),
        end_date=expand_end_of_day(end_date, parse_datetime(end_date, field="endDate")),
        job_id=parse_job_id(job_id),
    )


@router.get("/hiring-metrics", response_model=HiringMetricsOut)
async def get_hiring_metrics(
    query: AnalyticsQuery = Depends(analytics_query),
    session: AsyncSession = Depends(deps.get_db_session),
):
    return await analytics.get_hiring_metrics(session, query)


@router.get("/dropoff", response_model=DropoffOut)
async def get_dropoff(
    query: AnalyticsQuery = Depends(analytics_query),
    session: AsyncSession = Depends(deps.get_db_session),
):
    return await analytics.get_dropoff(session, query)


@router.get("/source-performance", response_model=list[SourcePerformanceRow])
async def get_source_performance(
    query: AnalyticsQuery = Depends(analytics_query),
    session: AsyncSession = Depends(deps.get_db_session),
):
    return await analytics.get_source_performance(session, query)


@router.get("/hm-feedback", response_model=ReviewLatencyOut)
async def get_hm_feedback(
    review_stage_ids: list[str] | None = Query(default=None, alias="reviewStageIds"),
    next_stage_ids: list[str] | None = Query(default=None, alias="nextStageIds"),
    wait_buckets: list[str] | None = Query(default=None, alias="waitBuckets"),
    query: AnalyticsQuery = Depends(analytics_query),
    session: AsyncSession = Depends(deps.get_db_session),
):
    return await analytics.get_review_latency(
        session,
        query,
        review_stage_ids=parse_id_list(review_stage_ids),
        next_stage_ids=parse_id_list(next_stage_ids),
        wait_buckets=parse_positive_numbers(wait_buckets),
    )


@router.get("/performance", response_model=PerformanceOut)
async def get_performance(
    query: AnalyticsQuery = Depends(analytics_query),
    session: AsyncSession = Depends(deps.get_db_session),
):
    return await analytics.get_performance(session, query)
