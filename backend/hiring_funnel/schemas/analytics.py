from __future__ import annotations

from datetime import datetime
from typing import Optional

from hiring_funnel.schemas.base import CamelModel


class TimeToFillMetric(CamelModel):
    job_id: int
    job_title: str
    average_days: int
    hired_count: int
    oldest_hire_date: Optional[datetime] = None
    newest_hire_date: Optional[datetime] = None


class TimeToFillSummary(CamelModel):
    overall: Optional[int] = None
    by_job: list[TimeToFillMetric]


class TimeInStageMetric(CamelModel):
    stage_id: int
    stage_name: str
    stage_order: int
    average_days: float
    transition_count: int
    min_days: int
    max_days: int


class HiringMetricsOut(CamelModel):
    time_to_fill: TimeToFillSummary
    time_in_stage: list[TimeInStageMetric]
    total_applications: int
    total_hires: int
    conversion_rate: float


class StageOccupancy(CamelModel):
    stage_id: int
    name: str
    order: int
    count: int


class StageConversion(CamelModel):
    name: str
    count: int
    rate: int


class DropoffOut(CamelModel):
    stages: list[StageOccupancy]
    unassigned: int
    conversions: list[StageConversion]


class SourcePerformanceRow(CamelModel):
    source: str
    apps: int
    shortlist: int
    hires: int
    conversion: float


class WaitBucket(CamelModel):
    label: str
    count: int


class ReviewLatencyOut(CamelModel):
    average_days: Optional[float] = None
    waiting_count: int = 0
    sample_size: int = 0
    buckets: list[WaitBucket] = []


class RecruiterPerformance(CamelModel):
    id: int
    name: str
    jobs_handled: int
    candidates_screened: int
    avg_first_action_days: Optional[float] = None
    avg_stage_move_days: Optional[float] = None


class HiringManagerPerformance(CamelModel):
    id: int
    name: str
    jobs_owned: int
    avg_feedback_days: Optional[float] = None
    waiting_count: int
    sample_size: int


class PerformanceOut(CamelModel):
    recruiters: list[RecruiterPerformance]
    hiring_managers: list[HiringManagerPerformance]


class StageHistoryEntryOut(CamelModel):
    id: int
    application_id: int
    from_stage: Optional[int] = None
    from_stage_name: Optional[str] = None
    to_stage: int
    to_stage_name: Optional[str] = None
    changed_at: Optional[datetime] = None
    changed_by: Optional[int] = None
    notes: Optional[str] = None
    days_in_stage: Optional[float] = None
