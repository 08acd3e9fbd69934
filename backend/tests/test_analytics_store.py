import pytest

from builders import day, seed_pipeline, transition
from hiring_funnel.core.roles import Role
from hiring_funnel.models import RecPipelineStage
from hiring_funnel.schemas.user import UserContext
from hiring_funnel.services import analytics
from hiring_funnel.services import analytics_store as store
from hiring_funnel.services.analytics_store import AnalyticsQuery


def test_query_scope_follows_roles():
    admin = UserContext(user_id=1, roles=[Role.ADMIN])
    recruiter = UserContext(user_id=2, roles=[Role.RECRUITER, Role.HIRING_MANAGER])
    assert AnalyticsQuery.for_user(admin).owner_id is None
    assert AnalyticsQuery.for_user(recruiter, job_id=20).owner_id == 2


@pytest.mark.asyncio
async def test_applications_are_scoped_to_owner_and_range(db_session):
    await seed_pipeline(db_session)

    everything = await store.load_applications(db_session, AnalyticsQuery())
    assert [a.id for a in everything] == [100, 101, 200, 201]

    own = await store.load_applications(db_session, AnalyticsQuery(owner_id=2))
    assert [a.id for a in own] == [200, 201]

    later = AnalyticsQuery(start_date=day(1))
    assert await store.count_applications(db_session, later) == 2
    assert await store.load_applications(db_session, AnalyticsQuery(), job_ids=[]) == []


@pytest.mark.asyncio
async def test_transitions_are_ordered_with_id_tie_break(db_session):
    await seed_pipeline(db_session)
    db_session.add_all([transition(9, 200, 3, day(4)), transition(8, 200, 2, day(4))])
    await db_session.commit()

    rows = await store.load_transitions(db_session, AnalyticsQuery(job_id=20))
    assert [(r.application_id, r.id) for r in rows] == [(200, 6), (200, 8), (200, 9)]

    hires = await store.load_transitions(db_session, AnalyticsQuery(), to_stage=3)
    assert [r.id for r in hires] == [3, 9]

    ranged = await store.load_transitions(db_session, AnalyticsQuery(start_date=day(3), end_date=day(5)))
    assert [r.id for r in ranged] == [5, 8, 9]


@pytest.mark.asyncio
async def test_display_names_and_history_cap(db_session):
    await seed_pipeline(db_session)

    names = await store.load_display_names(db_session, [1, 2, 4])
    assert names == {1: "Rita Ray", 2: "sam"}

    history = await store.load_application_history(db_session, 100, limit=2)
    assert [r.id for r in history] == [3, 2]


@pytest.mark.asyncio
async def test_review_latency_skips_history_without_review_stages(db_session, monkeypatch):
    await seed_pipeline(db_session)
    review = await db_session.get(RecPipelineStage, 2)
    review.name = "Screening"
    await db_session.commit()

    async def _unexpected(*args, **kwargs):
        raise AssertionError("stage history should not be loaded")

    monkeypatch.setattr(store, "load_transitions", _unexpected)
    result = await analytics.get_review_latency(db_session, AnalyticsQuery(), wait_buckets=[2, 5])
    assert result.average_days is None
    assert result.sample_size == 0
    assert result.waiting_count == 0
    assert result.buckets == []


@pytest.mark.asyncio
async def test_flagged_terminal_stage_drives_time_to_fill(db_session):
    await seed_pipeline(db_session)
    db_session.add(RecPipelineStage(id=4, name="Archived", order=9))
    hired = await db_session.get(RecPipelineStage, 3)
    hired.is_terminal = True
    await db_session.commit()

    metrics = await analytics.get_hiring_metrics(db_session, AnalyticsQuery())
    assert metrics.time_to_fill.overall == 7
    assert metrics.total_hires == 1
