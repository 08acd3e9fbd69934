"""Plain ORM instances for engine tests and database seeding."""

from datetime import datetime, timedelta

from hiring_funnel.models import RecApplication, RecJob, RecPipelineStage, RecStageTransition, RecUser

T0 = datetime(2025, 1, 1, 9, 0)


def day(n: float, hours: float = 0) -> datetime:
    return T0 + timedelta(days=n, hours=hours)


def stage(stage_id, name, order, *, is_terminal=False, stage_role=None) -> RecPipelineStage:
    return RecPipelineStage(id=stage_id, name=name, order=order, is_terminal=is_terminal, stage_role=stage_role)


def default_stages() -> list[RecPipelineStage]:
    return [stage(1, "Applied", 0), stage(2, "Screening", 1), stage(3, "Hired", 2)]


def user(user_id, username, first_name=None, last_name=None, role="recruiter") -> RecUser:
    return RecUser(id=user_id, username=username, first_name=first_name, last_name=last_name, role=role)


def job(job_id, title="Backend Engineer", *, posted_by=1, hiring_manager_id=None) -> RecJob:
    return RecJob(id=job_id, title=title, posted_by=posted_by, hiring_manager_id=hiring_manager_id)


def application(
    application_id,
    *,
    job_id=1,
    applied_at=T0,
    current_stage=None,
    source=None,
    status="submitted",
    stage_changed_at=None,
) -> RecApplication:
    return RecApplication(
        id=application_id,
        job_id=job_id,
        name=f"Candidate {application_id}",
        email=f"candidate{application_id}@example.com",
        applied_at=applied_at,
        current_stage=current_stage,
        source=source,
        status=status,
        stage_changed_at=stage_changed_at,
    )


def transition(transition_id, application_id, to_stage, changed_at, *, from_stage=None, changed_by=1, notes=None):
    return RecStageTransition(
        id=transition_id,
        application_id=application_id,
        from_stage=from_stage,
        to_stage=to_stage,
        changed_at=changed_at,
        changed_by=changed_by,
        notes=notes,
    )


async def seed_pipeline(session) -> None:
    """
    Two recruiters with one job each:

    - job 10 (recruiter 1, HM 3): application 100 hired after a 5-day review,
      application 101 still waiting in review.
    - job 20 (recruiter 2, HM 4 without a user record): application 200 in
      Applied, application 201 never placed in a stage.
    """
    session.add_all(
        [
            user(1, "rita", "Rita", "Ray"),
            user(2, "sam"),
            user(3, "hana", "Hana", "Moss", role="hiring_manager"),
            stage(1, "Applied", 0),
            stage(2, "HM Review", 1),
            stage(3, "Hired", 2),
            job(10, "Backend Engineer", posted_by=1, hiring_manager_id=3),
            job(20, "Designer", posted_by=2, hiring_manager_id=4),
            application(100, job_id=10, applied_at=day(0), current_stage=3, source="referral", status="hired"),
            application(101, job_id=10, applied_at=day(0), current_stage=2, source="referral", status="interview"),
            application(200, job_id=20, applied_at=day(1), current_stage=1, source=""),
            application(201, job_id=20, applied_at=day(1), source="linkedin"),
            transition(1, 100, 1, day(0)),
            transition(2, 100, 2, day(2), from_stage=1),
            transition(3, 100, 3, day(7), from_stage=2, notes="Offer accepted"),
            transition(4, 101, 1, day(0)),
            transition(5, 101, 2, day(3), from_stage=1),
            transition(6, 200, 1, day(1)),
        ]
    )
    await session.commit()
