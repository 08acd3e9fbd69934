from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_funnel.api import deps
from hiring_funnel.models.application import RecApplication
from hiring_funnel.models.job import RecJob
from hiring_funnel.schemas.analytics import StageHistoryEntryOut
from hiring_funnel.schemas.user import UserContext
from hiring_funnel.services.application_history import can_view_application, get_application_history

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("/{application_id}/history", response_model=list[StageHistoryEntryOut])
async def list_application_history(
    application_id: int = Path(ge=1),
    session: AsyncSession = Depends(deps.get_db_session),
    user: UserContext = Depends(deps.get_analytics_user),
):
    application = await session.get(RecApplication, application_id)
    job = await session.get(RecJob, application.job_id) if application else None
    if application is None or not can_view_application(user, job):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found.")
    return await get_application_history(session, application=application)
