from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_funnel.core.auth import require_roles
from hiring_funnel.core.roles import Role
from hiring_funnel.db.session import get_session
from hiring_funnel.schemas.user import UserContext


async def get_db_session() -> AsyncSession:
    async for session in get_session():
        yield session


async def get_analytics_user(
    user: UserContext = Depends(require_roles([Role.RECRUITER, Role.ADMIN])),
) -> UserContext:
    return user
