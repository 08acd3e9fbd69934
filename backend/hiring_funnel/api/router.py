from fastapi import APIRouter

from hiring_funnel.api.routes import analytics
from hiring_funnel.api.routes import applications
from hiring_funnel.core.config import settings

api_router = APIRouter(prefix=settings.api_prefix)
api_router.include_router(analytics.router)
api_router.include_router(applications.router)
