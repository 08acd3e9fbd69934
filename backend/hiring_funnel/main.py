from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from hiring_funnel.api.router import api_router
from hiring_funnel.core.config import settings
from hiring_funnel.middleware.logging import RequestLoggingMiddleware
from hiring_funnel.middleware.request_context import RequestContextMiddleware

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger("hf.store")


async def _store_unavailable(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "store_query_failed",
        extra={"request_id": getattr(request.state, "request_id", None), "path": request.url.path},
        exc_info=exc,
    )
    detail = "Data store unavailable"
    if settings.environment != "production":
        detail = f"Data store unavailable: {exc}"
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": detail})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(RequestLoggingMiddleware)
    # Outermost, so the request id exists before the logging middleware reads it.
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(SQLAlchemyError, _store_unavailable)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "environment": settings.environment}

    app.include_router(api_router)
    return app


app = create_app()
