from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hiring_funnel.core.config import settings


engine = create_async_engine(settings.database_url, echo=settings.sql_echo, pool_pre_ping=True)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


async def get_session() -> AsyncSession:
    """Analytics only reads; whatever the request left open is rolled back."""
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()
