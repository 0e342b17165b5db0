"""Database connection and session management."""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hrms_api.config import get_settings

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    # Validate connections before checkout to detect stale connections
    pool_pre_ping=True,
    # Recycle connections after 1 hour (important for cloud proxies)
    pool_recycle=3600,
    # Never echo SQL statements, they carry salaries and account numbers
    echo=False,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency.

    One session per request. Everything a service flushes is committed
    together when the endpoint returns, or rolled back on a database error.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise
