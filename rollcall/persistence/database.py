"""Async engine and sessions for the linked records database."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rollcall.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    Connections are tagged with the service name so they can be told apart
    in ``pg_stat_activity`` when several services share a server.

    Args:
        settings: Application settings

    Returns:
        Engine with a checked, recycled connection pool
    """
    db = settings.database
    return create_async_engine(
        db.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_recycle=db.pool_recycle,
        connect_args={"server_settings": {"application_name": settings.service_name}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions that keep loaded rows usable after commit."""
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
