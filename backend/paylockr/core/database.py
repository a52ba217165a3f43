"""Async database engine and session management."""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from paylockr.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped async session."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_tables() -> None:
    """Create all tables registered on the declarative base."""
    # Model imports register the tables with Base.metadata.
    from paylockr.modules.auth import models as auth_models  # noqa: F401
    from paylockr.modules.billing import models as billing_models  # noqa: F401
    from paylockr.modules.notification import models as notification_models  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
    logger.info("Database tables initialized successfully")
