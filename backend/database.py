"""Database engine, session management and schema initialization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from backend.models import Base
from backend.services.page_service import ensure_default_page

if TYPE_CHECKING:
    from backend.config import Settings

logger = logging.getLogger(__name__)


def create_engine(
    settings: Settings,
) -> tuple[
    AsyncEngine,
    async_sessionmaker[AsyncSession],
]:
    """Create async engine and session factory.

    The engine owns a bounded connection pool shared by all requests.
    In-memory SQLite uses a single static connection and ignores the pool
    settings.

    Returns (engine, session_factory) tuple.
    """
    pool_kwargs: dict[str, Any] = {}
    if ":memory:" not in settings.database_url:
        pool_kwargs = {
            "pool_size": settings.db_pool_size,
            "max_overflow": 0,
            "pool_timeout": settings.db_pool_timeout,
        }
    engine = create_async_engine(
        settings.database_url,
        echo=settings.debug,
        **pool_kwargs,
    )
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return engine, session_factory


async def init_db(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Create missing tables and seed the default page row.

    Safe to run on every start: existing tables and an existing page row are
    left as they are. Errors propagate to the caller.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        created = await ensure_default_page(session)
    if not created:
        logger.debug("Page row already present, keeping stored content")

