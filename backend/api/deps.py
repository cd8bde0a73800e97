"""Shared API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession


async def get_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """Get a database session from the pooled session factory."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session
