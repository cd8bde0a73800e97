"""Health check reporting store reachability and page seeding."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import get_session
from backend.schemas.health import HealthResponse
from backend.services.page_service import page_row_exists

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

VERSION = "0.1.0"


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """Report whether the store answers and the page row is seeded.

    A missing page row means every page request will fail until the server
    restarts and seeds it again, so it degrades the status.
    """
    try:
        page_seeded = await page_row_exists(session)
    except SQLAlchemyError as exc:
        logger.warning("Health check could not reach the store: %s", exc)
        return HealthResponse(status="degraded", version=VERSION, database="error")

    return HealthResponse(
        status="ok" if page_seeded else "degraded",
        version=VERSION,
        database="ok",
        page_seeded=page_seeded,
    )
