"""Page API endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import get_session
from backend.exceptions import PageDataError, StorageError
from backend.schemas.envelope import ApiResponse
from backend.schemas.page import Page
from backend.services.page_service import get_page, save_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/page", tags=["page"])


@router.get("", response_model=ApiResponse[Page])
async def get_page_endpoint(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[Page]:
    """Get the page document."""
    try:
        page = await get_page(session)
    except StorageError as exc:
        logger.error("Failed to load page: %s", exc)
        return ApiResponse[Page].fail(str(exc))
    except PageDataError as exc:
        logger.warning("Stored page does not match the current schema: %s", exc)
        return ApiResponse[Page].fail(str(exc))
    return ApiResponse[Page].ok(page)


@router.post("", response_model=ApiResponse[Page])
async def save_page_endpoint(
    body: Page,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[Page]:
    """Replace the page document and echo it back."""
    try:
        page = await save_page(session, body)
    except StorageError as exc:
        logger.error("Failed to save page: %s", exc)
        return ApiResponse[Page].fail(str(exc))
    return ApiResponse[Page].ok(page)
