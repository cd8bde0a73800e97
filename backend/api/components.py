"""Component catalog API endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import get_session
from backend.exceptions import StorageError
from backend.schemas.component import COMPONENT_ID_MAX, COMPONENT_ID_MIN, Component
from backend.schemas.envelope import ApiResponse
from backend.services.component_service import (
    delete_component,
    list_components,
    save_component,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/components", tags=["components"])


@router.get("", response_model=ApiResponse[list[Component]])
async def list_components_endpoint(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[list[Component]]:
    """List the component catalog ordered by name."""
    try:
        components = await list_components(session)
    except StorageError as exc:
        logger.error("Failed to list components: %s", exc)
        return ApiResponse[list[Component]].fail(str(exc))
    return ApiResponse[list[Component]].ok(components)


@router.post("", response_model=ApiResponse[Component])
async def save_component_endpoint(
    body: Component,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[Component]:
    """Create a component or overwrite the one with the same id."""
    try:
        component = await save_component(session, body)
    except StorageError as exc:
        logger.error("Failed to save component %d: %s", body.id, exc)
        return ApiResponse[Component].fail(str(exc))
    return ApiResponse[Component].ok(component)


@router.post("/delete", response_model=ApiResponse[None])
async def delete_component_endpoint(
    component_id: Annotated[int, Body(ge=COMPONENT_ID_MIN, le=COMPONENT_ID_MAX)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApiResponse[None]:
    """Delete a component by id. The body is the bare integer id."""
    try:
        await delete_component(session, component_id)
    except StorageError as exc:
        logger.error("Failed to delete component %d: %s", component_id, exc)
        return ApiResponse[None].fail(str(exc))
    return ApiResponse[None].ok()
