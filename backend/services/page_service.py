"""Page service: the singleton page document."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from sqlalchemy import Text, cast, exists, select, update
from sqlalchemy.exc import SQLAlchemyError

from backend.exceptions import PageDataError, StorageError
from backend.models.page import PAGE_ID, PageRecord
from backend.schemas.page import DEFAULT_PAGE_SETTINGS, Page

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


async def page_row_exists(session: AsyncSession) -> bool:
    """Whether the singleton page row is present."""
    return bool(await session.scalar(select(exists().where(PageRecord.id == PAGE_ID))))


async def ensure_default_page(session: AsyncSession) -> bool:
    """Insert the default page row unless it already exists.

    Returns True if a row was created. An existing row is left untouched.
    """
    if await page_row_exists(session):
        return False

    session.add(
        PageRecord(
            id=PAGE_ID,
            elements=[],
            settings=DEFAULT_PAGE_SETTINGS.model_dump(mode="json", by_alias=True),
        )
    )
    await session.commit()
    logger.info("Seeded default page row (id=%d)", PAGE_ID)
    return True


async def get_page(session: AsyncSession) -> Page:
    """Load the page document.

    Raises StorageError if the row cannot be read and PageDataError if the
    stored JSON is corrupt or does not match the current ``Page`` shape.
    """
    # Raw text, so undecodable JSON surfaces here rather than in the driver.
    stmt = select(
        cast(PageRecord.elements, Text).label("elements"),
        cast(PageRecord.settings, Text).label("settings"),
    ).where(PageRecord.id == PAGE_ID)
    try:
        row = (await session.execute(stmt)).one()
    except SQLAlchemyError as exc:
        raise StorageError(str(exc)) from exc

    try:
        return Page.model_validate(
            {"elements": json.loads(row.elements), "settings": json.loads(row.settings)}
        )
    except (json.JSONDecodeError, ValidationError) as exc:
        raise PageDataError(f"Failed to parse page: {exc}") from exc


async def save_page(session: AsyncSession, page: Page) -> Page:
    """Replace the stored elements and settings with ``page``.

    This is a full overwrite with no version check: concurrent saves resolve
    to whichever statement commits last. Returns ``page`` unchanged.
    """
    payload = page.model_dump(mode="json", by_alias=True)
    stmt = (
        update(PageRecord)
        .where(PageRecord.id == PAGE_ID)
        .values(elements=payload["elements"], settings=payload["settings"])
        .returning(PageRecord.id)
        .execution_options(synchronize_session=False)
    )
    try:
        (await session.execute(stmt)).one()
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StorageError(str(exc)) from exc

    logger.debug("Saved page with %d element(s)", len(page.elements))
    return page
