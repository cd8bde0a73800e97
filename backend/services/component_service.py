"""Component service: catalog upsert, listing and deletion."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from sqlalchemy import Text, cast, delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from backend.exceptions import StorageError
from backend.models.component import ComponentRecord
from backend.schemas.component import Component
from backend.services.datetime_service import timestamp_now

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_JSON_FIELDS = ("properties", "default_content", "tags")

# JSON columns are read as raw text so a row holding undecodable JSON can be
# skipped on its own instead of failing the whole result set.
_LISTING_COLUMNS = (
    ComponentRecord.id,
    ComponentRecord.name,
    ComponentRecord.icon,
    ComponentRecord.category,
    ComponentRecord.description,
    cast(ComponentRecord.properties, Text).label("properties"),
    ComponentRecord.can_contain_content,
    cast(ComponentRecord.default_content, Text).label("default_content"),
    cast(ComponentRecord.tags, Text).label("tags"),
    ComponentRecord.created_at,
    ComponentRecord.updated_at,
)


def _record_values(component: Component) -> dict[str, Any]:
    """Column values for ``component``, excluding server-assigned timestamps."""
    data = component.model_dump(mode="json", exclude={"created_at", "updated_at"})
    return {
        "id": data["id"],
        "name": data["name"],
        "icon": data["icon"],
        "category": data["category"],
        "description": data["description"],
        "properties": data["properties"],
        "can_contain_content": data["can_contain_content"],
        "default_content": data["default_content"],
        "tags": data["tags"],
    }


def _to_component(record: ComponentRecord) -> Component:
    return Component.model_validate(
        {
            "id": record.id,
            "name": record.name,
            "icon": record.icon,
            "category": record.category,
            "description": record.description,
            "properties": record.properties,
            "can_contain_content": record.can_contain_content,
            "default_content": record.default_content,
            "tags": record.tags,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        }
    )


def _decode_row(row: Mapping[str, Any]) -> Component:
    values = dict(row)
    for field in _JSON_FIELDS:
        raw = values[field]
        values[field] = None if raw is None else json.loads(raw)
    return Component.model_validate(values)


def parse_components(
    rows: Iterable[Mapping[str, Any]],
) -> tuple[list[Component], list[int]]:
    """Convert listing rows into components, dropping rows that do not parse.

    JSON columns arrive as text. A row is skipped when that text is not valid
    JSON or when the decoded values fail validation.

    Returns the parsed components in input order and the ids of skipped rows.
    """
    components: list[Component] = []
    skipped: list[int] = []
    for row in rows:
        try:
            components.append(_decode_row(row))
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.debug("Component %d failed to parse: %s", row["id"], exc)
            skipped.append(row["id"])
    return components, skipped


async def save_component(session: AsyncSession, component: Component) -> Component:
    """Insert ``component`` or overwrite the row with the same id.

    One atomic upsert: ``created_at`` survives a conflict, ``updated_at`` is
    always refreshed.
    """
    dialect = session.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise StorageError(f"Component upsert is not supported on dialect '{dialect}'")

    values = _record_values(component)
    now = timestamp_now()
    stmt = insert(ComponentRecord).values(**values, created_at=now, updated_at=now)
    update_values = {key: value for key, value in values.items() if key != "id"}
    stmt = stmt.on_conflict_do_update(
        index_elements=[ComponentRecord.id],
        set_={**update_values, "updated_at": now},
    ).returning(ComponentRecord)

    try:
        record = (
            await session.scalars(stmt, execution_options={"populate_existing": True})
        ).one()
        saved = _to_component(record)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StorageError(str(exc)) from exc

    logger.info("Saved component %d (%s)", saved.id, saved.name)
    return saved


async def list_components(session: AsyncSession) -> list[Component]:
    """List all components ordered by name.

    Rows whose stored JSON is corrupt or no longer matches ``Component`` are
    skipped and logged; they do not fail the listing.
    """
    stmt = select(*_LISTING_COLUMNS).order_by(ComponentRecord.name)
    try:
        rows = (await session.execute(stmt)).mappings().all()
    except SQLAlchemyError as exc:
        raise StorageError(str(exc)) from exc

    components, skipped = parse_components(rows)
    if skipped:
        logger.warning(
            "Skipped %d malformed component row(s): %s",
            len(skipped),
            ", ".join(str(component_id) for component_id in skipped),
        )
    return components


async def delete_component(session: AsyncSession, component_id: int) -> bool:
    """Delete the component with ``component_id``.

    Returns True if a row was removed. A missing id is not an error.
    """
    stmt = delete(ComponentRecord).where(ComponentRecord.id == component_id)
    try:
        result = await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StorageError(str(exc)) from exc

    deleted = bool(result.rowcount)
    logger.info("Delete component %d: %s", component_id, "removed" if deleted else "not found")
    return deleted
