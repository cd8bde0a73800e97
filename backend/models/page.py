"""Page model."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Integer, text
from sqlalchemy.orm import Mapped, mapped_column

from backend.models.base import Base, JsonColumn

PAGE_ID = 1


class PageRecord(Base):
    """The singleton page row holding the canvas elements and settings."""

    __tablename__ = "page"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    elements: Mapped[list[Any]] = mapped_column(JsonColumn, nullable=False)
    settings: Mapped[dict[str, Any]] = mapped_column(
        JsonColumn, nullable=False, server_default=text("'{}'")
    )
