"""Component catalog model."""

from __future__ import annotations

from typing import Any

from sqlalchemy import BigInteger, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.models.base import Base, JsonColumn


class ComponentRecord(Base):
    """Reusable component definition, upserted by its external ``id``."""

    __tablename__ = "components"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    icon: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    properties: Mapped[list[Any]] = mapped_column(JsonColumn, nullable=False)
    can_contain_content: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    default_content: Mapped[Any] = mapped_column(JsonColumn, nullable=True)
    tags: Mapped[list[str] | None] = mapped_column(JsonColumn, nullable=True)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)
