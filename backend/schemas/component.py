"""Component catalog schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue

PropertyType = Literal["string", "number", "boolean", "color", "select", "text", "file"]
PropertyCategory = Literal["layout", "typography", "decoration", "basic", "advanced"]

# Component ids are stored as signed 64-bit integers.
COMPONENT_ID_MIN = -(2**63)
COMPONENT_ID_MAX = 2**63 - 1


class Property(BaseModel):
    """Editable property descriptor of a component."""

    name: str
    value: JsonValue = None
    label: str
    type: PropertyType
    category: PropertyCategory
    options: list[str] | None = None
    required: bool | None = None
    description: str | None = None


class Component(BaseModel):
    """Catalog entry describing a reusable building block.

    ``category`` is usually one of text/container/media/input/layout/custom
    but any string is accepted. ``created_at`` and ``updated_at`` are assigned
    by the server; values sent by clients are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(ge=COMPONENT_ID_MIN, le=COMPONENT_ID_MAX)
    name: str
    icon: str
    category: str
    description: str | None = None
    properties: list[Property]
    can_contain_content: bool = Field(alias="canContainContent")
    default_content: JsonValue = Field(default=None, alias="defaultContent")
    tags: list[str] | None = None
    created_at: str | None = None
    updated_at: str | None = None
