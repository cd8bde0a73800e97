"""Page-related schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class Position(BaseModel):
    """Top-left corner of an element on the canvas."""

    x: float
    y: float


class Size(BaseModel):
    """Rendered size of an element."""

    width: float
    height: float


class Element(BaseModel):
    """One placed instance of a component on the page.

    ``props`` carries the instance's property overrides. Its shape is owned by
    the component catalog and the frontend, so it is stored as-is.
    """

    id: int
    type: str
    position: Position
    size: Size
    props: JsonValue = Field(default_factory=dict)


class PageSettings(BaseModel):
    """Canvas-wide settings."""

    model_config = ConfigDict(populate_by_name=True)

    responsive: bool
    width: int
    height: int
    max_width: str = Field(alias="maxWidth")
    bg_color: str = Field(alias="bgColor")


DEFAULT_PAGE_SETTINGS = PageSettings(
    responsive=True,
    width=1200,
    height=800,
    max_width="none",
    bg_color="#ffffff",
)


class Page(BaseModel):
    """The page document: elements plus settings."""

    elements: list[Element]
    settings: PageSettings
