"""SQLAlchemy ORM models for the page builder."""

from backend.models.base import Base
from backend.models.component import ComponentRecord
from backend.models.page import PAGE_ID, PageRecord

__all__ = [
    "PAGE_ID",
    "Base",
    "ComponentRecord",
    "PageRecord",
]
