"""Uniform response envelope shared by every API route."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{success, data, error}`` wrapper.

    ``data`` is meaningful only when ``success`` is true, ``error`` only when
    it is false. Both may be null (e.g. a successful delete).
    """

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> ApiResponse[T]:
        """Build a success envelope."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ApiResponse[T]:
        """Build a failure envelope with a human-readable message."""
        return cls(success=False, error=error)
