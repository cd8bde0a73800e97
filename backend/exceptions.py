"""Application-level exception types.

Convention:
- ``StorageError`` wraps any SQLAlchemy failure raised while a service talks
  to the database (connection loss, constraint violation, missing row).
- ``PageDataError`` marks stored page JSON that no longer matches the
  ``Page`` model.

API handlers turn both into an ``ApiResponse`` with ``success=false`` and the
exception message as ``error``. Neither is retried.
"""

from __future__ import annotations


class StorageError(Exception):
    """Raised when a database statement fails."""


class PageDataError(ValueError):
    """Raised when the stored page cannot be validated into a ``Page``."""
