"""Record persistence exceptions.

Driver failures (``sqlite3.Error`` and subclasses) are not wrapped: they reach
the caller unchanged.
"""

from __future__ import annotations


class RecordError(RuntimeError):
    """Base class for record persistence errors."""


class InvalidStateError(RecordError):
    """Raised when an operation is invoked with an identity it cannot accept."""


class NotFoundError(RecordError):
    """Raised when the row a record refers to does not exist."""


class StorageError(RecordError):
    """Raised when the driver succeeds but returns an unusable result."""
