"""Active-Record entities.

Each record class maps one table and persists itself; see
:class:`records.base.Record` for the shared CRUD contract.
"""

from .base import Record
from .errors import InvalidStateError, NotFoundError, RecordError, StorageError
from .product import Product

__all__ = [
    "InvalidStateError",
    "NotFoundError",
    "Product",
    "Record",
    "RecordError",
    "StorageError",
]
