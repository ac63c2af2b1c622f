"""Active-Record base class.

Each subclass maps one table: it declares ``table_name``, the ``ddl`` creating
that table, and its value columns as pydantic fields in column order. The
identity column is always ``id`` and is held outside the pydantic fields so
callers can read it but never assign it.

Every operation takes an optional transaction. Without one the record opens a
scoped connection that commits and closes when the statement is done; with one
the statement joins the caller's unit of work and nothing is committed,
rolled back or closed here.

Example:
    >>> product = Product(name="Widget", qty_in_stock=5).insert()  # doctest: +SKIP
    >>> Product.fetch(product.id).name  # doctest: +SKIP
    'Widget'
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, ClassVar, Iterator, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from src.db import connection as db_connection
from src.db.transaction import TransactionLike
from src.logging_config import LOG_NAME

from .commands import (
    delete_command,
    insert_command,
    lock_command,
    select_command,
    update_command,
)
from .errors import InvalidStateError, NotFoundError, StorageError

logger = logging.getLogger(f"{LOG_NAME}.records")

R = TypeVar("R", bound="Record")


@contextmanager
def _connection_for(tx: Optional[TransactionLike]) -> Iterator[sqlite3.Connection]:
    if tx is not None:
        yield tx.connection
        return
    with db_connection.open_connection() as conn:
        yield conn


class Record(BaseModel):
    """In-memory mirror of one database row."""

    table_name: ClassVar[str]
    ddl: ClassVar[str]

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    _id: int = PrivateAttr(default=0)

    # ------------------------------------------------------------------
    # Identity and schema helpers
    # ------------------------------------------------------------------
    @property
    def id(self) -> int:
        return self._id

    @property
    def is_persisted(self) -> bool:
        return self._id > 0

    @classmethod
    def type_name(cls) -> str:
        return f"{cls.__module__}.{cls.__qualname__}"

    @classmethod
    def columns(cls) -> tuple[str, ...]:
        """Value column names, in declaration order, without the identity."""
        return tuple(cls.model_fields)

    @classmethod
    def ensure_table(cls, conn: sqlite3.Connection) -> None:
        conn.execute(cls.ddl)

    @classmethod
    def handle(cls: type[R], record_id: int) -> R:
        """Build a lookup handle: a record carrying only its identity."""
        record = cls()
        record._id = int(record_id)
        return record

    @classmethod
    def fetch(
        cls: type[R],
        record_id: int,
        tx: Optional[TransactionLike] = None,
        exclusive_lock: bool = False,
    ) -> R:
        """Load the row with ``record_id``; see :meth:`get_by_id`."""
        return cls.handle(record_id).get_by_id(tx, exclusive_lock=exclusive_lock)

    def __repr_args__(self) -> Any:
        yield "id", self._id
        yield from super().__repr_args__()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def insert(self: R, tx: Optional[TransactionLike] = None) -> R:
        if self._id != 0:
            raise InvalidStateError(
                f"Cannot insert {self.type_name()}: identity already assigned (Id# {self._id})."
            )
        cmd = insert_command(self.table_name, self.columns(), self.model_dump())
        with _connection_for(tx) as conn:
            cur = cmd.execute(conn)
            new_id = cur.lastrowid
        if not new_id:
            raise StorageError(
                f"Failed to insert {self.type_name()}: no generated identity returned "
                f"(table: {self.table_name})."
            )
        self._id = int(new_id)
        logger.debug(
            "Record inserted",
            extra={"operation": "insert", "table": self.table_name, "record_id": self._id},
        )
        return self

    def get_by_id(
        self: R, tx: Optional[TransactionLike] = None, exclusive_lock: bool = False
    ) -> R:
        self._require_identity("get_by_id")
        cmd = select_command(self.table_name, self.columns(), self._id)
        with _connection_for(tx) as conn:
            if exclusive_lock and tx is not None:
                lock_command(self.table_name, self._id).execute(conn)
            row = cmd.execute(conn).fetchone()
        if row is None:
            raise NotFoundError(f"No database entry for {self.type_name()} with Id# {self._id}.")
        self._apply_row(row)
        logger.debug(
            "Record loaded",
            extra={
                "operation": "get_by_id",
                "table": self.table_name,
                "record_id": self._id,
                "exclusive_lock": bool(exclusive_lock and tx is not None),
            },
        )
        return self

    def update(self: R, tx: Optional[TransactionLike] = None) -> R:
        self._require_identity("update")
        cmd = update_command(self.table_name, self.columns(), self.model_dump(), self._id)
        with _connection_for(tx) as conn:
            affected = cmd.execute(conn).rowcount
        if affected < 1:
            raise NotFoundError(
                f"Failed to update {self.type_name()}: no database entry found for Id# {self._id}."
            )
        logger.debug(
            "Record updated",
            extra={"operation": "update", "table": self.table_name, "record_id": self._id},
        )
        return self

    def delete(self, tx: Optional[TransactionLike] = None) -> None:
        self._require_identity("delete")
        cmd = delete_command(self.table_name, self._id)
        with _connection_for(tx) as conn:
            affected = cmd.execute(conn).rowcount
        if affected < 1:
            raise NotFoundError(
                f"Failed to delete {self.type_name()}: no database entry found for Id# {self._id}."
            )
        logger.debug(
            "Record deleted",
            extra={"operation": "delete", "table": self.table_name, "record_id": self._id},
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _require_identity(self, operation: str) -> None:
        if self._id <= 0:
            raise InvalidStateError(
                f"Cannot {operation} {self.type_name()}: Id value is {self._id}."
            )

    def _apply_row(self, row: sqlite3.Row) -> None:
        for column in self.columns():
            setattr(self, column, row[column])
