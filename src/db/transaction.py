"""Caller-managed units of work.

Records accept any object exposing a ``connection`` attribute as their
transaction argument and never commit, roll back or close it. This module
provides the concrete :class:`Transaction` callers use to group record
operations.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from types import TracebackType
from typing import Iterator, Optional, Protocol

from src.db import connection as db_connection
from src.logging_config import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.db")

BEGIN_MODES = ("DEFERRED", "IMMEDIATE", "EXCLUSIVE")


class TransactionLike(Protocol):
    """Anything that exposes the connection owning an open transaction."""

    @property
    def connection(self) -> sqlite3.Connection: ...


class Transaction:
    """Explicit ``BEGIN``/``COMMIT``/``ROLLBACK`` on a borrowed connection.

    Example:
        >>> from src.db.connection import connect
        >>> conn = connect(":memory:", timeout=1.0)
        >>> with Transaction(conn) as tx:
        ...     _ = tx.connection.execute("CREATE TABLE t (x INTEGER)")
        >>> tx.active
        False
    """

    def __init__(self, connection: sqlite3.Connection, mode: str = "DEFERRED") -> None:
        self._conn = connection
        self._mode = _check_mode(mode)
        self._active = False

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    @property
    def active(self) -> bool:
        return self._active

    def begin(self, mode: Optional[str] = None) -> "Transaction":
        if self._active:
            raise RuntimeError("Transaction already started")
        begin_mode = _check_mode(mode) if mode is not None else self._mode
        self._conn.execute(f"BEGIN {begin_mode}")
        self._active = True
        logger.debug("Transaction started", extra={"mode": begin_mode})
        return self

    def commit(self) -> None:
        if not self._active:
            raise RuntimeError("No active transaction to commit")
        self._conn.commit()
        self._active = False
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        if not self._active:
            raise RuntimeError("No active transaction to roll back")
        self._conn.rollback()
        self._active = False
        logger.debug("Transaction rolled back")

    def __enter__(self) -> "Transaction":
        return self.begin()

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if not self._active:
            return
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


def _check_mode(mode: str) -> str:
    normalized = mode.upper()
    if normalized not in BEGIN_MODES:
        raise ValueError(f"mode must be one of {', '.join(BEGIN_MODES)}; got {mode!r}")
    return normalized


@contextmanager
def transaction(mode: str = "DEFERRED") -> Iterator[Transaction]:
    """Open a default connection and run the block inside one transaction.

    Commits on success, rolls back on error and closes the connection in
    both cases.
    """
    conn = db_connection.get_default_connection()
    try:
        with Transaction(conn, mode) as tx:
            yield tx
    finally:
        conn.close()
