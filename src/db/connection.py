"""SQLite connection provider.

Records never build connections themselves: they ask this module for one.
``get_default_connection`` is the single seam tests patch to point records at
a temporary database.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from src.logging_config import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.db")

MEMORY_DB = ":memory:"


def connect(path: str | Path, timeout: float) -> sqlite3.Connection:
    """Open a SQLite connection in driver autocommit mode.

    ``isolation_level=None`` stops the driver from opening implicit
    transactions, so every statement commits on its own unless a
    :class:`~src.db.transaction.Transaction` issued ``BEGIN`` first.
    ``timeout`` is the busy timeout used while waiting on another
    connection's lock.
    """
    target = str(path)
    if target != MEMORY_DB:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(target, timeout=timeout, isolation_level=None)
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def get_default_connection() -> sqlite3.Connection:
    """Return a new connection to the configured database."""
    from src.config.settings import settings

    return connect(settings.db_path, settings.db_timeout)


@contextmanager
def open_connection() -> Iterator[sqlite3.Connection]:
    """Scoped acquisition of a default connection.

    Any transaction left open by the driver is committed when the block
    succeeds and rolled back when it raises. The connection is always closed.
    """
    conn = get_default_connection()
    try:
        yield conn
        if conn.in_transaction:
            conn.commit()
    except BaseException:
        if conn.in_transaction:
            conn.rollback()
        raise
    finally:
        conn.close()
        logger.debug("Closed scoped connection")
