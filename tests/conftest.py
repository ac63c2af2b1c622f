from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from src.db import connection as db_connection
from src.db.schema import ensure_schema

DB_TIMEOUT = 5.0


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default connection provider at a fresh file database."""
    path = tmp_path / "stockroom.sqlite3"
    monkeypatch.setattr(
        db_connection,
        "get_default_connection",
        lambda: db_connection.connect(path, timeout=DB_TIMEOUT),
    )
    conn = db_connection.connect(path, timeout=DB_TIMEOUT)
    try:
        ensure_schema(conn)
    finally:
        conn.close()
    return path


@pytest.fixture
def row_count(db_path: Path) -> Callable[[], int]:
    """Count product rows through an independent connection."""

    def _count() -> int:
        conn = db_connection.connect(db_path, timeout=DB_TIMEOUT)
        try:
            return int(conn.execute("SELECT COUNT(*) FROM product").fetchone()[0])
        finally:
            conn.close()

    return _count


@pytest.fixture
def no_database(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail loudly if anything asks for a connection."""

    def _refuse() -> None:
        raise AssertionError("database must not be touched")

    monkeypatch.setattr(db_connection, "get_default_connection", _refuse)
