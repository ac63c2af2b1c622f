"""Parameterized statement builders shared by every record type.

Values are always bound as named parameters; only identifiers taken from
record class definitions are interpolated, and those are quoted.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

ID_COLUMN = "id"


def quote(identifier: str) -> str:
    """Quote an SQL identifier, doubling embedded quotes."""
    return '"' + identifier.replace('"', '""') + '"'


@dataclass(frozen=True)
class Command:
    sql: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def execute(self, conn: sqlite3.Connection) -> sqlite3.Cursor:
        """Run the statement on ``conn`` with name-addressable result rows.

        The row factory is set on the cursor only, so the connection keeps
        whatever factory its owner configured.
        """
        cur = conn.cursor()
        cur.row_factory = sqlite3.Row
        cur.execute(self.sql, dict(self.params))
        return cur


def insert_command(table: str, columns: Sequence[str], values: Mapping[str, Any]) -> Command:
    names = ", ".join(quote(c) for c in columns)
    placeholders = ", ".join(f":{c}" for c in columns)
    return Command(
        f"INSERT INTO {quote(table)} ({names}) VALUES ({placeholders})",
        {c: values[c] for c in columns},
    )


def select_command(table: str, columns: Sequence[str], record_id: int) -> Command:
    names = ", ".join(quote(c) for c in (ID_COLUMN, *columns))
    return Command(
        f"SELECT {names} FROM {quote(table)} WHERE {quote(ID_COLUMN)} = :id",
        {"id": record_id},
    )


def lock_command(table: str, record_id: int) -> Command:
    """No-op write on one row.

    SQLite has no row-level lock hint; writing the row takes the database
    write lock, held until the enclosing transaction ends. A competing
    transaction issuing the same command waits for it.
    """
    ident = quote(ID_COLUMN)
    return Command(
        f"UPDATE {quote(table)} SET {ident} = {ident} WHERE {ident} = :id",
        {"id": record_id},
    )


def update_command(
    table: str, columns: Sequence[str], values: Mapping[str, Any], record_id: int
) -> Command:
    assignments = ", ".join(f"{quote(c)} = :{c}" for c in columns)
    params: dict[str, Any] = {c: values[c] for c in columns}
    params["id"] = record_id
    return Command(
        f"UPDATE {quote(table)} SET {assignments} WHERE {quote(ID_COLUMN)} = :id",
        params,
    )


def delete_command(table: str, record_id: int) -> Command:
    return Command(
        f"DELETE FROM {quote(table)} WHERE {quote(ID_COLUMN)} = :id",
        {"id": record_id},
    )
