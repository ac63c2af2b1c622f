"""Create record tables that do not exist yet.

Existing tables are left as they are; there is no migration step.
"""

from __future__ import annotations

import sqlite3
from typing import Iterable

from src.records import Product, Record

RECORD_TYPES: tuple[type[Record], ...] = (Product,)


def ensure_schema(
    conn: sqlite3.Connection, record_types: Iterable[type[Record]] = RECORD_TYPES
) -> list[str]:
    """Run each record's DDL and return the table names touched."""
    tables: list[str] = []
    for record_type in record_types:
        record_type.ensure_table(conn)
        tables.append(record_type.table_name)
    if conn.in_transaction:
        conn.commit()
    return tables
