from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Initialize the stockroom SQLite schema")
    p.add_argument(
        "--db",
        default=None,
        help="Path to SQLite DB file (defaults to STOCKROOM_DB_PATH; created if missing)",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    # Ensure project root (containing 'src') is importable
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    from src.config.settings import settings
    from src.db.connection import MEMORY_DB, connect
    from src.db.schema import ensure_schema
    from src.logging_config import get_logger

    args = build_parser().parse_args(argv)
    db_path = args.db or settings.db_path
    if db_path != MEMORY_DB:
        db_path = str(Path(db_path).resolve())

    conn = connect(db_path, settings.db_timeout)
    try:
        tables = ensure_schema(conn)
    finally:
        conn.close()

    get_logger().info("Schema initialized", extra={"db_path": db_path, "tables": tables})
    print(f"Initialized {', '.join(tables)} at: {db_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
