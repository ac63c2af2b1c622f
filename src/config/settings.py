"""Application settings for the stockroom database.

This module centralises configuration for reaching the SQLite database.
Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through a Pydantic settings object.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = os.path.join("data", "stockroom.sqlite3")
DEFAULT_DB_TIMEOUT = 5.0  # seconds


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    db_path: str = DEFAULT_DB_PATH
    db_timeout: float = DEFAULT_DB_TIMEOUT

    model_config = ConfigDict(frozen=True)


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    db_path = os.getenv("STOCKROOM_DB_PATH") or DEFAULT_DB_PATH

    raw_timeout = os.getenv("STOCKROOM_DB_TIMEOUT")
    if raw_timeout is None or raw_timeout.strip() == "":
        timeout = DEFAULT_DB_TIMEOUT
    else:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise RuntimeError(
                f"STOCKROOM_DB_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None
        if timeout < 0:
            raise RuntimeError("STOCKROOM_DB_TIMEOUT must not be negative")

    return Settings(db_path=db_path, db_timeout=timeout)


# Public settings instance
settings = _build_settings()

# Convenient exports
DB_PATH = settings.db_path
DB_TIMEOUT = settings.db_timeout
