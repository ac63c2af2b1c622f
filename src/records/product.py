from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import Field, field_validator

from .base import Record


class Product(Record):
    """A stocked product and its ``product`` row.

    ``gtin_code`` and ``description`` are nullable columns. The empty values
    callers tend to pass for them (``0`` and a blank string) are stored as
    ``None`` so they persist as NULL and load back as ``None``.

    Example:
        >>> p = Product(name="Widget", qty_in_stock=5, gtin_code=0, description="")
        >>> (p.id, p.gtin_code, p.description)
        (0, None, None)
    """

    table_name: ClassVar[str] = "product"
    ddl: ClassVar[str] = """
        CREATE TABLE IF NOT EXISTS product (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            gtin_code INTEGER,
            qty_in_stock INTEGER NOT NULL DEFAULT 0,
            name TEXT NOT NULL,
            description TEXT
        )
    """

    gtin_code: Optional[int] = Field(default=None, description="Global Trade Item Number")
    qty_in_stock: int = Field(default=0, description="Units currently in stock")
    name: str = Field(default="", description="Display name")
    description: Optional[str] = Field(default=None, description="Free-form description")

    @field_validator("gtin_code", mode="after")
    @classmethod
    def _zero_gtin_is_unset(cls, v: Optional[int]) -> Optional[int]:
        if v == 0:
            return None
        return v

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v
