"""
Pydantic schemas for the books endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Book(BaseModel):
    """
    Read-only view of one `books` row. Built per query, never written back.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str | None = None
    year: int | None = None
