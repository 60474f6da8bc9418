"""
Books persistence (raw SQL, read-only).
"""

from __future__ import annotations

import asyncio
from typing import Any

import asyncpg

from core.db import QueryRunner

from .schemas import Book

BOOK_TABLE = "books"

# (Book field, table column)
BOOK_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("title", "title"),
    ("description", "description"),
    ("year", "year"),
)

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class DataAccessError(RuntimeError):
    pass


def _select_all_sql() -> str:
    columns = ", ".join(column for _, column in BOOK_COLUMNS)
    return f"SELECT {columns} FROM {BOOK_TABLE}"


def row_to_book(row: dict[str, Any]) -> Book:
    return Book(**{field: row[column] for field, column in BOOK_COLUMNS})


class BookRepository:
    def __init__(self, runner: QueryRunner) -> None:
        self._runner = runner

    async def find_all(self) -> list[Book]:
        """
        Return every row of the books table, in whatever order storage yields.
        """
        try:
            rows = await self._runner.fetch_all(_select_all_sql())
        except _DRIVER_ERRORS as exc:
            raise DataAccessError(f"Failed to query {BOOK_TABLE}: {exc}") from exc
        return [row_to_book(row) for row in rows]
