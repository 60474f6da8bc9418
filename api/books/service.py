"""
Books business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status
from loguru import logger

from .repository import BookRepository, DataAccessError
from .schemas import Book


async def list_books(repository: BookRepository) -> list[Book]:
    try:
        return await repository.find_all()
    except DataAccessError as exc:
        logger.exception("Loading books failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load books.",
        ) from exc
