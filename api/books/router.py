"""
Books API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from . import dependencies, service
from .repository import BookRepository
from .schemas import Book

router = APIRouter()


@router.get("/books", response_model=list[Book])
async def get_books(
    repository: BookRepository = Depends(dependencies.get_book_repository),
) -> list[Book]:
    return await service.list_books(repository)
