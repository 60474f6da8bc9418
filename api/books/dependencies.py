"""
Dependencies for the books routes.
"""

from __future__ import annotations

from fastapi import Request

from .repository import BookRepository


def get_book_repository(request: Request) -> BookRepository:
    repository = getattr(request.app.state, "book_repository", None)
    if repository is None:
        raise RuntimeError("BookRepository is not wired. It is created during app startup.")
    return repository
