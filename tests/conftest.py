from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

import main
from books.repository import BookRepository
from core import db


class FakeConnection:
    def __init__(self, rows=None, error: Exception | None = None):
        self.rows = list(rows or [])
        self.error = error
        self.queries: list[str] = []

    async def fetch(self, sql, *args):
        self.queries.append(sql)
        if self.error is not None:
            raise self.error
        return list(self.rows)


class FakePool:
    """Stands in for asyncpg.Pool; counts checkouts and checkins."""

    def __init__(self, rows=None, error: Exception | None = None):
        self.conn = FakeConnection(rows, error)
        self.acquired = 0
        self.released = 0
        self.closed = False

    @asynccontextmanager
    async def acquire(self):
        self.acquired += 1
        try:
            yield self.conn
        finally:
            self.released += 1

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_pool(monkeypatch):
    monkeypatch.setattr(db, "_pool", None)


@pytest.fixture
def db_env(monkeypatch):
    monkeypatch.setenv("DATABASE_DRIVER", "org.postgresql.Driver")
    monkeypatch.setenv("DATABASE_URL", "jdbc:postgresql://db.local:5432/library")


@pytest.fixture
def make_client():
    """Build a client whose app talks to a FakePool, without running startup."""

    def _make(pool: FakePool, **kwargs) -> TestClient:
        app = main.create_app()
        app.state.book_repository = BookRepository(db.QueryRunner(pool))
        return TestClient(app, **kwargs)

    return _make
