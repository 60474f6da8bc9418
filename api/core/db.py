"""
Async database access (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

Settings come from the environment:
- DATABASE_DRIVER: driver identifier (asyncpg / postgresql / org.postgresql.Driver)
- DATABASE_URL: connection URL, `jdbc:` prefix allowed

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import urlsplit

import asyncpg
from loguru import logger

_pool: asyncpg.Pool | None = None

_DRIVERS = {
    "asyncpg": "asyncpg",
    "postgres": "asyncpg",
    "postgresql": "asyncpg",
    "org.postgresql.driver": "asyncpg",
}


class ConfigurationError(RuntimeError):
    pass


def _sanitize_database_url(url: str) -> str:
    # Spring-style URLs carry a jdbc: prefix asyncpg does not understand.
    if url.lower().startswith("jdbc:"):
        return url[len("jdbc:"):]
    return url


def database_driver() -> str:
    name = os.environ.get("DATABASE_DRIVER", "").strip()
    if not name:
        raise ConfigurationError("DATABASE_DRIVER is not set.")
    driver = _DRIVERS.get(name.lower())
    if driver is None:
        raise ConfigurationError(f"Unsupported DATABASE_DRIVER: {name!r}.")
    return driver


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise ConfigurationError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def _describe(url: str) -> str:
    # host/db only, never credentials
    parts = urlsplit(url)
    host = parts.hostname or "localhost"
    port = f":{parts.port}" if parts.port else ""
    return f"{host}{port}{parts.path}"


async def init_pool() -> asyncpg.Pool:
    global _pool
    if _pool is not None:
        return _pool

    driver = database_driver()
    dsn = database_url()
    _pool = await asyncpg.create_pool(dsn=dsn, min_size=1, max_size=5)
    logger.info("DB pool ready ({}) at {}", driver, _describe(dsn))
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("DB pool closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class QueryRunner:
    """
    Query helper bound to a pool.

    Each call checks out one connection and always returns it to the pool,
    including when the query raises.
    """

    def __init__(self, db_pool: asyncpg.Pool) -> None:
        self._pool = db_pool

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]


def query_runner() -> QueryRunner:
    return QueryRunner(pool())
