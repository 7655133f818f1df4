"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). Repositories receive the pool
through the `get_pool` dependency instead of reaching for it directly.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver failures (`asyncpg.PostgresError`, `asyncpg.InterfaceError`, lost
connections) surface as `core.errors.BackendError`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .errors import BackendError

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=_env_int("DB_POOL_MIN_SIZE", 1),
        max_size=_env_int("DB_POOL_MAX_SIZE", 5),
        command_timeout=_env_int("DB_COMMAND_TIMEOUT_S", 30),
    )
    logger.info("db_pool_ready min_size=%s max_size=%s", _pool.get_min_size(), _pool.get_max_size())


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    # Waits for in-flight connections to be released before closing.
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def get_pool() -> asyncpg.Pool:
    """
    FastAPI dependency returning the process-wide pool.

    Tests override this to hand repositories a fake pool.
    """
    return pool()


def _resolve(explicit: asyncpg.Pool | None) -> asyncpg.Pool:
    return explicit if explicit is not None else pool()


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def _backend_error(exc: BaseException) -> BackendError:
    return BackendError(f"Database operation failed: {exc}")


async def fetch_one(sql: str, *args: Any, pool: asyncpg.Pool | None = None) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    target = _resolve(pool)
    try:
        row = await target.fetchrow(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _backend_error(exc) from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any, pool: asyncpg.Pool | None = None) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    target = _resolve(pool)
    try:
        rows = await target.fetch(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _backend_error(exc) from exc
    return [_record_to_dict(r) for r in rows]


@asynccontextmanager
async def transaction(pool: asyncpg.Pool | None = None) -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire one connection and open a transaction on it.

    Commits when the block exits normally and rolls back on any exception.
    The connection goes back to the pool on every exit path.
    """
    target = _resolve(pool)
    try:
        async with target.acquire() as conn:  # type: asyncpg.Connection
            async with conn.transaction():
                yield conn
    except BackendError:
        raise
    except _DRIVER_ERRORS as exc:
        raise _backend_error(exc) from exc
