"""Postgres connection pool helpers for the dashboard API."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from validator_dash.config import Settings, get_settings
from validator_dash.errors import ConfigError, DatabaseError

logger = logging.getLogger(__name__)

_pool: ConnectionPool | None = None


def _conninfo(settings: Settings) -> str:
    if not settings.database_url:
        raise ConfigError("DATABASE_URL is not set")
    if settings.database_ssl:
        return make_conninfo(settings.database_url, sslmode="require")
    return settings.database_url


def init_pool(settings: Settings | None = None) -> ConnectionPool:
    """Open the process-wide pool. Calling it twice returns the open pool."""
    global _pool
    if _pool is not None:
        return _pool
    settings = settings or get_settings()
    _pool = ConnectionPool(
        _conninfo(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        kwargs={"row_factory": dict_row},
        open=True,
    )
    logger.info(
        "Database pool opened (min_size=%d, max_size=%d)",
        settings.db_pool_min_size,
        settings.db_pool_max_size,
    )
    return _pool


def close_pool() -> None:
    global _pool
    if _pool is None:
        return
    _pool.close()
    _pool = None
    logger.info("Database pool closed")


@contextmanager
def connection() -> Iterator[psycopg.Connection]:
    """Yield a pooled connection; it goes back to the pool on exit."""
    pool = _pool if _pool is not None else init_pool()
    with pool.connection() as conn:
        yield conn


def fetch_all(query: str, params: tuple[Any, ...] | dict[str, Any] = ()) -> list[dict[str, Any]]:
    try:
        with connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                return list(cur.fetchall())
    except psycopg.Error as exc:
        raise DatabaseError(str(exc)) from exc


def fetch_one(query: str, params: tuple[Any, ...] | dict[str, Any] = ()) -> dict[str, Any] | None:
    try:
        with connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                return cur.fetchone()
    except psycopg.Error as exc:
        raise DatabaseError(str(exc)) from exc
