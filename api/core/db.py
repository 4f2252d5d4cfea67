"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once by the application lifespan (see `api/main.py`),
stored on `app.state.pool` and handed to repositories explicitly. Nothing in
this module keeps a process-global pool.

Queries acquire a connection with the connect timeout, so a saturated pool
fails with StorageError instead of queueing forever.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

SCHEMA_SCRIPT_PATH = Path(__file__).with_name("create_database.sql")
STATEMENT_DELIMITER = ";"

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

logger = logging.getLogger(__name__)


# Storage failures are explicit and separable from other runtime errors.
class StorageError(RuntimeError):
    pass


class StartupError(RuntimeError):
    pass


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    return _sanitize_database_url(settings.database_url())


async def create_pool() -> asyncpg.Pool:
    """
    Connect a bounded pool. Raises StartupError when the database is unreachable.
    """
    try:
        return await asyncpg.create_pool(
            dsn=database_url(),
            min_size=min(settings.pool_min_size(), settings.pool_max_size()),
            max_size=settings.pool_max_size(),
            timeout=settings.connect_timeout_s(),
            command_timeout=settings.command_timeout_s(),
        )
    except _DRIVER_ERRORS as exc:
        raise StartupError(f"can't connect to database: {exc}") from exc


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()


def split_statements(script: str) -> list[str]:
    """
    Split a SQL script on the statement delimiter, dropping blank fragments.
    """
    statements = (part.strip() for part in script.split(STATEMENT_DELIMITER))
    return [s for s in statements if s]


def read_schema_script(path: Path | None = None) -> str:
    return (path or SCHEMA_SCRIPT_PATH).read_text(encoding="utf-8")


async def run_script(pool: asyncpg.Pool, script: str) -> int:
    """
    Execute each statement of `script` in order. Returns the statement count.

    The first failing statement aborts the run with StartupError.
    """
    statements = split_statements(script)
    for index, statement in enumerate(statements):
        try:
            await pool.execute(statement)
        except _DRIVER_ERRORS as exc:
            logger.error("schema_statement_failed index=%s error=%s", index, exc)
            raise StartupError(f"error running script (statement {index}): {exc}") from exc
    logger.debug("schema_script_applied statements=%s", len(statements))
    return len(statements)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        async with pool.acquire(timeout=settings.connect_timeout_s()) as conn:
            rows = await conn.fetch(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc
    return [_record_to_dict(r) for r in rows]


async def execute(pool: asyncpg.Pool, sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    try:
        async with pool.acquire(timeout=settings.connect_timeout_s()) as conn:
            await conn.execute(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc
