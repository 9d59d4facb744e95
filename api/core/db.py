"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). On startup the database may not be
accepting connections yet (container boot order), so `init_pool` retries with
bounded exponential backoff before giving up.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Callable
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import asyncpg

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


class DatabaseUnavailableError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
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
    """
    DATABASE_URL wins when set; otherwise the DSN is built from DB_* parts.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    host = os.environ.get("DB_HOST", "postgres").strip() or "postgres"
    port = _env_int("DB_PORT", 5432)
    name = os.environ.get("DB_NAME", "businesses").strip() or "businesses"
    user = os.environ.get("DB_USER", "postgres").strip() or "postgres"
    password = os.environ.get("DB_PASSWORD", "")

    auth = quote(user, safe="")
    if password:
        auth = f"{auth}:{quote(password, safe='')}"
    return f"postgresql://{auth}@{host}:{port}/{quote(name, safe='')}"


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 10), 1)


def connect_max_attempts() -> int:
    return max(_env_int("DB_CONNECT_MAX_ATTEMPTS", 10), 1)


def connect_base_delay_s() -> float:
    return max(_env_float("DB_CONNECT_BASE_DELAY_S", 0.5), 0.0)


def connect_max_delay_s() -> float:
    return max(_env_float("DB_CONNECT_MAX_DELAY_S", 16.0), 0.0)


def backoff_delay(attempt: int, *, base_s: float, cap_s: float) -> float:
    """
    Delay before retry number `attempt` (1-based): base, 2*base, 4*base, ... capped.
    """
    return min(base_s * (2 ** (attempt - 1)), cap_s)


async def connect_with_retry(
    connect: Callable[[], Awaitable[Any]],
    *,
    max_attempts: int,
    base_delay_s: float,
    max_delay_s: float,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Any:
    """
    Call `connect` until it succeeds or `max_attempts` failures have happened.

    Only connection-level failures (OSError, asyncpg errors) are retried.
    """
    last_exc: BaseException | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            return await connect()
        except (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
            last_exc = exc
            if attempt == max_attempts:
                break
            delay = backoff_delay(attempt, base_s=base_delay_s, cap_s=max_delay_s)
            logger.warning(
                "db_connect_failed attempt=%s/%s retry_in_s=%.2f error=%s",
                attempt,
                max_attempts,
                delay,
                exc,
            )
            await sleep(delay)

    raise DatabaseUnavailableError(
        f"Database unavailable after {max_attempts} attempts: {last_exc}"
    ) from last_exc


async def _create_pool() -> asyncpg.Pool:
    new_pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=1,
        max_size=pool_max_size(),
        command_timeout=30,
    )
    # Round-trip once so a half-started server counts as a failed attempt.
    try:
        await new_pool.fetchval("SELECT 1")
    except BaseException:
        new_pool.terminate()
        raise
    return new_pool


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await connect_with_retry(
        _create_pool,
        max_attempts=connect_max_attempts(),
        base_delay_s=connect_base_delay_s(),
        max_delay_s=connect_max_delay_s(),
    )
    logger.info("db_pool_ready max_size=%s", pool_max_size())


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def fetch_value(sql: str, *args: Any) -> Any:
    """
    Run a query and return the first column of the first row.
    """
    return await pool().fetchval(sql, *args)


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    await pool().execute(sql, *args)


def assignments(columns: list[str], *, start: int) -> str:
    """
    `col = $n` list for an UPDATE, numbering placeholders from `start`.

    Column names must come from a resource schema, never from request keys.
    """
    return ",\n            ".join(f"{column} = ${i}" for i, column in enumerate(columns, start=start))
