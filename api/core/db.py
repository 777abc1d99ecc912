"""
asyncpg connection pool.

The pool is process-level infrastructure: FastAPI opens it on startup and
closes it on shutdown (see `api/main.py`). Request code never talks to the
pool directly; it goes through `core.store`, which borrows one connection
per request and scopes every statement to the caller.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit

import asyncpg

from . import config

logger = logging.getLogger(__name__)

# libpq connection-string options that asyncpg's DSN parser refuses.
LIBPQ_ONLY_PARAMS = frozenset({"sslmode"})

_pool: asyncpg.Pool | None = None


def asyncpg_dsn(url: str) -> str:
    """
    Hosted Postgres URLs are written for libpq; drop the query options
    asyncpg would reject and keep everything else as given.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url
    kept = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in LIBPQ_ONLY_PARAMS
    ]
    return parts._replace(query=urlencode(kept)).geturl()


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return asyncpg_dsn(url)


async def init_pool() -> asyncpg.Pool:
    global _pool
    if _pool is None:
        min_size, max_size = config.db_pool_min_size(), config.db_pool_max_size()
        _pool = await asyncpg.create_pool(
            dsn=database_url(),
            min_size=min_size,
            max_size=max_size,
            command_timeout=config.db_command_timeout_s(),
        )
        logger.info("db_pool_opened min_size=%s max_size=%s", min_size, max_size)
    return _pool


async def close_pool() -> None:
    global _pool
    current, _pool = _pool, None
    if current is not None:
        await current.close()
        logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("Database pool is not open; init_pool() runs in the app lifespan.")
    return _pool


@asynccontextmanager
async def connection() -> AsyncIterator[asyncpg.Connection]:
    """
    Borrow one pooled connection for the duration of the block.
    """
    async with pool().acquire() as conn:
        yield conn
