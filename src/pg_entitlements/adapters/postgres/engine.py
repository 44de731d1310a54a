"""Postgres adapter – URL handling and async engine construction."""
from __future__ import annotations

from typing import Any

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

ASYNC_DRIVER = "postgresql+asyncpg"

_POSTGRES_SCHEMES = frozenset({"postgres", "postgresql", "postgresql+asyncpg", "postgresql+psycopg", "postgresql+psycopg2"})


def build_url(dsn: str | URL, database: str | None = None) -> URL:
    """Normalise a DSN onto the asyncpg driver, optionally pointing it at *database*.

    Raises ``ValueError`` for URLs that do not name a PostgreSQL server.
    """
    url = make_url(dsn)
    if url.drivername not in _POSTGRES_SCHEMES:
        raise ValueError(f"unsupported scheme {url.drivername!r}, expected postgres://")
    url = url.set(drivername=ASYNC_DRIVER)
    if database is not None:
        url = url.set(database=database)
    return url


def create_engine(url: URL, *, connect_timeout: float = 10.0, **engine_kwargs: Any) -> AsyncEngine:
    """Create an engine for one database.

    ``sslmode`` in the query string is moved into asyncpg's ``ssl`` argument,
    which is the only spelling asyncpg understands.
    """
    connect_args: dict[str, Any] = {"timeout": connect_timeout}
    sslmode = url.query.get("sslmode")
    if sslmode:
        connect_args["ssl"] = sslmode
        url = url.difference_update_query(["sslmode"])
    engine_kwargs.setdefault("pool_size", 2)
    engine_kwargs.setdefault("max_overflow", 2)
    return create_async_engine(url, connect_args=connect_args, **engine_kwargs)


__all__ = ["ASYNC_DRIVER", "build_url", "create_engine"]
