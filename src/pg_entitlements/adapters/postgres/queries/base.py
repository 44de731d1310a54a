"""Postgres adapter – shared query execution for the catalog mixins."""
from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

from sqlalchemy import text
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine

from pg_entitlements.application.pagination import Pager, paginate
from pg_entitlements.kernel.errors import NotFoundError, QueryError
from pg_entitlements.observability.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

PAGE_CLAUSE = "LIMIT :limit OFFSET :offset"


def query_error(exc: DBAPIError) -> QueryError:
    """Wrap a driver error, keeping the SQLSTATE when the driver reports one."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return QueryError(str(orig or exc), sqlstate=sqlstate, cause=exc)


class QueryRunner:
    """Owns the engine and turns SQL text into rows, pages and single models."""

    _engine: AsyncEngine

    async def _fetch_all(self, sql: str, **params: Any) -> list[RowMapping]:
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(text(sql), params)
                return list(result.mappings().all())
        except DBAPIError as exc:
            raise query_error(exc) from exc

    async def _fetch_scalar(self, sql: str, **params: Any) -> Any:
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(text(sql), params)
                return result.scalar()
        except DBAPIError as exc:
            raise query_error(exc) from exc

    async def _fetch_page(
        self,
        sql: str,
        pager: Pager,
        build: Callable[[Mapping[str, Any]], T],
        **params: Any,
    ) -> tuple[list[T], str]:
        """Run *sql* (which must end with :data:`PAGE_CLAUSE`) for one page."""
        offset, limit = pager.parse()
        rows = await self._fetch_all(sql, limit=limit + 1, offset=offset, **params)
        return paginate([build(row) for row in rows], offset, limit)

    async def _fetch_one(
        self,
        sql: str,
        build: Callable[[Mapping[str, Any]], T],
        resource: str,
        identifier: Any,
        **params: Any,
    ) -> T:
        rows = await self._fetch_all(sql, **params)
        if not rows:
            raise NotFoundError(resource, identifier)
        return build(rows[0])


__all__ = ["PAGE_CLAUSE", "QueryRunner", "query_error"]
