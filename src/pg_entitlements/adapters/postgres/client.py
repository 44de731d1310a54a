"""Postgres adapter – PostgresClient, one async engine bound to one database."""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from pg_entitlements.adapters.postgres.engine import build_url, create_engine
from pg_entitlements.adapters.postgres.queries import (
    ColumnQueries,
    DatabaseQueries,
    LargeObjectQueries,
    RelationQueries,
    RoleQueries,
    RoutineQueries,
    SchemaQueries,
    query_error,
)
from pg_entitlements.kernel.errors import ConnectionError
from pg_entitlements.observability.logging import get_logger

logger = get_logger(__name__)


class PostgresClient(
    RoleQueries,
    DatabaseQueries,
    SchemaQueries,
    RelationQueries,
    ColumnQueries,
    RoutineQueries,
    LargeObjectQueries,
):
    """Catalog reader and statement executor for a single database.

    Usage::

        client = await PostgresClient.connect("postgres://admin:pw@db/main")
        roles, cursor = await client.list_roles(Pager())
        await client.close()
    """

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        schema_filter: Sequence[str] = (),
        skip_built_in_functions: bool = False,
    ) -> None:
        self._engine = engine
        self._schema_filter = tuple(schema_filter)
        self._skip_built_in_functions = skip_built_in_functions

    @classmethod
    async def connect(
        cls,
        url: str | URL,
        *,
        database: str | None = None,
        connect_timeout: float = 10.0,
        schema_filter: Sequence[str] = (),
        skip_built_in_functions: bool = False,
    ) -> "PostgresClient":
        """Create the engine and prove it can reach the server.

        Raises :class:`ConnectionError` (wrapping the driver error) otherwise.
        """
        engine = create_engine(build_url(url, database), connect_timeout=connect_timeout)
        client = cls(engine, schema_filter=schema_filter, skip_built_in_functions=skip_built_in_functions)
        try:
            await client.validate_connection()
        except ConnectionError:
            await engine.dispose()
            raise
        logger.info("postgres.connected", database=client.database_name)
        return client

    @property
    def database_name(self) -> str:
        return self._engine.url.database or ""

    async def validate_connection(self) -> None:
        """Round-trip ``SELECT 1``; raises :class:`ConnectionError` if the server is unreachable."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            raise ConnectionError(self.database_name, cause=exc) from exc

    async def execute(self, statement: str) -> None:
        """Run one native statement in its own transaction.

        The text is sent as-is so quoted identifiers containing ``:`` are not
        mistaken for bind parameters.
        """
        logger.debug("postgres.execute", query=statement, database=self.database_name)
        try:
            async with self._engine.begin() as conn:
                await conn.exec_driver_sql(statement)
        except DBAPIError as exc:
            raise query_error(exc) from exc

    async def close(self) -> None:
        await self._engine.dispose()


__all__ = ["PostgresClient"]
