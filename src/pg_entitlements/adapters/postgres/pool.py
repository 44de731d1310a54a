"""Postgres adapter – ClientDatabasesPool.

Holds one client per database name. The client for the DSN itself (the
*default* client) lives outside the map and answers catalog-of-databases
questions such as "which database has oid 16384".

Each database name has its own :class:`asyncio.Lock`, so the
check/validate/reconnect/insert sequence for one database never blocks a
``get`` for another.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Sequence

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from pg_entitlements.adapters.postgres.client import PostgresClient
from pg_entitlements.application.grants.ports import CatalogClient
from pg_entitlements.kernel.errors import (
    ConnectionError,
    DatabaseNotFoundError,
    InfrastructureError,
    NotFoundError,
)
from pg_entitlements.observability.logging import get_logger, redact_dsn

logger = get_logger(__name__)

ClientFactory = Callable[[str | None], Awaitable[CatalogClient]]
"""Connects to the named database, or to the DSN's own database for ``None``."""


def postgres_client_factory(
    dsn: str,
    *,
    connect_timeout: float = 10.0,
    schema_filter: Sequence[str] = (),
    skip_built_in_functions: bool = False,
) -> ClientFactory:
    async def _connect(database: str | None) -> CatalogClient:
        return await PostgresClient.connect(
            dsn,
            database=database,
            connect_timeout=connect_timeout,
            schema_filter=schema_filter,
            skip_built_in_functions=skip_built_in_functions,
        )

    return _connect


class ClientDatabasesPool:
    """Lazily connected clients keyed by database name.

    Use :meth:`create` rather than the constructor; it establishes the
    default client eagerly so a bad DSN fails at start-up.
    """

    def __init__(self, default_client: CatalogClient, default_database: str, factory: ClientFactory) -> None:
        self._default = default_client
        self._default_database = default_database
        self._factory = factory
        self._clients: dict[str, CatalogClient] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @classmethod
    async def create(
        cls,
        dsn: str,
        *,
        connect_timeout: float = 10.0,
        schema_filter: Sequence[str] = (),
        skip_built_in_functions: bool = False,
        factory: ClientFactory | None = None,
    ) -> "ClientDatabasesPool":
        default_database = make_url(dsn).database or ""
        factory = factory or postgres_client_factory(
            dsn,
            connect_timeout=connect_timeout,
            schema_filter=schema_filter,
            skip_built_in_functions=skip_built_in_functions,
        )
        try:
            default_client = await factory(None)
        except ConnectionError:
            logger.error("pool.default_connect_failed", server=redact_dsn(dsn))
            raise
        if default_database:
            logger.info("pool.default_database", database=default_database)
        return cls(default_client, default_database, factory)

    def default(self) -> CatalogClient:
        """Client for the DSN as given; used to enumerate databases and roles."""
        return self._default

    def default_database(self) -> str:
        """Database named in the DSN, or ``""`` when the DSN names none."""
        return self._default_database

    async def get(self, database: str) -> tuple[CatalogClient, str]:
        """Return a live client for a database tag and the database's name.

        A numeric tag is a database oid. Anything else means the DSN's own
        database, which must then exist.
        """
        if not (database.isascii() and database.isdigit()):
            if not self._default_database:
                raise DatabaseNotFoundError(database)
            return self._default, self._default_database

        try:
            model = await self._default.get_database(int(database))
        except NotFoundError as exc:
            raise DatabaseNotFoundError(database, cause=exc) from exc
        name = model.name
        if name == self._default_database:
            return self._default, name

        lock = self._locks.setdefault(name, asyncio.Lock())
        async with lock:
            client = self._clients.get(name)
            if client is not None:
                try:
                    await client.validate_connection()
                    return client, name
                except InfrastructureError as exc:
                    logger.error("pool.connection_invalid", database=name, error=str(exc))
                    self._clients.pop(name, None)
                    await self._dispose(name, client)

            try:
                client = await self._factory(name)
            except (SQLAlchemyError, OSError) as exc:
                raise ConnectionError(name, cause=exc) from exc
            self._clients[name] = client
            logger.info("pool.connected", database=name)
            return client, name

    async def close(self) -> None:
        """Dispose every pooled client and the default client."""
        clients, self._clients = self._clients, {}
        for name, client in clients.items():
            await self._dispose(name, client)
        await self._dispose(self._default_database, self._default)

    async def _dispose(self, name: str, client: CatalogClient) -> None:
        try:
            await client.close()
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("pool.close_failed", database=name, error=str(exc))


__all__ = ["ClientDatabasesPool", "ClientFactory", "postgres_client_factory"]
