"""Connector wiring – settings in, pool and resource services out."""
from __future__ import annotations

from pg_entitlements.adapters.postgres import ClientDatabasesPool, ClientFactory
from pg_entitlements.application.grants import ClientPool
from pg_entitlements.application.resources import SERVICE_CLASSES, ResourceService, ServiceOptions
from pg_entitlements.config import ConnectorSettings
from pg_entitlements.kernel.errors import UnsupportedOperationError
from pg_entitlements.observability.logging import JsonLoggerFactory, get_logger

logger = get_logger(__name__)


class EntitlementConnector:
    """Owns the client pool and one service per resource type.

    Usage::

        connector = await EntitlementConnector.from_settings(settings)
        try:
            page = await connector.service("database").list(None)
        finally:
            await connector.close()
    """

    def __init__(self, pool: ClientPool, options: ServiceOptions | None = None) -> None:
        self._pool = pool
        self._options = options or ServiceOptions()
        self._services: dict[str, ResourceService] = {
            cls.resource_type.id: cls(pool, self._options) for cls in SERVICE_CLASSES
        }

    @classmethod
    async def from_settings(
        cls,
        settings: ConnectorSettings,
        *,
        factory: ClientFactory | None = None,
        configure_logging: bool = False,
    ) -> "EntitlementConnector":
        if configure_logging:
            JsonLoggerFactory.configure(settings.log_level)
        pool = await ClientDatabasesPool.create(
            settings.dsn,
            connect_timeout=settings.connect_timeout,
            schema_filter=settings.schemas,
            skip_built_in_functions=settings.skip_built_in_functions,
            factory=factory,
        )
        options = ServiceOptions(
            page_size=settings.page_size,
            include_columns=settings.include_columns,
            include_large_objects=settings.include_large_objects,
            sync_all_databases=settings.sync_all_databases,
        )
        logger.info("connector.ready", default_database=pool.default_database() or None)
        return cls(pool, options)

    @property
    def pool(self) -> ClientPool:
        return self._pool

    def services(self) -> list[ResourceService]:
        return list(self._services.values())

    def service(self, resource_type: str) -> ResourceService:
        try:
            return self._services[resource_type]
        except KeyError:
            raise UnsupportedOperationError(
                f"unknown resource type {resource_type!r}",
                operation="service",
                resource_type=resource_type,
            ) from None

    async def close(self) -> None:
        await self._pool.close()


__all__ = ["EntitlementConnector"]
