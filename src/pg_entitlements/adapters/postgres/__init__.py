"""Postgres adapter – catalog client, per-database pool and engine helpers."""
from pg_entitlements.adapters.postgres.client import PostgresClient
from pg_entitlements.adapters.postgres.engine import build_url, create_engine
from pg_entitlements.adapters.postgres.pool import (
    ClientDatabasesPool,
    ClientFactory,
    postgres_client_factory,
)

__all__ = [
    "ClientDatabasesPool",
    "ClientFactory",
    "PostgresClient",
    "build_url",
    "create_engine",
    "postgres_client_factory",
]
