"""Postgres adapter – catalog query mixins, one per object family."""
from pg_entitlements.adapters.postgres.queries.base import QueryRunner, query_error
from pg_entitlements.adapters.postgres.queries.columns import ColumnQueries
from pg_entitlements.adapters.postgres.queries.databases import DatabaseQueries
from pg_entitlements.adapters.postgres.queries.large_objects import LargeObjectQueries
from pg_entitlements.adapters.postgres.queries.relations import RelationQueries
from pg_entitlements.adapters.postgres.queries.roles import RoleQueries
from pg_entitlements.adapters.postgres.queries.routines import RoutineQueries
from pg_entitlements.adapters.postgres.queries.schemas import SchemaQueries

__all__ = [
    "ColumnQueries",
    "DatabaseQueries",
    "LargeObjectQueries",
    "QueryRunner",
    "RelationQueries",
    "RoleQueries",
    "RoutineQueries",
    "SchemaQueries",
    "query_error",
]
