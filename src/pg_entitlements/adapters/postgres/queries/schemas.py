"""Postgres adapter – schema queries (``pg_namespace``)."""
from __future__ import annotations

from typing import Sequence

from pg_entitlements.adapters.postgres.queries.base import PAGE_CLAUSE, QueryRunner
from pg_entitlements.application.pagination import Pager
from pg_entitlements.kernel.models import SchemaModel

_SELECT = """
SELECT n."oid"::bigint AS "oid",
       n."nspname",
       n."nspowner"::bigint AS "nspowner",
       n."nspacl"::text[] AS "nspacl"
FROM "pg_catalog"."pg_namespace" n
"""

LIST_SCHEMAS = f"""{_SELECT}
ORDER BY n."nspname"
{PAGE_CLAUSE}
"""

LIST_FILTERED_SCHEMAS = f"""{_SELECT}
WHERE n."nspname" = ANY(:schemas)
ORDER BY n."nspname"
{PAGE_CLAUSE}
"""

GET_SCHEMA = f"""{_SELECT}
WHERE n."oid" = :schema_id
"""


class SchemaQueries(QueryRunner):
    _schema_filter: Sequence[str]

    async def list_schemas(self, pager: Pager) -> tuple[list[SchemaModel], str]:
        """List schemas, restricted to the configured filter when one is set."""
        if self._schema_filter:
            return await self._fetch_page(
                LIST_FILTERED_SCHEMAS, pager, SchemaModel.from_row, schemas=list(self._schema_filter)
            )
        return await self._fetch_page(LIST_SCHEMAS, pager, SchemaModel.from_row)

    async def get_schema(self, schema_id: int) -> SchemaModel:
        return await self._fetch_one(GET_SCHEMA, SchemaModel.from_row, "schema", schema_id, schema_id=schema_id)


__all__ = ["SchemaQueries"]
