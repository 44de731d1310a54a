"""Postgres adapter – database queries (``pg_database``)."""
from __future__ import annotations

from pg_entitlements.adapters.postgres.queries.base import PAGE_CLAUSE, QueryRunner
from pg_entitlements.application.pagination import Pager
from pg_entitlements.kernel.models import DatabaseModel

_SELECT = """
SELECT d."oid"::bigint AS "oid",
       d."datname",
       d."datdba"::bigint AS "datdba",
       d."datacl"::text[] AS "datacl"
FROM "pg_catalog"."pg_database" d
"""

LIST_DATABASES = f"""{_SELECT}
ORDER BY d."oid"
{PAGE_CLAUSE}
"""

GET_DATABASE = f"""{_SELECT}
WHERE d."oid" = :database_id
"""

GET_DATABASE_BY_NAME = f"""{_SELECT}
WHERE d."datname" = :name
"""


class DatabaseQueries(QueryRunner):
    async def list_databases(self, pager: Pager) -> tuple[list[DatabaseModel], str]:
        return await self._fetch_page(LIST_DATABASES, pager, DatabaseModel.from_row)

    async def get_database(self, database_id: int) -> DatabaseModel:
        return await self._fetch_one(
            GET_DATABASE, DatabaseModel.from_row, "database", database_id, database_id=database_id
        )

    async def get_database_by_name(self, name: str) -> DatabaseModel:
        return await self._fetch_one(GET_DATABASE_BY_NAME, DatabaseModel.from_row, "database", name, name=name)


__all__ = ["DatabaseQueries"]
