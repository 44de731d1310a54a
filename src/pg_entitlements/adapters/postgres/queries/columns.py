"""Postgres adapter – column queries (``pg_attribute``).

The owning table's owner, name and schema ride along with each column.
"""
from __future__ import annotations

from pg_entitlements.adapters.postgres.queries.base import PAGE_CLAUSE, QueryRunner
from pg_entitlements.application.pagination import Pager
from pg_entitlements.kernel.models import ColumnModel

_SELECT = """
SELECT a."attnum"::bigint AS "attnum",
       a."attname",
       a."attrelid"::bigint AS "attrelid",
       a."attacl"::text[] AS "attacl",
       c."relname",
       c."relowner"::bigint AS "relowner",
       n."nspname"
FROM "pg_catalog"."pg_attribute" a
         JOIN "pg_catalog"."pg_class" c ON c."oid" = a."attrelid"
         JOIN "pg_catalog"."pg_namespace" n ON n."oid" = c."relnamespace"
WHERE a."attrelid" = :table_id
  AND a."attnum" > 0
  AND NOT a."attisdropped"
"""

LIST_COLUMNS = f"""{_SELECT}
ORDER BY a."attnum"
{PAGE_CLAUSE}
"""

GET_COLUMN = f"""{_SELECT}
  AND a."attnum" = :column_id
"""


class ColumnQueries(QueryRunner):
    async def list_columns(self, table_id: int, pager: Pager) -> tuple[list[ColumnModel], str]:
        return await self._fetch_page(LIST_COLUMNS, pager, ColumnModel.from_row, table_id=table_id)

    async def get_column(self, table_id: int, column_id: int) -> ColumnModel:
        return await self._fetch_one(
            GET_COLUMN,
            ColumnModel.from_row,
            "column",
            f"{table_id}.{column_id}",
            table_id=table_id,
            column_id=column_id,
        )


__all__ = ["ColumnQueries"]
