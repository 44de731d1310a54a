"""Postgres adapter – tables, views and sequences (``pg_class``)."""
from __future__ import annotations

from pg_entitlements.adapters.postgres.queries.base import PAGE_CLAUSE, QueryRunner
from pg_entitlements.application.pagination import Pager
from pg_entitlements.kernel.models import SequenceModel, TableModel, ViewModel

TABLE_KINDS = ("r", "p")
VIEW_KINDS = ("v", "m")
SEQUENCE_KINDS = ("S",)

_SELECT = """
SELECT c."oid"::bigint AS "oid",
       c."relname",
       c."relowner"::bigint AS "relowner",
       n."nspname",
       c."relacl"::text[] AS "relacl"
FROM "pg_catalog"."pg_class" c
         JOIN "pg_catalog"."pg_namespace" n ON n."oid" = c."relnamespace"
"""

LIST_RELATIONS = f"""{_SELECT}
WHERE c."relnamespace" = :schema_id
  AND c."relkind"::text = ANY(:kinds)
ORDER BY c."relname"
{PAGE_CLAUSE}
"""

GET_RELATION = f"""{_SELECT}
WHERE c."oid" = :relation_id
  AND c."relkind"::text = ANY(:kinds)
"""


class RelationQueries(QueryRunner):
    async def list_tables(self, schema_id: int, pager: Pager) -> tuple[list[TableModel], str]:
        return await self._fetch_page(
            LIST_RELATIONS, pager, TableModel.from_row, schema_id=schema_id, kinds=list(TABLE_KINDS)
        )

    async def get_table(self, table_id: int) -> TableModel:
        return await self._fetch_one(
            GET_RELATION, TableModel.from_row, "table", table_id, relation_id=table_id, kinds=list(TABLE_KINDS)
        )

    async def list_views(self, schema_id: int, pager: Pager) -> tuple[list[ViewModel], str]:
        """Plain and materialized views."""
        return await self._fetch_page(
            LIST_RELATIONS, pager, ViewModel.from_row, schema_id=schema_id, kinds=list(VIEW_KINDS)
        )

    async def get_view(self, view_id: int) -> ViewModel:
        return await self._fetch_one(
            GET_RELATION, ViewModel.from_row, "view", view_id, relation_id=view_id, kinds=list(VIEW_KINDS)
        )

    async def list_sequences(self, schema_id: int, pager: Pager) -> tuple[list[SequenceModel], str]:
        return await self._fetch_page(
            LIST_RELATIONS, pager, SequenceModel.from_row, schema_id=schema_id, kinds=list(SEQUENCE_KINDS)
        )

    async def get_sequence(self, sequence_id: int) -> SequenceModel:
        return await self._fetch_one(
            GET_RELATION,
            SequenceModel.from_row,
            "sequence",
            sequence_id,
            relation_id=sequence_id,
            kinds=list(SEQUENCE_KINDS),
        )


__all__ = ["RelationQueries"]
