"""Postgres adapter – large object queries (``pg_largeobject_metadata``)."""
from __future__ import annotations

from pg_entitlements.adapters.postgres.queries.base import PAGE_CLAUSE, QueryRunner
from pg_entitlements.application.pagination import Pager
from pg_entitlements.kernel.models import LargeObjectModel

_SELECT = """
SELECT l."oid"::bigint AS "oid",
       l."lomowner"::bigint AS "lomowner",
       l."lomacl"::text[] AS "lomacl"
FROM "pg_catalog"."pg_largeobject_metadata" l
"""

LIST_LARGE_OBJECTS = f"""{_SELECT}
ORDER BY l."oid"
{PAGE_CLAUSE}
"""

GET_LARGE_OBJECT = f"""{_SELECT}
WHERE l."oid" = :large_object_id
"""


class LargeObjectQueries(QueryRunner):
    async def list_large_objects(self, pager: Pager) -> tuple[list[LargeObjectModel], str]:
        return await self._fetch_page(LIST_LARGE_OBJECTS, pager, LargeObjectModel.from_row)

    async def get_large_object(self, large_object_id: int) -> LargeObjectModel:
        return await self._fetch_one(
            GET_LARGE_OBJECT,
            LargeObjectModel.from_row,
            "large object",
            large_object_id,
            large_object_id=large_object_id,
        )


__all__ = ["LargeObjectQueries"]
