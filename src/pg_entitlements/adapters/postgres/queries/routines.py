"""Postgres adapter – functions and procedures (``pg_proc``)."""
from __future__ import annotations

from pg_entitlements.adapters.postgres.queries.base import PAGE_CLAUSE, QueryRunner
from pg_entitlements.application.pagination import Pager
from pg_entitlements.kernel.models import FunctionModel, ProcedureModel

BUILT_IN_SCHEMAS = ("pg_catalog", "information_schema")

_SELECT = """
SELECT p."oid"::bigint AS "oid",
       p."proname",
       n."nspname",
       p."proowner"::bigint AS "proowner",
       p."proacl"::text[] AS "proacl",
       pg_get_function_arguments(p."oid") AS "arguments",
       pg_get_function_identity_arguments(p."oid") AS "identity_arguments",
       pg_get_function_result(p."oid") AS "return_type"
FROM "pg_catalog"."pg_proc" p
         JOIN "pg_catalog"."pg_namespace" n ON n."oid" = p."pronamespace"
"""

LIST_ROUTINES = f"""{_SELECT}
WHERE p."prokind"::text = :prokind
  AND p."pronamespace" = :schema_id
  AND NOT (n."nspname" = ANY(:excluded))
ORDER BY p."proname", p."oid"
{PAGE_CLAUSE}
"""

GET_ROUTINE = f"""{_SELECT}
WHERE p."oid" = :routine_id
  AND p."prokind"::text = :prokind
"""


class RoutineQueries(QueryRunner):
    _skip_built_in_functions: bool

    async def list_functions(self, schema_id: int, pager: Pager) -> tuple[list[FunctionModel], str]:
        """Functions in a schema; built-in schemas are dropped when configured to skip them."""
        excluded = list(BUILT_IN_SCHEMAS) if self._skip_built_in_functions else []
        return await self._fetch_page(
            LIST_ROUTINES, pager, FunctionModel.from_row, prokind="f", schema_id=schema_id, excluded=excluded
        )

    async def get_function(self, function_id: int) -> FunctionModel:
        return await self._fetch_one(
            GET_ROUTINE, FunctionModel.from_row, "function", function_id, routine_id=function_id, prokind="f"
        )

    async def list_procedures(self, schema_id: int, pager: Pager) -> tuple[list[ProcedureModel], str]:
        return await self._fetch_page(
            LIST_ROUTINES, pager, ProcedureModel.from_row, prokind="p", schema_id=schema_id, excluded=[]
        )

    async def get_procedure(self, procedure_id: int) -> ProcedureModel:
        return await self._fetch_one(
            GET_ROUTINE, ProcedureModel.from_row, "procedure", procedure_id, routine_id=procedure_id, prokind="p"
        )


__all__ = ["BUILT_IN_SCHEMAS", "RoutineQueries"]
