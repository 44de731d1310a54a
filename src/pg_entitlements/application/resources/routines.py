"""Application resources – functions and procedures.

Overloads share a name, so GRANT targets carry the identity argument list
read from the catalog.
"""
from __future__ import annotations

from typing import Any, Sequence

from pg_entitlements.application.grants import CatalogClient
from pg_entitlements.application.pagination import Pager
from pg_entitlements.application.provisioning import ObjectKind, routine_target
from pg_entitlements.application.resources.relations import SchemaObjectService
from pg_entitlements.kernel.identity import ResourceIdentity
from pg_entitlements.kernel.models import ResourceType, RoutineModel

FUNCTION_TYPE = "function"
PROCEDURE_TYPE = "procedure"


class RoutineService(SchemaObjectService):
    def _display_name(self, model: RoutineModel) -> str:
        return f"{model.schema}.{model.signature}"

    def _target(self, model: RoutineModel) -> str:
        return routine_target(model.schema, model.name, model.identity_arguments)


class FunctionService(RoutineService):
    resource_type = ResourceType(id=FUNCTION_TYPE, display_name="Function")
    object_kind = ObjectKind.FUNCTION

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_functions(self._require_parent(parent).object_id, pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> Any:
        return await client.get_function(identity.object_id)


class ProcedureService(RoutineService):
    resource_type = ResourceType(id=PROCEDURE_TYPE, display_name="Procedure")
    object_kind = ObjectKind.PROCEDURE

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_procedures(self._require_parent(parent).object_id, pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> Any:
        return await client.get_procedure(identity.object_id)


__all__ = ["FUNCTION_TYPE", "FunctionService", "PROCEDURE_TYPE", "ProcedureService", "RoutineService"]
