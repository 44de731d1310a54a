"""Application resources – table columns (opt-in)."""
from __future__ import annotations

from typing import Any, Sequence

from pg_entitlements.application.grants import CatalogClient
from pg_entitlements.application.pagination import Page, Pager
from pg_entitlements.application.provisioning import ObjectKind, qualified_name
from pg_entitlements.application.resources.base import ACLResourceService
from pg_entitlements.application.resources.relations import TABLE_TYPE
from pg_entitlements.kernel.errors import InvalidIdentityError
from pg_entitlements.kernel.identity import COLUMN_TYPE, ResourceIdentity
from pg_entitlements.kernel.models import ColumnModel, Resource, ResourceType


class ColumnService(ACLResourceService):
    """Column privileges are granted on the table with a column list."""

    resource_type = ResourceType(id=COLUMN_TYPE, display_name="Column")
    parent_type = TABLE_TYPE
    object_kind = ObjectKind.TABLE

    async def list(self, parent: ResourceIdentity | None, pager: Pager | None = None) -> Page[Resource]:
        if not self._options.include_columns:
            return Page.empty()
        return await super().list(parent, pager)

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_columns(self._require_parent(parent).object_id, pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> ColumnModel:
        if identity.parent_id is None:
            raise InvalidIdentityError(identity.encode(), "<dbtag>:column:<tableId>:<colId>")
        return await client.get_column(identity.parent_id, identity.object_id)

    def _identity(self, model: ColumnModel, parent: ResourceIdentity | None) -> ResourceIdentity:
        parent = self._require_parent(parent)
        database = parent.database
        if database is None:
            raise InvalidIdentityError(parent.encode(), "a database-scoped table")
        return ResourceIdentity.column(database, model.table_id, model.id)

    def _display_name(self, model: ColumnModel) -> str:
        return f"{model.schema}.{model.table_name}.{model.name}"

    def _target(self, model: ColumnModel) -> str:
        return qualified_name(model.schema, model.table_name)

    def _columns(self, model: ColumnModel) -> Sequence[str]:
        return (model.name,)


__all__ = ["ColumnService"]
