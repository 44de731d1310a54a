"""Application resources – tables, views and sequences inside a schema.

Views are granted through ``ON TABLE``, which PostgreSQL accepts for every
relation kind except sequences.
"""
from __future__ import annotations

from typing import Any, Sequence

from pg_entitlements.application.grants import CatalogClient
from pg_entitlements.application.pagination import Pager
from pg_entitlements.application.provisioning import ObjectKind, qualified_name
from pg_entitlements.application.resources.base import ACLResourceService
from pg_entitlements.application.resources.schema import SCHEMA_TYPE
from pg_entitlements.kernel.errors import InvalidIdentityError
from pg_entitlements.kernel.identity import ResourceIdentity
from pg_entitlements.kernel.models import RelationModel, ResourceType

TABLE_TYPE = "table"
VIEW_TYPE = "view"
SEQUENCE_TYPE = "sequence"


class SchemaObjectService(ACLResourceService):
    """Objects addressed as ``<type>:db<tag>:<oid>`` and listed under a schema."""

    parent_type = SCHEMA_TYPE

    def _identity(self, model: Any, parent: ResourceIdentity | None) -> ResourceIdentity:
        parent = self._require_parent(parent)
        database = parent.database
        if database is None:
            raise InvalidIdentityError(parent.encode(), "a database-scoped schema")
        return ResourceIdentity.scoped(self.resource_type.id, database, model.id)


class RelationService(SchemaObjectService):
    def _display_name(self, model: RelationModel) -> str:
        return f"{model.schema}.{model.name}"

    def _target(self, model: RelationModel) -> str:
        return qualified_name(*model.qualified_name)


class TableService(RelationService):
    resource_type = ResourceType(id=TABLE_TYPE, display_name="Table")
    object_kind = ObjectKind.TABLE

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_tables(self._require_parent(parent).object_id, pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> Any:
        return await client.get_table(identity.object_id)


class ViewService(RelationService):
    resource_type = ResourceType(id=VIEW_TYPE, display_name="View")
    object_kind = ObjectKind.TABLE

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_views(self._require_parent(parent).object_id, pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> Any:
        return await client.get_view(identity.object_id)


class SequenceService(RelationService):
    resource_type = ResourceType(id=SEQUENCE_TYPE, display_name="Sequence")
    object_kind = ObjectKind.SEQUENCE

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_sequences(self._require_parent(parent).object_id, pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> Any:
        return await client.get_sequence(identity.object_id)


__all__ = [
    "RelationService",
    "SEQUENCE_TYPE",
    "SchemaObjectService",
    "SequenceService",
    "TABLE_TYPE",
    "TableService",
    "VIEW_TYPE",
    "ViewService",
]
