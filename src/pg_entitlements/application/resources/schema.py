"""Application resources – schemas, listed under a database."""
from __future__ import annotations

from typing import Any, Sequence

from pg_entitlements.application.grants import CatalogClient
from pg_entitlements.application.pagination import Pager
from pg_entitlements.application.provisioning import ObjectKind, quote_identifier
from pg_entitlements.application.resources.base import ACLResourceService
from pg_entitlements.application.resources.database import DATABASE_TYPE
from pg_entitlements.kernel.identity import ResourceIdentity
from pg_entitlements.kernel.models import ResourceType, SchemaModel

SCHEMA_TYPE = "schema"


class SchemaService(ACLResourceService):
    resource_type = ResourceType(id=SCHEMA_TYPE, display_name="Schema")
    parent_type = DATABASE_TYPE
    object_kind = ObjectKind.SCHEMA

    async def _listing_client(self, parent: ResourceIdentity | None) -> CatalogClient:
        # the parent is a database, whose own oid is the tag of the client to use
        client, _ = await self._pool.get(str(self._require_parent(parent).object_id))
        return client

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_schemas(pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> SchemaModel:
        return await client.get_schema(identity.object_id)

    def _identity(self, model: SchemaModel, parent: ResourceIdentity | None) -> ResourceIdentity:
        return ResourceIdentity.scoped(SCHEMA_TYPE, str(self._require_parent(parent).object_id), model.id)

    def _target(self, model: SchemaModel) -> str:
        return quote_identifier(model.name)


__all__ = ["SCHEMA_TYPE", "SchemaService"]
