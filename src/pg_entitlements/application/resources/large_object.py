"""Application resources – large objects of the DSN's database (opt-in)."""
from __future__ import annotations

from typing import Any, Sequence

from pg_entitlements.application.grants import CatalogClient
from pg_entitlements.application.pagination import Page, Pager
from pg_entitlements.application.provisioning import ObjectKind
from pg_entitlements.application.resources.base import ACLResourceService
from pg_entitlements.kernel.identity import ResourceIdentity
from pg_entitlements.kernel.models import LargeObjectModel, Resource, ResourceType

LARGE_OBJECT_TYPE = "large_object"


class LargeObjectService(ACLResourceService):
    resource_type = ResourceType(id=LARGE_OBJECT_TYPE, display_name="Large Object")
    object_kind = ObjectKind.LARGE_OBJECT

    async def list(self, parent: ResourceIdentity | None, pager: Pager | None = None) -> Page[Resource]:
        if not self._options.include_large_objects:
            return Page.empty()
        return await super().list(parent, pager)

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        return await client.list_large_objects(pager)

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> LargeObjectModel:
        return await client.get_large_object(identity.object_id)

    def _identity(self, model: LargeObjectModel, parent: ResourceIdentity | None) -> ResourceIdentity:
        return ResourceIdentity.simple(LARGE_OBJECT_TYPE, model.id)

    def _display_name(self, model: LargeObjectModel) -> str:
        return f"Large Object {model.id}"

    def _target(self, model: LargeObjectModel) -> str:
        # large objects are addressed by a bare oid
        return str(model.id)


__all__ = ["LARGE_OBJECT_TYPE", "LargeObjectService"]
