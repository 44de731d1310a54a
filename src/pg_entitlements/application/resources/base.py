"""Application resources – the service contract shared by every resource kind.

A service lists resources of its kind under a parent, describes their
entitlements, resolves who holds them, and issues GRANT/REVOKE statements.
Services for ACL-bearing objects derive from :class:`ACLResourceService`
and only describe how to fetch, name and target their objects.
"""
from __future__ import annotations

import abc
import dataclasses
from typing import Any, ClassVar, Sequence

from pg_entitlements.application.grants import (
    ROLE_TYPE,
    CatalogClient,
    ClientPool,
    Entitlement,
    Grant,
    GrantResolver,
    entitlements_for_privileges,
    to_grants,
)
from pg_entitlements.application.pagination import Page, Pager
from pg_entitlements.application.provisioning import (
    ObjectKind,
    grant_privilege,
    normalize_privilege,
    revoke_privilege,
)
from pg_entitlements.kernel.errors import UnsupportedOperationError
from pg_entitlements.kernel.identity import EntitlementIdentity, ResourceIdentity
from pg_entitlements.kernel.models import ACLResource, Resource, ResourceType, RoleModel
from pg_entitlements.kernel.privileges import Privilege
from pg_entitlements.observability.logging import get_logger

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class ServiceOptions:
    """Listing switches shared by all services."""

    page_size: int = 100
    include_columns: bool = False
    include_large_objects: bool = False
    sync_all_databases: bool = False


def principal_identity(principal: Resource | ResourceIdentity) -> ResourceIdentity:
    """Only roles can receive grants."""
    identity = principal.id if isinstance(principal, Resource) else principal
    if identity.resource_type != ROLE_TYPE:
        raise UnsupportedOperationError(
            f"only roles can be granted entitlements, got {identity.resource_type}",
            operation="grant",
            resource_type=identity.resource_type,
        )
    return identity


class ResourceService(abc.ABC):
    """One resource kind's listing, entitlement, grant and provisioning operations."""

    resource_type: ClassVar[ResourceType]
    parent_type: ClassVar[str | None] = None

    def __init__(self, pool: ClientPool, options: ServiceOptions | None = None) -> None:
        self._pool = pool
        self._options = options or ServiceOptions()

    # -- helpers -------------------------------------------------------------

    def _pager(self, pager: Pager | None) -> Pager:
        pager = pager or Pager()
        if pager.size > 0:
            return pager
        return Pager(token=pager.token, size=self._options.page_size)

    async def _client_for(self, identity: ResourceIdentity) -> CatalogClient:
        if identity.database is None:
            return self._pool.default()
        client, _ = await self._pool.get(identity.database)
        return client

    def _check_parent(self, parent: ResourceIdentity | None) -> bool:
        """True when *parent* is a valid scope to list under.

        A child kind listed without a parent has nothing to list; any other
        mismatch raises :class:`UnsupportedOperationError`.
        """
        if self.parent_type is None:
            if parent is not None:
                raise UnsupportedOperationError(
                    f"{self.resource_type.id} is top-level, got parent {parent.resource_type}",
                    operation="list",
                    resource_type=self.resource_type.id,
                )
            return True
        if parent is None:
            return False
        if parent.resource_type != self.parent_type:
            raise UnsupportedOperationError(
                f"{self.resource_type.id} cannot be listed under {parent.resource_type}",
                operation="list",
                resource_type=self.resource_type.id,
            )
        return True

    def _require_parent(self, parent: ResourceIdentity | None) -> ResourceIdentity:
        if parent is None:
            raise UnsupportedOperationError(
                f"{self.resource_type.id} must be listed under a {self.parent_type}",
                operation="list",
                resource_type=self.resource_type.id,
            )
        return parent

    def _entitlement_identity(self, entitlement_id: str) -> EntitlementIdentity:
        entitlement = EntitlementIdentity.parse(entitlement_id)
        if entitlement.resource.resource_type != self.resource_type.id:
            raise UnsupportedOperationError(
                f"entitlement {entitlement_id!r} does not belong to a {self.resource_type.id}",
                operation="grant",
                resource_type=self.resource_type.id,
            )
        return entitlement

    # -- operations ----------------------------------------------------------

    @abc.abstractmethod
    async def list(self, parent: ResourceIdentity | None, pager: Pager | None = None) -> Page[Resource]: ...

    @abc.abstractmethod
    async def entitlements(self, resource: Resource) -> list[Entitlement]: ...

    @abc.abstractmethod
    async def grants(self, resource: Resource, pager: Pager | None = None) -> Page[Grant]: ...

    @abc.abstractmethod
    async def grant(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None: ...

    @abc.abstractmethod
    async def revoke(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None: ...


class ACLResourceService(ResourceService):
    """Shared behaviour for objects whose privileges live in an ACL column."""

    object_kind: ClassVar[ObjectKind]

    @abc.abstractmethod
    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> Any:
        """Load the catalog model named by *identity*."""

    @abc.abstractmethod
    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]: ...

    @abc.abstractmethod
    def _identity(self, model: Any, parent: ResourceIdentity | None) -> ResourceIdentity: ...

    @abc.abstractmethod
    def _target(self, model: Any) -> str:
        """Quoted object reference placed after ``ON <KIND>``."""

    def _display_name(self, model: Any) -> str:
        return model.name

    def _columns(self, model: Any) -> Sequence[str]:
        return ()

    async def _listing_client(self, parent: ResourceIdentity | None) -> CatalogClient:
        """Client for the database the children of *parent* live in."""
        if parent is None:
            return self._pool.default()
        return await self._client_for(parent)

    def make_resource(self, model: Any, parent: ResourceIdentity | None) -> Resource:
        return Resource(id=self._identity(model, parent), display_name=self._display_name(model), parent=parent)

    async def list(self, parent: ResourceIdentity | None, pager: Pager | None = None) -> Page[Resource]:
        if not self._check_parent(parent):
            return Page.empty()
        client = await self._listing_client(parent)
        models, next_cursor = await self._list_models(client, parent, self._pager(pager))
        logger.info("resources.listed", resource_type=self.resource_type.id, count=len(models))
        return Page(items=[self.make_resource(m, parent) for m in models], next_cursor=next_cursor)

    async def entitlements(self, resource: Resource) -> list[Entitlement]:
        client = await self._client_for(resource.id)
        model: ACLResource = await self._fetch(client, resource.id)
        return entitlements_for_privileges(resource, model.all_privileges())

    async def grants(self, resource: Resource, pager: Pager | None = None) -> Page[Grant]:
        """Resolve one page of principals against the resource's ACL."""
        client = await self._client_for(resource.id)
        model: ACLResource = await self._fetch(client, resource.id)
        principals, next_cursor = await client.list_principals(self._pager(pager))
        effective = await GrantResolver(client).resolve(resource.id, model, principals)
        items = to_grants(resource, effective) + self._extra_grants(resource, principals)
        return Page(items=items, next_cursor=next_cursor)

    def _extra_grants(self, resource: Resource, principals: Sequence[RoleModel]) -> list[Grant]:
        """Grants that do not come from the ACL, for the same page of principals."""
        return []

    async def _resolve_privilege(
        self, principal: Resource | ResourceIdentity, entitlement_id: str
    ) -> tuple[CatalogClient, Any, RoleModel, Privilege, bool]:
        role_id = principal_identity(principal)
        entitlement = self._entitlement_identity(entitlement_id)
        client = await self._client_for(entitlement.resource)
        model = await self._fetch(client, entitlement.resource)
        privilege = normalize_privilege(entitlement.slug, model.all_privileges(), self.resource_type.id)
        role = await client.get_role(role_id.object_id)
        return client, model, role, privilege, entitlement.grant

    async def grant(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None:
        client, model, role, privilege, grant_option = await self._resolve_privilege(principal, entitlement_id)
        await client.execute(
            grant_privilege(
                privilege,
                self.object_kind,
                self._target(model),
                role.name,
                with_grant_option=grant_option,
                columns=self._columns(model),
            )
        )

    async def revoke(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None:
        """Revoke the privilege, or only its grant option for a ``:grant`` entitlement."""
        client, model, role, privilege, grant_option = await self._resolve_privilege(principal, entitlement_id)
        await client.execute(
            revoke_privilege(
                privilege,
                self.object_kind,
                self._target(model),
                role.name,
                grant_option_only=grant_option,
                columns=self._columns(model),
            )
        )


__all__ = [
    "ACLResourceService",
    "ResourceService",
    "ServiceOptions",
    "principal_identity",
]
