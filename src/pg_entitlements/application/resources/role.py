"""Application resources – roles and role membership."""
from __future__ import annotations

from pg_entitlements.application.grants import ROLE_TYPE, Entitlement, Grant, assignment_entitlement
from pg_entitlements.application.pagination import Page, Pager
from pg_entitlements.application.provisioning import grant_role, revoke_role
from pg_entitlements.application.resources.base import ResourceService, principal_identity
from pg_entitlements.kernel.errors import UnsupportedOperationError
from pg_entitlements.kernel.identity import ResourceIdentity
from pg_entitlements.kernel.models import Resource, ResourceType, RoleModel
from pg_entitlements.observability.logging import get_logger

logger = get_logger(__name__)

MEMBER = "member"
ADMIN = "admin"


class RoleService(ResourceService):
    """Roles are principals and, once they have members, groups.

    A group role offers two entitlements: ``member`` and ``admin`` (member
    with the admin option, able to grant the role on).
    """

    resource_type = ResourceType(id=ROLE_TYPE, display_name="Role", traits=("user", "group"))

    def make_resource(self, role: RoleModel) -> Resource:
        return Resource(
            id=ResourceIdentity.simple(ROLE_TYPE, role.id),
            display_name=role.name,
            profile={
                "role_name": role.name,
                "role_id": role.id,
                "superuser": role.superuser,
                "inherit": role.inherit,
                "create_role": role.create_role,
                "create_db": role.create_db,
                "can_login": role.can_login,
                "replication": role.replication,
                "bypass_rls": role.bypass_rls,
                "connection_limit": role.connection_limit,
            },
        )

    async def list(self, parent: ResourceIdentity | None, pager: Pager | None = None) -> Page[Resource]:
        if not self._check_parent(parent):
            return Page.empty()
        roles, next_cursor = await self._pool.default().list_roles(self._pager(pager))
        logger.info("resources.listed", resource_type=ROLE_TYPE, count=len(roles))
        return Page(items=[self.make_resource(r) for r in roles], next_cursor=next_cursor)

    def _membership_entitlements(self, resource: Resource) -> tuple[Entitlement, Entitlement]:
        member = assignment_entitlement(
            resource, MEMBER, "Member", f"Is assigned the {resource.display_name} role"
        )
        admin = assignment_entitlement(
            resource, ADMIN, "Admin", f"Can grant the {resource.display_name} role to other roles"
        )
        return member, admin

    async def entitlements(self, resource: Resource) -> list[Entitlement]:
        if not await self._pool.default().role_has_members(resource.id.object_id):
            return []
        return list(self._membership_entitlements(resource))

    async def grants(self, resource: Resource, pager: Pager | None = None) -> Page[Grant]:
        members, next_cursor = await self._pool.default().list_role_members(
            resource.id.object_id, self._pager(pager)
        )
        member, admin = self._membership_entitlements(resource)
        items = [
            Grant(entitlement=admin if m.is_role_admin else member, principal=ResourceIdentity.simple(ROLE_TYPE, m.id))
            for m in members
        ]
        return Page(items=items, next_cursor=next_cursor)

    async def _names(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> tuple[str, str, str]:
        member_id = principal_identity(principal)
        entitlement = self._entitlement_identity(entitlement_id)
        if entitlement.slug not in (MEMBER, ADMIN) or entitlement.grant:
            raise UnsupportedOperationError(
                f"unknown role entitlement {entitlement_id!r}",
                operation="grant",
                resource_type=ROLE_TYPE,
            )
        client = self._pool.default()
        role = await client.get_role(entitlement.resource.object_id)
        member = await client.get_role(member_id.object_id)
        return role.name, member.name, entitlement.slug

    async def grant(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None:
        role, member, slug = await self._names(principal, entitlement_id)
        await self._pool.default().execute(grant_role(role, member, with_admin_option=slug == ADMIN))

    async def revoke(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None:
        """Revoking ``admin`` keeps the membership and drops only the admin option."""
        role, member, slug = await self._names(principal, entitlement_id)
        await self._pool.default().execute(revoke_role(role, member, admin_option_only=slug == ADMIN))


__all__ = ["ADMIN", "MEMBER", "RoleService"]
