"""Application grants – effective grant resolution.

For each candidate principal the effective privileges on an object are:

1. the object's PUBLIC entry, or its kind's default privileges when the
   object has no PUBLIC entry;
2. replaced by every privilege of the kind (all grantable) when the principal
   is a superuser or the owner;
3. plus the principal's own ACL entries;
4. plus, when the principal inherits, the entries of every role reachable
   through ``member_of``. A parent is walked further only if it also inherits.
"""
from __future__ import annotations

import collections
import dataclasses
from typing import Sequence

from pg_entitlements.application.grants.entitlements import (
    ROLE_TYPE,
    Entitlement,
    Grant,
    privilege_entitlements,
)
from pg_entitlements.application.grants.ports import PrincipalDirectory
from pg_entitlements.kernel.identity import ResourceIdentity, encode_entitlement, encode_grant
from pg_entitlements.kernel.models import ACLResource, Resource, RoleModel
from pg_entitlements.kernel.privileges import ACLEntry, Privilege, PrivilegeSet, parse_acls
from pg_entitlements.observability.logging import get_logger

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class EffectiveGrant:
    """A principal genuinely holding one privilege (or its grant option) on one resource."""

    principal_id: int
    resource_id: ResourceIdentity
    privilege: Privilege
    grantable: bool = False

    @property
    def principal(self) -> ResourceIdentity:
        return ResourceIdentity.simple(ROLE_TYPE, self.principal_id)

    @property
    def entitlement_id(self) -> str:
        return encode_entitlement(self.resource_id.encode(), self.privilege.slug, self.grantable)

    @property
    def id(self) -> str:
        return encode_grant(self.entitlement_id, self.principal.encode())


def grants_for_privilege_set(
    principal_id: int,
    resource_id: ResourceIdentity,
    privileges: PrivilegeSet,
    grant_privileges: PrivilegeSet,
) -> list[EffectiveGrant]:
    """Emit, per privilege in order, the plain grant and then the grant-option grant."""
    result: list[EffectiveGrant] = []
    for privilege in Privilege:
        if privileges.has(privilege):
            result.append(EffectiveGrant(principal_id, resource_id, privilege))
        if grant_privileges.has(privilege):
            result.append(EffectiveGrant(principal_id, resource_id, privilege, grantable=True))
    return result


class GrantResolver:
    """Computes effective grants for a page of principals on one ACL-bearing object.

    Role lookups made while walking memberships go through *directory* and are
    memoised for the duration of one :meth:`resolve` call only.
    """

    def __init__(self, directory: PrincipalDirectory) -> None:
        self._directory = directory

    async def resolve(
        self,
        resource_id: ResourceIdentity,
        obj: ACLResource,
        principals: Sequence[RoleModel],
    ) -> list[EffectiveGrant]:
        """Resolve every principal; any malformed ACL entry aborts the whole call."""
        entries = parse_acls(list(obj.acls))

        public: ACLEntry | None = None
        by_grantee: dict[str, list[ACLEntry]] = collections.defaultdict(list)
        for entry in entries:
            if entry.is_public:
                public = entry
            else:
                by_grantee[entry.grantee].append(entry)
        if public is None:
            public = ACLEntry.from_privilege_sets(obj.default_privileges())

        known: dict[int, RoleModel] = {p.id: p for p in principals}
        result: list[EffectiveGrant] = []
        for principal in principals:
            privileges = public.privileges
            grant_privileges = public.grant_privileges

            if principal.superuser or principal.id == obj.owner_id:
                privileges = obj.all_privileges()
                grant_privileges = obj.all_privileges()

            contributing = list(by_grantee.get(principal.name, ()))
            if principal.inherit:
                contributing.extend(await self._inherited_entries(principal, by_grantee, known))

            for entry in contributing:
                privileges = privileges | entry.privileges
                grant_privileges = grant_privileges | entry.grant_privileges

            result.extend(grants_for_privilege_set(principal.id, resource_id, privileges, grant_privileges))

        logger.debug(
            "grants.resolved",
            resource=resource_id.encode(),
            principals=len(principals),
            grants=len(result),
        )
        return result

    async def _inherited_entries(
        self,
        principal: RoleModel,
        by_grantee: dict[str, list[ACLEntry]],
        known: dict[int, RoleModel],
    ) -> list[ACLEntry]:
        acquired: list[ACLEntry] = []
        visited = {principal.id}
        pending = collections.deque(principal.member_of)
        while pending:
            parent_id = pending.popleft()
            if parent_id in visited:
                continue
            visited.add(parent_id)

            parent = known.get(parent_id)
            if parent is None:
                parent = await self._directory.get_principal(parent_id)
                known[parent_id] = parent

            acquired.extend(by_grantee.get(parent.name, ()))
            if parent.inherit:
                pending.extend(parent.member_of)
        return acquired


def to_grants(resource: Resource, effective: Sequence[EffectiveGrant]) -> list[Grant]:
    """Attach entitlement descriptions to resolved grants."""
    pairs: dict[Privilege, tuple[Entitlement, Entitlement]] = {}
    result: list[Grant] = []
    for item in effective:
        if item.privilege not in pairs:
            pairs[item.privilege] = privilege_entitlements(resource, item.privilege)
        holds, can_grant = pairs[item.privilege]
        result.append(Grant(entitlement=can_grant if item.grantable else holds, principal=item.principal))
    return result


__all__ = ["EffectiveGrant", "GrantResolver", "grants_for_privilege_set", "to_grants"]
