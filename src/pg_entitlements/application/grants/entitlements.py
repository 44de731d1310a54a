"""Application grants – entitlements and assigned grants.

Every privilege yields two independent entitlements on a resource: holding it
and being able to grant it on.
"""
from __future__ import annotations

import dataclasses
from enum import Enum

from pg_entitlements.kernel.identity import ResourceIdentity, encode_entitlement, encode_grant
from pg_entitlements.kernel.models import Resource
from pg_entitlements.kernel.privileges import Privilege, PrivilegeSet

ROLE_TYPE = "role"


class EntitlementPurpose(str, Enum):
    PERMISSION = "permission"
    ASSIGNMENT = "assignment"


@dataclasses.dataclass(frozen=True)
class Entitlement:
    """Something a principal can hold on a resource.

    ``name`` is the component written into the id; the grant-option variant
    shares it and is distinguished by ``grant``.
    """

    resource: Resource
    name: str
    display_name: str
    description: str = ""
    grant: bool = False
    purpose: EntitlementPurpose = EntitlementPurpose.PERMISSION
    grantable_to: tuple[str, ...] = (ROLE_TYPE,)

    @property
    def id(self) -> str:
        return encode_entitlement(self.resource.key, self.name, self.grant)

    @property
    def slug(self) -> str:
        return f"grant {self.name}" if self.grant else self.name


@dataclasses.dataclass(frozen=True)
class Grant:
    """A principal holding an entitlement."""

    entitlement: Entitlement
    principal: ResourceIdentity

    @property
    def id(self) -> str:
        return encode_grant(self.entitlement.id, self.principal.encode())


def privilege_entitlements(resource: Resource, privilege: Privilege) -> tuple[Entitlement, Entitlement]:
    """Return the ``(holds, can grant)`` entitlement pair for one privilege."""
    name = privilege.display_name
    holds = Entitlement(
        resource=resource,
        name=privilege.slug,
        display_name=name,
        description=f"Has {name} privileges on {resource.display_name}",
    )
    can_grant = Entitlement(
        resource=resource,
        name=privilege.slug,
        display_name=f"Can grant {name}",
        description=f"Can grant {name} privileges on {resource.display_name}",
        grant=True,
    )
    return holds, can_grant


def entitlements_for_privileges(resource: Resource, privileges: PrivilegeSet) -> list[Entitlement]:
    """Both entitlements for every held privilege, in privilege order."""
    result: list[Entitlement] = []
    for privilege in privileges:
        result.extend(privilege_entitlements(resource, privilege))
    return result


def assignment_entitlement(resource: Resource, name: str, display_name: str, description: str = "") -> Entitlement:
    """A non-privilege entitlement such as role membership or a role attribute."""
    return Entitlement(
        resource=resource,
        name=name,
        display_name=display_name,
        description=description,
        purpose=EntitlementPurpose.ASSIGNMENT,
    )


__all__ = [
    "Entitlement",
    "EntitlementPurpose",
    "Grant",
    "ROLE_TYPE",
    "assignment_entitlement",
    "entitlements_for_privileges",
    "privilege_entitlements",
]
