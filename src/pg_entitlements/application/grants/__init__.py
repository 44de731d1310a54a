"""Application grants – entitlements, effective grant resolution and ports."""
from pg_entitlements.application.grants.entitlements import (
    ROLE_TYPE,
    Entitlement,
    EntitlementPurpose,
    Grant,
    assignment_entitlement,
    entitlements_for_privileges,
    privilege_entitlements,
)
from pg_entitlements.application.grants.ports import CatalogClient, ClientPool, PrincipalDirectory
from pg_entitlements.application.grants.resolver import (
    EffectiveGrant,
    GrantResolver,
    grants_for_privilege_set,
    to_grants,
)

__all__ = [
    "CatalogClient",
    "ClientPool",
    "EffectiveGrant",
    "Entitlement",
    "EntitlementPurpose",
    "Grant",
    "GrantResolver",
    "PrincipalDirectory",
    "ROLE_TYPE",
    "assignment_entitlement",
    "entitlements_for_privileges",
    "grants_for_privilege_set",
    "privilege_entitlements",
    "to_grants",
]
