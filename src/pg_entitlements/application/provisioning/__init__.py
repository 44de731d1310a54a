"""Application provisioning – native authorization statements."""
from pg_entitlements.application.provisioning.statements import (
    ObjectKind,
    alter_role_attribute,
    grant_privilege,
    grant_role,
    normalize_privilege,
    qualified_name,
    quote_identifier,
    revoke_privilege,
    revoke_role,
    routine_target,
)

__all__ = [
    "ObjectKind",
    "alter_role_attribute",
    "grant_privilege",
    "grant_role",
    "normalize_privilege",
    "qualified_name",
    "quote_identifier",
    "revoke_privilege",
    "revoke_role",
    "routine_target",
]
