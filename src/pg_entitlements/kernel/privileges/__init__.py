"""Kernel privileges – privilege kinds, bitmask sets and the native ACL codec."""
from pg_entitlements.kernel.privileges.acl import ACLEntry, parse_acls
from pg_entitlements.kernel.privileges.privilege import (
    ALL_PRIVILEGES,
    EMPTY_PRIVILEGES,
    Privilege,
    PrivilegeSet,
)

__all__ = [
    "ACLEntry",
    "ALL_PRIVILEGES",
    "EMPTY_PRIVILEGES",
    "Privilege",
    "PrivilegeSet",
    "parse_acls",
]
