"""Application provisioning – native GRANT / REVOKE / ALTER ROLE statements.

Every identifier is double-quoted with embedded quotes doubled, using the
PostgreSQL dialect's own identifier preparer. Privilege names arriving from
callers are normalised and checked against the object kind before use.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from sqlalchemy.dialects import postgresql

from pg_entitlements.kernel.errors import UnsupportedOperationError
from pg_entitlements.kernel.models import RoleAttribute
from pg_entitlements.kernel.privileges import Privilege, PrivilegeSet

_preparer = postgresql.dialect().identifier_preparer


class ObjectKind(str, Enum):
    """Object class keyword used after ``ON``."""

    DATABASE = "DATABASE"
    SCHEMA = "SCHEMA"
    TABLE = "TABLE"
    SEQUENCE = "SEQUENCE"
    FUNCTION = "FUNCTION"
    PROCEDURE = "PROCEDURE"
    LARGE_OBJECT = "LARGE OBJECT"


def quote_identifier(name: str) -> str:
    """Always quote, so mixed-case and reserved names survive."""
    return _preparer.quote_identifier(name)


def qualified_name(*parts: str) -> str:
    return ".".join(quote_identifier(part) for part in parts)


def routine_target(schema: str, name: str, identity_arguments: str) -> str:
    """``schema.name(args)``; the argument list comes from the catalog, not from callers."""
    return f"{qualified_name(schema, name)}({identity_arguments})"


def normalize_privilege(name: str, allowed: PrivilegeSet, resource_type: str) -> Privilege:
    """Map a caller-supplied privilege name to a :class:`Privilege` valid for the kind.

    Dashes and double quotes are stripped and the result lower-cased before
    the lookup, so ``"Alter-System"`` and ``alter system`` name the same kind.
    """
    cleaned = name.replace("-", "").replace('"', "").lower()
    privilege = Privilege.from_name(cleaned)
    if privilege is None or not allowed.has(privilege):
        raise UnsupportedOperationError(
            f"privilege {name!r} is not supported on {resource_type}",
            operation="grant",
            resource_type=resource_type,
        )
    return privilege


def _privilege_clause(privilege: Privilege, columns: Sequence[str]) -> str:
    clause = quote_identifier(privilege.display_name.lower())
    if columns:
        clause += " (" + ", ".join(quote_identifier(c) for c in columns) + ")"
    return clause


def grant_privilege(
    privilege: Privilege,
    kind: ObjectKind,
    target: str,
    role: str,
    *,
    with_grant_option: bool = False,
    columns: Sequence[str] = (),
) -> str:
    """``GRANT <priv> ON <KIND> <target> TO <role>[ WITH GRANT OPTION]``.

    *target* must already be quoted (see :func:`qualified_name`).
    """
    statement = f"GRANT {_privilege_clause(privilege, columns)} ON {kind.value} {target} TO {quote_identifier(role)}"
    if with_grant_option:
        statement += " WITH GRANT OPTION"
    return statement


def revoke_privilege(
    privilege: Privilege,
    kind: ObjectKind,
    target: str,
    role: str,
    *,
    grant_option_only: bool = False,
    columns: Sequence[str] = (),
) -> str:
    """``REVOKE [GRANT OPTION FOR ]<priv> ON <KIND> <target> FROM <role>``."""
    prefix = "REVOKE GRANT OPTION FOR" if grant_option_only else "REVOKE"
    return f"{prefix} {_privilege_clause(privilege, columns)} ON {kind.value} {target} FROM {quote_identifier(role)}"


def grant_role(role: str, member: str, *, with_admin_option: bool = False) -> str:
    statement = f"GRANT {quote_identifier(role)} TO {quote_identifier(member)}"
    if with_admin_option:
        statement += " WITH ADMIN OPTION"
    return statement


def revoke_role(role: str, member: str, *, admin_option_only: bool = False) -> str:
    if admin_option_only:
        return f"REVOKE ADMIN OPTION FOR {quote_identifier(role)} FROM {quote_identifier(member)}"
    return f"REVOKE {quote_identifier(role)} FROM {quote_identifier(member)}"


def alter_role_attribute(role: str, attribute: RoleAttribute, enabled: bool) -> str:
    keyword = attribute.keyword if enabled else f"NO{attribute.keyword}"
    return f"ALTER ROLE {quote_identifier(role)} WITH {keyword}"


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
