"""Kernel models – principals (``pg_roles`` rows)."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping


@dataclasses.dataclass(frozen=True)
class RoleModel:
    """A role as the privilege engine sees it.

    ``admin_option`` is only populated when the row was read through a
    membership listing; it is ``None`` otherwise.
    """

    id: int
    name: str
    superuser: bool = False
    inherit: bool = True
    create_role: bool = False
    create_db: bool = False
    can_login: bool = False
    replication: bool = False
    connection_limit: int = -1
    bypass_rls: bool = False
    admin_option: bool | None = None
    member_of: tuple[int, ...] = ()

    @property
    def is_role_admin(self) -> bool:
        return bool(self.admin_option)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RoleModel":
        return cls(
            id=int(row["oid"]),
            name=row["rolname"],
            superuser=bool(row["rolsuper"]),
            inherit=bool(row["rolinherit"]),
            create_role=bool(row["rolcreaterole"]),
            create_db=bool(row["rolcreatedb"]),
            can_login=bool(row["rolcanlogin"]),
            replication=bool(row["rolreplication"]),
            connection_limit=int(row["rolconnlimit"]),
            bypass_rls=bool(row["rolbypassrls"]),
            admin_option=row.get("admin_option"),
            member_of=tuple(int(oid) for oid in row.get("member_of") or ()),
        )


class RoleAttribute(str, Enum):
    """Role flags exposed as entitlements on a database; the value is the slug."""

    SUPERUSER = "superuser"
    CREATE_DB = "create-db"
    CREATE_ROLE = "create-role"
    BYPASS_RLS = "bypass-rls"
    REPLICATION = "replication"

    @property
    def keyword(self) -> str:
        """Option keyword for ``ALTER ROLE ... WITH``."""
        return self.value.replace("-", "").upper()

    @property
    def display_name(self) -> str:
        return _ATTRIBUTE_DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _ATTRIBUTE_DESCRIPTIONS[self]

    def held_by(self, role: RoleModel) -> bool:
        return bool(getattr(role, _ATTRIBUTE_FIELDS[self]))

    @classmethod
    def from_slug(cls, slug: str) -> "RoleAttribute | None":
        try:
            return cls(slug)
        except ValueError:
            return None


_ATTRIBUTE_FIELDS = {
    RoleAttribute.SUPERUSER: "superuser",
    RoleAttribute.CREATE_DB: "create_db",
    RoleAttribute.CREATE_ROLE: "create_role",
    RoleAttribute.BYPASS_RLS: "bypass_rls",
    RoleAttribute.REPLICATION: "replication",
}

_ATTRIBUTE_DISPLAY_NAMES = {
    RoleAttribute.SUPERUSER: "Superuser",
    RoleAttribute.CREATE_DB: "Create Database",
    RoleAttribute.CREATE_ROLE: "Create Role",
    RoleAttribute.BYPASS_RLS: "Bypass RLS",
    RoleAttribute.REPLICATION: "Replication",
}

_ATTRIBUTE_DESCRIPTIONS = {
    RoleAttribute.SUPERUSER: "Has Superuser access",
    RoleAttribute.CREATE_DB: "Can create new databases",
    RoleAttribute.CREATE_ROLE: "Can create new roles",
    RoleAttribute.BYPASS_RLS: "Can bypass row level security options",
    RoleAttribute.REPLICATION: "Can initiate replication connections, and create and drop replication slots",
}


__all__ = ["RoleAttribute", "RoleModel"]
