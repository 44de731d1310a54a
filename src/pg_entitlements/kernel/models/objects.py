"""Kernel models – catalog objects that carry ACLs.

Each model knows the privileges meaningful for its kind (``all_privileges``)
and those every role holds while the object has no ACL (``default_privileges``).
"""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Mapping

from pg_entitlements.kernel.privileges import EMPTY_PRIVILEGES, Privilege, PrivilegeSet

_TABLE_PRIVILEGES = PrivilegeSet.of(
    Privilege.INSERT,
    Privilege.SELECT,
    Privilege.UPDATE,
    Privilege.DELETE,
    Privilege.TRUNCATE,
    Privilege.REFERENCES,
    Privilege.TRIGGER,
)


def _acls(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(str(entry) for entry in value)


@dataclasses.dataclass(frozen=True)
class CatalogObject:
    """Fields shared by every ACL-bearing object."""

    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = EMPTY_PRIVILEGES
    DEFAULT_PRIVILEGES: ClassVar[PrivilegeSet] = EMPTY_PRIVILEGES

    id: int
    name: str
    owner_id: int
    acls: tuple[str, ...] = ()

    def all_privileges(self) -> PrivilegeSet:
        return self.ALL_PRIVILEGES

    def default_privileges(self) -> PrivilegeSet:
        return self.DEFAULT_PRIVILEGES


@dataclasses.dataclass(frozen=True)
class DatabaseModel(CatalogObject):
    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(
        Privilege.CREATE, Privilege.TEMPORARY, Privilege.CONNECT
    )
    DEFAULT_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(Privilege.TEMPORARY, Privilege.CONNECT)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DatabaseModel":
        return cls(id=int(row["oid"]), name=row["datname"], owner_id=int(row["datdba"]), acls=_acls(row["datacl"]))


@dataclasses.dataclass(frozen=True)
class SchemaModel(CatalogObject):
    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(Privilege.USAGE, Privilege.CREATE)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SchemaModel":
        return cls(id=int(row["oid"]), name=row["nspname"], owner_id=int(row["nspowner"]), acls=_acls(row["nspacl"]))


@dataclasses.dataclass(frozen=True)
class RelationModel(CatalogObject):
    """A ``pg_class`` row: table, view or sequence."""

    schema: str = ""

    @property
    def qualified_name(self) -> tuple[str, str]:
        return self.schema, self.name

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RelationModel":
        return cls(
            id=int(row["oid"]),
            name=row["relname"],
            owner_id=int(row["relowner"]),
            acls=_acls(row["relacl"]),
            schema=row["nspname"],
        )


@dataclasses.dataclass(frozen=True)
class TableModel(RelationModel):
    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = _TABLE_PRIVILEGES


@dataclasses.dataclass(frozen=True)
class ViewModel(RelationModel):
    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = _TABLE_PRIVILEGES


@dataclasses.dataclass(frozen=True)
class SequenceModel(RelationModel):
    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(
        Privilege.SELECT, Privilege.UPDATE, Privilege.USAGE
    )


@dataclasses.dataclass(frozen=True)
class ColumnModel(CatalogObject):
    """A ``pg_attribute`` row; ``id`` is the attribute number.

    Columns have no owner of their own, so ``owner_id`` is the table's owner.
    """

    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(
        Privilege.INSERT, Privilege.SELECT, Privilege.UPDATE, Privilege.REFERENCES
    )

    table_id: int = 0
    table_name: str = ""
    schema: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ColumnModel":
        return cls(
            id=int(row["attnum"]),
            name=row["attname"],
            owner_id=int(row["relowner"]),
            acls=_acls(row["attacl"]),
            table_id=int(row["attrelid"]),
            table_name=row["relname"],
            schema=row["nspname"],
        )


@dataclasses.dataclass(frozen=True)
class RoutineModel(CatalogObject):
    """A ``pg_proc`` row.

    ``identity_arguments`` is the argument list without names or defaults,
    the form GRANT needs to pick one overload.
    """

    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(Privilege.EXECUTE)
    DEFAULT_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(Privilege.EXECUTE)

    schema: str = ""
    arguments: str = ""
    identity_arguments: str = ""

    @property
    def signature(self) -> str:
        return f"{self.name}({self.identity_arguments})"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RoutineModel":
        return cls(
            id=int(row["oid"]),
            name=row["proname"],
            owner_id=int(row["proowner"]),
            acls=_acls(row["proacl"]),
            schema=row["nspname"],
            arguments=row["arguments"] or "",
            identity_arguments=row["identity_arguments"] or "",
            **cls._extra_fields(row),
        )

    @classmethod
    def _extra_fields(cls, row: Mapping[str, Any]) -> dict[str, Any]:
        return {}


@dataclasses.dataclass(frozen=True)
class FunctionModel(RoutineModel):
    return_type: str = ""

    @classmethod
    def _extra_fields(cls, row: Mapping[str, Any]) -> dict[str, Any]:
        return {"return_type": row["return_type"] or ""}


@dataclasses.dataclass(frozen=True)
class ProcedureModel(RoutineModel):
    pass


@dataclasses.dataclass(frozen=True)
class LargeObjectModel(CatalogObject):
    ALL_PRIVILEGES: ClassVar[PrivilegeSet] = PrivilegeSet.of(Privilege.SELECT, Privilege.UPDATE)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LargeObjectModel":
        oid = int(row["oid"])
        return cls(id=oid, name=str(oid), owner_id=int(row["lomowner"]), acls=_acls(row["lomacl"]))


__all__ = [
    "CatalogObject",
    "ColumnModel",
    "DatabaseModel",
    "FunctionModel",
    "LargeObjectModel",
    "ProcedureModel",
    "RelationModel",
    "RoutineModel",
    "SchemaModel",
    "SequenceModel",
    "TableModel",
    "ViewModel",
]
