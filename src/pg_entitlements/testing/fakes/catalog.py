"""Testing fakes – InMemoryCatalogClient."""
from __future__ import annotations

import dataclasses
from typing import Sequence, TypeVar

from pg_entitlements.application.grants.ports import CatalogClient
from pg_entitlements.application.pagination import Pager, paginate
from pg_entitlements.kernel.errors import ConnectionError, NotFoundError
from pg_entitlements.kernel.models import (
    ColumnModel,
    DatabaseModel,
    FunctionModel,
    LargeObjectModel,
    ProcedureModel,
    RoleModel,
    SchemaModel,
    SequenceModel,
    TableModel,
    ViewModel,
)

T = TypeVar("T")


def _page(rows: Sequence[T], pager: Pager) -> tuple[list[T], str]:
    offset, limit = pager.parse()
    return paginate(list(rows[offset : offset + limit + 1]), offset, limit)


def _find(rows: Sequence[T], resource: str, object_id: int) -> T:
    for row in rows:
        if row.id == object_id:  # type: ignore[attr-defined]
            return row
    raise NotFoundError(resource, object_id)


class InMemoryCatalogClient(CatalogClient):
    """List-backed catalog client for tests.

    Rows come back in insertion order. Memberships are derived from each
    role's ``member_of``; :meth:`add_role` takes the roles it administers.
    Every statement passed to :meth:`execute` is recorded in ``executed``.
    """

    def __init__(self, database_name: str = "postgres") -> None:
        self._database_name = database_name
        self.roles: list[RoleModel] = []
        self.admin_of: set[tuple[int, int]] = set()
        self.databases: list[DatabaseModel] = []
        self.schemas: list[SchemaModel] = []
        self.tables: dict[int, list[TableModel]] = {}
        self.views: dict[int, list[ViewModel]] = {}
        self.sequences: dict[int, list[SequenceModel]] = {}
        self.functions: dict[int, list[FunctionModel]] = {}
        self.procedures: dict[int, list[ProcedureModel]] = {}
        self.columns: dict[int, list[ColumnModel]] = {}
        self.large_objects: list[LargeObjectModel] = []
        self.executed: list[str] = []
        self.healthy = True
        self.closed = False

    # -- population ----------------------------------------------------------

    def add_role(self, role: RoleModel, *, admin_of: Sequence[int] = ()) -> RoleModel:
        self.roles.append(role)
        self.admin_of.update((parent, role.id) for parent in admin_of)
        return role

    def add_database(self, database: DatabaseModel) -> DatabaseModel:
        self.databases.append(database)
        return database

    def add_schema(self, schema: SchemaModel) -> SchemaModel:
        self.schemas.append(schema)
        return schema

    def add_table(self, schema_id: int, table: TableModel) -> TableModel:
        self.tables.setdefault(schema_id, []).append(table)
        return table

    def add_view(self, schema_id: int, view: ViewModel) -> ViewModel:
        self.views.setdefault(schema_id, []).append(view)
        return view

    def add_sequence(self, schema_id: int, sequence: SequenceModel) -> SequenceModel:
        self.sequences.setdefault(schema_id, []).append(sequence)
        return sequence

    def add_function(self, schema_id: int, function: FunctionModel) -> FunctionModel:
        self.functions.setdefault(schema_id, []).append(function)
        return function

    def add_procedure(self, schema_id: int, procedure: ProcedureModel) -> ProcedureModel:
        self.procedures.setdefault(schema_id, []).append(procedure)
        return procedure

    def add_column(self, column: ColumnModel) -> ColumnModel:
        self.columns.setdefault(column.table_id, []).append(column)
        return column

    def add_large_object(self, large_object: LargeObjectModel) -> LargeObjectModel:
        self.large_objects.append(large_object)
        return large_object

    # -- connection ----------------------------------------------------------

    @property
    def database_name(self) -> str:
        return self._database_name

    async def validate_connection(self) -> None:
        if not self.healthy:
            raise ConnectionError(self._database_name, "connection lost")

    async def close(self) -> None:
        self.closed = True

    async def execute(self, statement: str) -> None:
        self.executed.append(statement)

    # -- roles ---------------------------------------------------------------

    async def list_roles(self, pager: Pager) -> tuple[list[RoleModel], str]:
        return _page(self.roles, pager)

    async def get_role(self, role_id: int) -> RoleModel:
        return _find(self.roles, "role", role_id)

    async def get_role_by_name(self, name: str) -> RoleModel:
        for role in self.roles:
            if role.name == name:
                return role
        raise NotFoundError("role", name)

    def _members(self, role_id: int) -> list[RoleModel]:
        return [
            dataclasses.replace(role, admin_option=(role_id, role.id) in self.admin_of)
            for role in self.roles
            if role_id in role.member_of
        ]

    async def role_has_members(self, role_id: int) -> bool:
        return bool(self._members(role_id))

    async def list_role_members(self, role_id: int, pager: Pager) -> tuple[list[RoleModel], str]:
        return _page(self._members(role_id), pager)

    async def list_principals(self, pager: Pager) -> tuple[list[RoleModel], str]:
        return await self.list_roles(pager)

    async def get_principal(self, principal_id: int) -> RoleModel:
        return await self.get_role(principal_id)

    # -- databases -----------------------------------------------------------

    async def list_databases(self, pager: Pager) -> tuple[list[DatabaseModel], str]:
        return _page(self.databases, pager)

    async def get_database(self, database_id: int) -> DatabaseModel:
        return _find(self.databases, "database", database_id)

    async def get_database_by_name(self, name: str) -> DatabaseModel:
        for database in self.databases:
            if database.name == name:
                return database
        raise NotFoundError("database", name)

    # -- schema-scoped objects -----------------------------------------------

    async def list_schemas(self, pager: Pager) -> tuple[list[SchemaModel], str]:
        return _page(self.schemas, pager)

    async def get_schema(self, schema_id: int) -> SchemaModel:
        return _find(self.schemas, "schema", schema_id)

    async def list_tables(self, schema_id: int, pager: Pager) -> tuple[list[TableModel], str]:
        return _page(self.tables.get(schema_id, []), pager)

    async def get_table(self, table_id: int) -> TableModel:
        return _find([t for rows in self.tables.values() for t in rows], "table", table_id)

    async def list_views(self, schema_id: int, pager: Pager) -> tuple[list[ViewModel], str]:
        return _page(self.views.get(schema_id, []), pager)

    async def get_view(self, view_id: int) -> ViewModel:
        return _find([v for rows in self.views.values() for v in rows], "view", view_id)

    async def list_sequences(self, schema_id: int, pager: Pager) -> tuple[list[SequenceModel], str]:
        return _page(self.sequences.get(schema_id, []), pager)

    async def get_sequence(self, sequence_id: int) -> SequenceModel:
        return _find([s for rows in self.sequences.values() for s in rows], "sequence", sequence_id)

    async def list_functions(self, schema_id: int, pager: Pager) -> tuple[list[FunctionModel], str]:
        return _page(self.functions.get(schema_id, []), pager)

    async def get_function(self, function_id: int) -> FunctionModel:
        return _find([f for rows in self.functions.values() for f in rows], "function", function_id)

    async def list_procedures(self, schema_id: int, pager: Pager) -> tuple[list[ProcedureModel], str]:
        return _page(self.procedures.get(schema_id, []), pager)

    async def get_procedure(self, procedure_id: int) -> ProcedureModel:
        return _find([p for rows in self.procedures.values() for p in rows], "procedure", procedure_id)

    async def list_columns(self, table_id: int, pager: Pager) -> tuple[list[ColumnModel], str]:
        return _page(self.columns.get(table_id, []), pager)

    async def get_column(self, table_id: int, column_id: int) -> ColumnModel:
        return _find(self.columns.get(table_id, []), "column", column_id)

    async def list_large_objects(self, pager: Pager) -> tuple[list[LargeObjectModel], str]:
        return _page(self.large_objects, pager)

    async def get_large_object(self, large_object_id: int) -> LargeObjectModel:
        return _find(self.large_objects, "large_object", large_object_id)


__all__ = ["InMemoryCatalogClient"]
