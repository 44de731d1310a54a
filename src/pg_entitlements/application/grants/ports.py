"""Application grants – ports consumed by resolution and the resource services."""
from __future__ import annotations

from typing import Protocol

from pg_entitlements.application.pagination import Pager
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


class PrincipalDirectory(Protocol):
    """Source of principals for resolution."""

    async def list_principals(self, pager: Pager) -> tuple[list[RoleModel], str]: ...

    async def get_principal(self, principal_id: int) -> RoleModel: ...


class CatalogClient(PrincipalDirectory, Protocol):
    """Per-database catalog access; implemented by ``PostgresClient`` and the in-memory fake."""

    @property
    def database_name(self) -> str: ...

    async def validate_connection(self) -> None: ...

    async def close(self) -> None: ...

    async def execute(self, statement: str) -> None: ...

    # roles
    async def list_roles(self, pager: Pager) -> tuple[list[RoleModel], str]: ...

    async def get_role(self, role_id: int) -> RoleModel: ...

    async def get_role_by_name(self, name: str) -> RoleModel: ...

    async def role_has_members(self, role_id: int) -> bool: ...

    async def list_role_members(self, role_id: int, pager: Pager) -> tuple[list[RoleModel], str]: ...

    # databases
    async def list_databases(self, pager: Pager) -> tuple[list[DatabaseModel], str]: ...

    async def get_database(self, database_id: int) -> DatabaseModel: ...

    async def get_database_by_name(self, name: str) -> DatabaseModel: ...

    # schemas and schema-scoped objects
    async def list_schemas(self, pager: Pager) -> tuple[list[SchemaModel], str]: ...

    async def get_schema(self, schema_id: int) -> SchemaModel: ...

    async def list_tables(self, schema_id: int, pager: Pager) -> tuple[list[TableModel], str]: ...

    async def get_table(self, table_id: int) -> TableModel: ...

    async def list_views(self, schema_id: int, pager: Pager) -> tuple[list[ViewModel], str]: ...

    async def get_view(self, view_id: int) -> ViewModel: ...

    async def list_sequences(self, schema_id: int, pager: Pager) -> tuple[list[SequenceModel], str]: ...

    async def get_sequence(self, sequence_id: int) -> SequenceModel: ...

    async def list_functions(self, schema_id: int, pager: Pager) -> tuple[list[FunctionModel], str]: ...

    async def get_function(self, function_id: int) -> FunctionModel: ...

    async def list_procedures(self, schema_id: int, pager: Pager) -> tuple[list[ProcedureModel], str]: ...

    async def get_procedure(self, procedure_id: int) -> ProcedureModel: ...

    async def list_columns(self, table_id: int, pager: Pager) -> tuple[list[ColumnModel], str]: ...

    async def get_column(self, table_id: int, column_id: int) -> ColumnModel: ...

    async def list_large_objects(self, pager: Pager) -> tuple[list[LargeObjectModel], str]: ...

    async def get_large_object(self, large_object_id: int) -> LargeObjectModel: ...


class ClientPool(Protocol):
    """Resolves a database tag from a resource identity to a catalog client."""

    def default(self) -> CatalogClient: ...

    def default_database(self) -> str: ...

    async def get(self, database: str) -> tuple[CatalogClient, str]: ...

    async def close(self) -> None: ...


__all__ = ["CatalogClient", "ClientPool", "PrincipalDirectory"]
