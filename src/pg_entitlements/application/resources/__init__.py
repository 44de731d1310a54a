"""Application resources – per-kind listing, entitlement, grant and provisioning services."""
from pg_entitlements.application.resources.base import (
    ACLResourceService,
    ResourceService,
    ServiceOptions,
    principal_identity,
)
from pg_entitlements.application.resources.column import ColumnService
from pg_entitlements.application.resources.database import DATABASE_TYPE, DatabaseService, attribute_entitlement
from pg_entitlements.application.resources.large_object import LARGE_OBJECT_TYPE, LargeObjectService
from pg_entitlements.application.resources.relations import (
    SEQUENCE_TYPE,
    TABLE_TYPE,
    VIEW_TYPE,
    SequenceService,
    TableService,
    ViewService,
)
from pg_entitlements.application.resources.role import ADMIN, MEMBER, RoleService
from pg_entitlements.application.resources.routines import (
    FUNCTION_TYPE,
    PROCEDURE_TYPE,
    FunctionService,
    ProcedureService,
)
from pg_entitlements.application.resources.schema import SCHEMA_TYPE, SchemaService

SERVICE_CLASSES: tuple[type[ResourceService], ...] = (
    RoleService,
    DatabaseService,
    SchemaService,
    TableService,
    ViewService,
    ColumnService,
    FunctionService,
    ProcedureService,
    SequenceService,
    LargeObjectService,
)

__all__ = [
    "ACLResourceService",
    "ADMIN",
    "ColumnService",
    "DATABASE_TYPE",
    "DatabaseService",
    "FUNCTION_TYPE",
    "FunctionService",
    "LARGE_OBJECT_TYPE",
    "LargeObjectService",
    "MEMBER",
    "PROCEDURE_TYPE",
    "ProcedureService",
    "ResourceService",
    "RoleService",
    "SCHEMA_TYPE",
    "SERVICE_CLASSES",
    "SEQUENCE_TYPE",
    "SchemaService",
    "SequenceService",
    "ServiceOptions",
    "TABLE_TYPE",
    "TableService",
    "VIEW_TYPE",
    "ViewService",
    "attribute_entitlement",
    "principal_identity",
]
