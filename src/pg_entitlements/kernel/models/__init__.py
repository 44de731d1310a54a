"""Kernel models – roles, ACL-bearing catalog objects and listed resources."""
from pg_entitlements.kernel.models.objects import (
    CatalogObject,
    ColumnModel,
    DatabaseModel,
    FunctionModel,
    LargeObjectModel,
    ProcedureModel,
    RelationModel,
    RoutineModel,
    SchemaModel,
    SequenceModel,
    TableModel,
    ViewModel,
)
from pg_entitlements.kernel.models.resource import ACLResource, Resource, ResourceType
from pg_entitlements.kernel.models.role import RoleAttribute, RoleModel

__all__ = [
    "ACLResource",
    "CatalogObject",
    "ColumnModel",
    "DatabaseModel",
    "FunctionModel",
    "LargeObjectModel",
    "ProcedureModel",
    "RelationModel",
    "Resource",
    "ResourceType",
    "RoleAttribute",
    "RoleModel",
    "RoutineModel",
    "SchemaModel",
    "SequenceModel",
    "TableModel",
    "ViewModel",
]
