"""Application resources – databases.

Besides the database ACL privileges, each database exposes the cluster-wide
role attributes (superuser, create database, ...) as assignment entitlements.
"""
from __future__ import annotations

from typing import Any, Sequence

from pg_entitlements.application.grants import (
    ROLE_TYPE,
    CatalogClient,
    Entitlement,
    Grant,
    assignment_entitlement,
)
from pg_entitlements.application.pagination import Page, Pager
from pg_entitlements.application.provisioning import ObjectKind, alter_role_attribute, quote_identifier
from pg_entitlements.application.resources.base import ACLResourceService, principal_identity
from pg_entitlements.kernel.errors import InfrastructureError, UnsupportedOperationError
from pg_entitlements.kernel.identity import ResourceIdentity
from pg_entitlements.kernel.models import DatabaseModel, Resource, ResourceType, RoleAttribute, RoleModel
from pg_entitlements.observability.logging import get_logger

logger = get_logger(__name__)

DATABASE_TYPE = "database"

# Raised when a database refuses connections (datallowconn = false).
_SQLSTATE_NOT_IN_PREREQUISITE_STATE = "55000"


def _sqlstate(exc: BaseException | None) -> str | None:
    """First SQLSTATE found along the exception's cause chain."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        for attr in ("sqlstate", "pgcode"):
            value = getattr(exc, attr, None)
            if value:
                return str(value)
        orig = getattr(exc, "orig", None)
        exc = exc.__cause__ or orig
    return None


def attribute_entitlement(resource: Resource, attribute: RoleAttribute) -> Entitlement:
    return assignment_entitlement(resource, attribute.value, attribute.display_name, attribute.description)


class DatabaseService(ACLResourceService):
    resource_type = ResourceType(id=DATABASE_TYPE, display_name="Database")
    object_kind = ObjectKind.DATABASE

    async def _fetch(self, client: CatalogClient, identity: ResourceIdentity) -> DatabaseModel:
        return await client.get_database(identity.object_id)

    def _identity(self, model: DatabaseModel, parent: ResourceIdentity | None) -> ResourceIdentity:
        return ResourceIdentity.simple(DATABASE_TYPE, model.id)

    def _target(self, model: DatabaseModel) -> str:
        return quote_identifier(model.name)

    def _wanted(self, model: DatabaseModel) -> bool:
        default_database = self._pool.default_database()
        if self._options.sync_all_databases or not default_database:
            return True
        return model.name == default_database

    async def _reachable(self, model: DatabaseModel) -> bool:
        """False when the server refused the connection; transport failures propagate."""
        try:
            await self._pool.get(str(model.id))
        except InfrastructureError as exc:
            sqlstate = _sqlstate(exc)
            if sqlstate is None:
                raise
            if sqlstate == _SQLSTATE_NOT_IN_PREREQUISITE_STATE:
                logger.info("database.skipped", database=model.name, reason=str(exc))
            else:
                logger.warning("database.skipped", database=model.name, sqlstate=sqlstate, error=str(exc))
            return False
        return True

    async def _list_models(
        self, client: CatalogClient, parent: ResourceIdentity | None, pager: Pager
    ) -> tuple[Sequence[Any], str]:
        """List one page of databases, dropping those out of scope or refusing connections.

        The cursor still advances over dropped rows, so a page can come back
        shorter than the page size while more pages remain.
        """
        databases, next_cursor = await client.list_databases(pager)
        kept: list[DatabaseModel] = []
        for model in databases:
            if not self._wanted(model):
                continue
            if await self._reachable(model):
                kept.append(model)
        return kept, next_cursor

    async def entitlements(self, resource: Resource) -> list[Entitlement]:
        result = await super().entitlements(resource)
        result.extend(attribute_entitlement(resource, attribute) for attribute in RoleAttribute)
        return result

    def _extra_grants(self, resource: Resource, principals: Sequence[RoleModel]) -> list[Grant]:
        grants: list[Grant] = []
        for role in principals:
            for attribute in RoleAttribute:
                if attribute.held_by(role):
                    grants.append(
                        Grant(
                            entitlement=attribute_entitlement(resource, attribute),
                            principal=ResourceIdentity.simple(ROLE_TYPE, role.id),
                        )
                    )
        return grants

    def _attribute(self, entitlement_id: str, operation: str) -> RoleAttribute | None:
        entitlement = self._entitlement_identity(entitlement_id)
        attribute = RoleAttribute.from_slug(entitlement.slug)
        if attribute is not None and entitlement.grant:
            raise UnsupportedOperationError(
                f"role attribute {attribute.value!r} has no grant option",
                operation=operation,
                resource_type=DATABASE_TYPE,
            )
        return attribute

    async def _alter_attribute(
        self, principal: Resource | ResourceIdentity, attribute: RoleAttribute, enabled: bool
    ) -> None:
        client = self._pool.default()
        role = await client.get_role(principal_identity(principal).object_id)
        await client.execute(alter_role_attribute(role.name, attribute, enabled))

    async def grant(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None:
        attribute = self._attribute(entitlement_id, "grant")
        if attribute is None:
            await super().grant(principal, entitlement_id)
        else:
            await self._alter_attribute(principal, attribute, True)

    async def revoke(self, principal: Resource | ResourceIdentity, entitlement_id: str) -> None:
        attribute = self._attribute(entitlement_id, "revoke")
        if attribute is None:
            await super().revoke(principal, entitlement_id)
        else:
            await self._alter_attribute(principal, attribute, False)


__all__ = ["DATABASE_TYPE", "DatabaseService", "attribute_entitlement"]
