"""Postgres adapter – role queries (``pg_roles`` / ``pg_auth_members``)."""
from __future__ import annotations

from pg_entitlements.adapters.postgres.queries.base import PAGE_CLAUSE, QueryRunner
from pg_entitlements.application.pagination import Pager
from pg_entitlements.kernel.models import RoleModel

_ROLE_COLUMNS = """
       r."oid"::bigint AS "oid",
       r."rolname",
       r."rolsuper",
       r."rolinherit",
       r."rolcreaterole",
       r."rolcreatedb",
       r."rolcanlogin",
       r."rolreplication",
       r."rolconnlimit",
       r."rolbypassrls",
       ARRAY(SELECT p."roleid"::bigint
             FROM "pg_catalog"."pg_auth_members" p
             WHERE p."member" = r."oid") AS "member_of"
"""

LIST_ROLES = f"""
SELECT {_ROLE_COLUMNS}, NULL::boolean AS "admin_option"
FROM "pg_catalog"."pg_roles" r
ORDER BY r."rolname"
{PAGE_CLAUSE}
"""

GET_ROLE = f"""
SELECT {_ROLE_COLUMNS}, NULL::boolean AS "admin_option"
FROM "pg_catalog"."pg_roles" r
WHERE r."oid" = :role_id
"""

GET_ROLE_BY_NAME = f"""
SELECT {_ROLE_COLUMNS}, NULL::boolean AS "admin_option"
FROM "pg_catalog"."pg_roles" r
WHERE r."rolname" = :name
"""

ROLE_HAS_MEMBERS = """
SELECT EXISTS(SELECT 1 FROM "pg_catalog"."pg_auth_members" WHERE "roleid" = :role_id)
"""

LIST_ROLE_MEMBERS = f"""
SELECT {_ROLE_COLUMNS}, m."admin_option"
FROM "pg_catalog"."pg_roles" r
         JOIN "pg_catalog"."pg_auth_members" m ON m."member" = r."oid"
WHERE m."roleid" = :role_id
ORDER BY r."rolname"
{PAGE_CLAUSE}
"""


class RoleQueries(QueryRunner):
    async def list_roles(self, pager: Pager) -> tuple[list[RoleModel], str]:
        return await self._fetch_page(LIST_ROLES, pager, RoleModel.from_row)

    async def get_role(self, role_id: int) -> RoleModel:
        return await self._fetch_one(GET_ROLE, RoleModel.from_row, "role", role_id, role_id=role_id)

    async def get_role_by_name(self, name: str) -> RoleModel:
        return await self._fetch_one(GET_ROLE_BY_NAME, RoleModel.from_row, "role", name, name=name)

    async def role_has_members(self, role_id: int) -> bool:
        return bool(await self._fetch_scalar(ROLE_HAS_MEMBERS, role_id=role_id))

    async def list_role_members(self, role_id: int, pager: Pager) -> tuple[list[RoleModel], str]:
        """Members of *role_id*; each carries whether it holds the admin option."""
        return await self._fetch_page(LIST_ROLE_MEMBERS, pager, RoleModel.from_row, role_id=role_id)

    # Principal directory used by grant resolution.
    async def list_principals(self, pager: Pager) -> tuple[list[RoleModel], str]:
        return await self.list_roles(pager)

    async def get_principal(self, principal_id: int) -> RoleModel:
        return await self.get_role(principal_id)


__all__ = ["RoleQueries"]
