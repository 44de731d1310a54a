"""Integration tests for the Postgres catalog client and resource services.

Uses testcontainers to spawn a real PostgreSQL instance.
Run with: pytest tests/integration/test_postgres.py -m integration -v
"""
from __future__ import annotations

import asyncio
from typing import Any, Iterator

import pytest
from testcontainers.postgres import PostgresContainer

from pg_entitlements.adapters.postgres import PostgresClient
from pg_entitlements.application.pagination import Pager
from pg_entitlements.config import ConnectorSettings
from pg_entitlements.connector import EntitlementConnector
from pg_entitlements.kernel.errors import ConnectionError, QueryError
from pg_entitlements.kernel.models import Resource

SETUP = [
    "CREATE ROLE readers",
    "CREATE ROLE carol LOGIN IN ROLE readers",
    "CREATE ROLE alice LOGIN CREATEDB",
    'CREATE TABLE public.orders (id serial PRIMARY KEY, amount integer)',
    "CREATE VIEW public.order_totals AS SELECT sum(amount) AS total FROM public.orders",
    "CREATE FUNCTION public.add(a integer, b integer) RETURNS integer LANGUAGE sql AS 'SELECT a + b'",
    "CREATE PROCEDURE public.noop() LANGUAGE sql AS 'SELECT 1'",
    "GRANT SELECT ON public.orders TO readers",
    "GRANT UPDATE (amount) ON public.orders TO alice",
]


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

def _run(coro):  # type: ignore[no-untyped-def]
    return asyncio.run(coro)


@pytest.fixture(scope="module")
def dsn() -> Iterator[str]:
    with PostgresContainer("postgres:16-alpine") as container:
        url = container.get_connection_url()

        async def setup() -> None:
            client = await PostgresClient.connect(url)
            for statement in SETUP:
                await client.execute(statement)
            await client.close()

        _run(setup())
        yield url


async def _connector(dsn: str, **overrides: Any) -> EntitlementConnector:
    return await EntitlementConnector.from_settings(ConnectorSettings(dsn=dsn, **overrides))


async def _find(connector: EntitlementConnector, resource_type: str, parent: Any, name: str) -> Resource:
    page = await connector.service(resource_type).list(parent, Pager("", 1000))
    return next(r for r in page.items if r.display_name == name)


def _holders(grants: list[Any], slug: str) -> set[int]:
    return {g.principal.object_id for g in grants if g.entitlement.slug == slug}


# ---------------------------------------------------------------------------
# PostgresClient
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestPostgresClientIntegration:
    def test_connect_and_read_roles(self, dsn: str) -> None:
        async def run() -> None:
            client = await PostgresClient.connect(dsn)
            try:
                carol = await client.get_role_by_name("carol")
                readers = await client.get_role_by_name("readers")
                assert readers.id in carol.member_of
                assert await client.role_has_members(readers.id)
                members, cursor = await client.list_role_members(readers.id, Pager())
                assert [m.name for m in members] == ["carol"]
                assert members[0].admin_option is False
                assert cursor == ""
            finally:
                await client.close()

        _run(run())

    def test_paging_roles(self, dsn: str) -> None:
        async def run() -> None:
            client = await PostgresClient.connect(dsn)
            try:
                seen: list[str] = []
                token = ""
                while True:
                    roles, token = await client.list_roles(Pager(token, 2))
                    seen.extend(r.name for r in roles)
                    if not token:
                        break
                assert {"alice", "carol", "readers"} <= set(seen)
                assert len(seen) == len(set(seen))
            finally:
                await client.close()

        _run(run())

    def test_bad_statement_is_query_error(self, dsn: str) -> None:
        async def run() -> None:
            client = await PostgresClient.connect(dsn)
            try:
                with pytest.raises(QueryError) as info:
                    await client.execute('GRANT SELECT ON TABLE public.missing TO alice')
                assert info.value.sqlstate == "42P01"
            finally:
                await client.close()

        _run(run())

    def test_unknown_database_fails_to_connect(self, dsn: str) -> None:
        async def run() -> None:
            with pytest.raises(ConnectionError):
                await PostgresClient.connect(dsn, database="does_not_exist", connect_timeout=5)

        _run(run())


# ---------------------------------------------------------------------------
# Resource services end to end
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestResourceServicesIntegration:
    def test_inherited_table_grant(self, dsn: str) -> None:
        async def run() -> None:
            connector = await _connector(dsn)
            try:
                database = (await connector.service("database").list(None)).items[0]
                schema = await _find(connector, "schema", database.id, "public")
                table = await _find(connector, "table", schema.id, "public.orders")
                grants = (await connector.service("table").grants(table, Pager("", 1000))).items
                carol = await connector.pool.default().get_role_by_name("carol")
                alice = await connector.pool.default().get_role_by_name("alice")
                assert carol.id in _holders(grants, "select")
                assert alice.id not in _holders(grants, "select")
            finally:
                await connector.close()

        _run(run())

    def test_column_grant(self, dsn: str) -> None:
        async def run() -> None:
            connector = await _connector(dsn, include_columns=True)
            try:
                database = (await connector.service("database").list(None)).items[0]
                schema = await _find(connector, "schema", database.id, "public")
                table = await _find(connector, "table", schema.id, "public.orders")
                column = await _find(connector, "column", table.id, "public.orders.amount")
                grants = (await connector.service("column").grants(column, Pager("", 1000))).items
                alice = await connector.pool.default().get_role_by_name("alice")
                assert alice.id in _holders(grants, "update")
            finally:
                await connector.close()

        _run(run())

    def test_function_default_execute(self, dsn: str) -> None:
        async def run() -> None:
            connector = await _connector(dsn)
            try:
                database = (await connector.service("database").list(None)).items[0]
                schema = await _find(connector, "schema", database.id, "public")
                function = await _find(connector, "function", schema.id, "public.add(a integer, b integer)")
                grants = (await connector.service("function").grants(function, Pager("", 1000))).items
                alice = await connector.pool.default().get_role_by_name("alice")
                assert alice.id in _holders(grants, "execute")
            finally:
                await connector.close()

        _run(run())

    def test_grant_then_revoke_round_trip(self, dsn: str) -> None:
        async def run() -> None:
            connector = await _connector(dsn)
            try:
                database = (await connector.service("database").list(None)).items[0]
                schema = await _find(connector, "schema", database.id, "public")
                view = await _find(connector, "view", schema.id, "public.order_totals")
                alice = await _find(connector, "role", None, "alice")
                view_service = connector.service("view")
                entitlement = f"entitlement:{view.key}:select"

                await view_service.grant(alice.id, entitlement)
                granted = (await view_service.grants(view, Pager("", 1000))).items
                assert alice.id.object_id in _holders(granted, "select")

                await view_service.revoke(alice.id, entitlement)
                revoked = (await view_service.grants(view, Pager("", 1000))).items
                assert alice.id.object_id not in _holders(revoked, "select")
            finally:
                await connector.close()

        _run(run())

    def test_role_attribute_and_membership(self, dsn: str) -> None:
        async def run() -> None:
            connector = await _connector(dsn)
            try:
                database = (await connector.service("database").list(None)).items[0]
                alice = await _find(connector, "role", None, "alice")
                readers = await _find(connector, "role", None, "readers")

                grants = (await connector.service("database").grants(database, Pager("", 1000))).items
                assert alice.id.object_id in _holders(grants, "create-db")

                await connector.service("role").grant(alice.id, f"entitlement:{readers.key}:admin")
                members = (await connector.service("role").grants(readers)).items
                assert (alice.id.object_id, "admin") in {(g.principal.object_id, g.entitlement.name) for g in members}
            finally:
                await connector.close()

        _run(run())
