"""Testing fakes – in-memory doubles for the catalog ports."""
from pg_entitlements.testing.fakes.catalog import InMemoryCatalogClient

__all__ = ["InMemoryCatalogClient"]
