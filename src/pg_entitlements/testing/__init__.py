"""Testing support – in-memory catalog fakes and hypothesis strategies.

The strategies need the ``test`` extra (``pip install "pg-entitlements[test]"``)
and are imported from :mod:`pg_entitlements.testing.strategies` directly.
"""

from pg_entitlements.testing.fakes import InMemoryCatalogClient

__all__ = ["InMemoryCatalogClient"]
