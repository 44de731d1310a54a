"""
pg_entitlements – PostgreSQL grant-graph inspection and provisioning.

Import path convention::

    from pg_entitlements.kernel.privileges import ACLEntry, Privilege, PrivilegeSet
    from pg_entitlements.kernel.identity import ResourceIdentity
    from pg_entitlements.application.grants import GrantResolver
    from pg_entitlements.adapters.postgres import ClientDatabasesPool
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
