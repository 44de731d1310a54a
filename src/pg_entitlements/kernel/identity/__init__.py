"""Kernel identity – resource, entitlement and grant identifier codec."""
from pg_entitlements.kernel.identity.codec import (
    COLUMN_TYPE,
    EntitlementIdentity,
    GrantIdentity,
    ResourceIdentity,
    decode_entitlement,
    decode_grant,
    decode_nested,
    decode_scoped,
    decode_simple,
    encode_entitlement,
    encode_grant,
    encode_nested,
    encode_scoped,
    encode_simple,
)

__all__ = [
    "COLUMN_TYPE",
    "EntitlementIdentity",
    "GrantIdentity",
    "ResourceIdentity",
    "decode_entitlement",
    "decode_grant",
    "decode_nested",
    "decode_scoped",
    "decode_simple",
    "encode_entitlement",
    "encode_grant",
    "encode_nested",
    "encode_scoped",
    "encode_simple",
]
