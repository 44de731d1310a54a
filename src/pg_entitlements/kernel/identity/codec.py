"""Identity codec – opaque, round-trippable names for catalog objects.

Shapes::

    <type>:<id>                              simple (roles, databases, large objects)
    <type>:db<dbtag>:<id>                    scoped to one database
    <dbtag>:column:<tableId>:<colId>         column nested under a table
    entitlement:<resourceId>:<slug>[:grant]  entitlement on a resource
    grant:<entitlementId>:<principalId>      one principal holding one entitlement

Every decoder is strict: a string that does not match its shape raises
:class:`InvalidIdentityError` carrying the offending text.
"""

from __future__ import annotations

import dataclasses

from pg_entitlements.kernel.errors import InvalidIdentityError

COLUMN_TYPE = "column"
ENTITLEMENT_PREFIX = "entitlement:"
GRANT_PREFIX = "grant:"
GRANT_SUFFIX = ":grant"
DATABASE_TAG_PREFIX = "db"


# ---------------------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------------------


def _check_database_tag(database_tag: str) -> None:
    if ":" in database_tag:
        raise InvalidIdentityError(database_tag, "a database tag without ':'")


def encode_simple(type_tag: str, object_id: int) -> str:
    return f"{type_tag}:{object_id}"


def encode_scoped(type_tag: str, database_tag: str, object_id: int) -> str:
    _check_database_tag(database_tag)
    return f"{type_tag}:{DATABASE_TAG_PREFIX}{database_tag}:{object_id}"


def encode_nested(database_tag: str, parent_id: int, child_id: int) -> str:
    _check_database_tag(database_tag)
    return f"{database_tag}:{COLUMN_TYPE}:{parent_id}:{child_id}"


def encode_entitlement(resource_id: str, slug: str, grant: bool = False) -> str:
    if grant:
        return f"{ENTITLEMENT_PREFIX}{resource_id}:{slug}{GRANT_SUFFIX}"
    return f"{ENTITLEMENT_PREFIX}{resource_id}:{slug}"


def encode_grant(entitlement_id: str, principal_id: str) -> str:
    return f"{GRANT_PREFIX}{entitlement_id}:{principal_id}"


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------


def _parse_id(part: str, identity: str, expected: str) -> int:
    if not part or not (part.isascii() and part.isdigit()):
        raise InvalidIdentityError(identity, expected)
    return int(part)


def decode_simple(identity: str, type_tag: str | None = None) -> tuple[str, int]:
    """Decode ``<type>:<id>`` into ``(type, id)``."""
    expected = f"{type_tag or '<type>'}:<id>"
    parts = identity.split(":")
    if len(parts) != 2 or not parts[0]:
        raise InvalidIdentityError(identity, expected)
    if type_tag is not None and parts[0] != type_tag:
        raise InvalidIdentityError(identity, expected)
    return parts[0], _parse_id(parts[1], identity, expected)


def decode_scoped(identity: str, type_tag: str | None = None) -> tuple[str, str, int]:
    """Decode ``<type>:db<dbtag>:<id>`` into ``(type, dbtag, id)``."""
    expected = f"{type_tag or '<type>'}:db<dbtag>:<id>"
    parts = identity.split(":")
    if len(parts) != 3 or not parts[0]:
        raise InvalidIdentityError(identity, expected)
    if type_tag is not None and parts[0] != type_tag:
        raise InvalidIdentityError(identity, expected)
    if not parts[1].startswith(DATABASE_TAG_PREFIX):
        raise InvalidIdentityError(identity, expected)
    return parts[0], parts[1][len(DATABASE_TAG_PREFIX):], _parse_id(parts[2], identity, expected)


def decode_nested(identity: str) -> tuple[str, int, int]:
    """Decode ``<dbtag>:column:<tableId>:<colId>`` into ``(dbtag, tableId, colId)``."""
    expected = "<dbtag>:column:<tableId>:<colId>"
    parts = identity.split(":")
    if len(parts) != 4 or parts[1] != COLUMN_TYPE:
        raise InvalidIdentityError(identity, expected)
    return (
        parts[0],
        _parse_id(parts[2], identity, expected),
        _parse_id(parts[3], identity, expected),
    )


def decode_entitlement(identity: str) -> tuple[str, str, bool]:
    """Decode an entitlement id into ``(resourceId, slug, grant)``.

    The resource id is validated with :meth:`ResourceIdentity.parse`, so a
    scoped or nested resource id containing its own colons decodes unambiguously.
    """
    expected = "entitlement:<resourceId>:<slug>[:grant]"
    if not identity.startswith(ENTITLEMENT_PREFIX):
        raise InvalidIdentityError(identity, expected)

    rest = identity[len(ENTITLEMENT_PREFIX):]
    grant = rest.endswith(GRANT_SUFFIX)
    if grant:
        rest = rest[: -len(GRANT_SUFFIX)]

    resource_id, sep, slug = rest.rpartition(":")
    if not sep or not resource_id or not slug:
        raise InvalidIdentityError(identity, expected)
    try:
        ResourceIdentity.parse(resource_id)
    except InvalidIdentityError as exc:
        raise InvalidIdentityError(identity, expected, cause=exc) from exc
    return resource_id, slug, grant


def decode_grant(identity: str) -> tuple[str, str]:
    """Decode ``grant:<entitlementId>:<principalId>`` into its two ids.

    Principals are always simple ids, so the last two segments name the principal.
    """
    expected = "grant:<entitlementId>:<type>:<id>"
    if not identity.startswith(GRANT_PREFIX):
        raise InvalidIdentityError(identity, expected)

    parts = identity[len(GRANT_PREFIX):].rsplit(":", 2)
    if len(parts) != 3:
        raise InvalidIdentityError(identity, expected)
    entitlement_id = parts[0]
    principal_id = f"{parts[1]}:{parts[2]}"
    try:
        decode_simple(principal_id)
        decode_entitlement(entitlement_id)
    except InvalidIdentityError as exc:
        raise InvalidIdentityError(identity, expected, cause=exc) from exc
    return entitlement_id, principal_id


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True, slots=True)
class ResourceIdentity:
    """Decoded form of a resource id.

    ``database`` is ``None`` for simple ids. ``parent_id`` is set only for
    columns, where ``object_id`` is the attribute number and ``parent_id`` the
    owning table's oid.
    """

    resource_type: str
    object_id: int
    database: str | None = None
    parent_id: int | None = None

    def __post_init__(self) -> None:
        if self.parent_id is not None and self.database is None:
            raise ValueError("nested identities require a database tag")
        if self.database is not None:
            _check_database_tag(self.database)

    @classmethod
    def simple(cls, resource_type: str, object_id: int) -> "ResourceIdentity":
        return cls(resource_type, object_id)

    @classmethod
    def scoped(cls, resource_type: str, database: str, object_id: int) -> "ResourceIdentity":
        return cls(resource_type, object_id, database=database)

    @classmethod
    def column(cls, database: str, table_id: int, column_id: int) -> "ResourceIdentity":
        return cls(COLUMN_TYPE, column_id, database=database, parent_id=table_id)

    @classmethod
    def parse(cls, identity: str) -> "ResourceIdentity":
        """Decode any resource id shape, chosen by its segment count."""
        count = identity.count(":")
        if count == 1:
            type_tag, object_id = decode_simple(identity)
            return cls(type_tag, object_id)
        if count == 2:
            type_tag, database, object_id = decode_scoped(identity)
            return cls(type_tag, object_id, database=database)
        if count == 3:
            database, table_id, column_id = decode_nested(identity)
            return cls.column(database, table_id, column_id)
        raise InvalidIdentityError(identity, "a resource identity")

    def encode(self) -> str:
        if self.parent_id is not None:
            return encode_nested(self.database or "", self.parent_id, self.object_id)
        if self.database is not None:
            return encode_scoped(self.resource_type, self.database, self.object_id)
        return encode_simple(self.resource_type, self.object_id)

    def __str__(self) -> str:
        return self.encode()


@dataclasses.dataclass(frozen=True, slots=True)
class EntitlementIdentity:
    resource: ResourceIdentity
    slug: str
    grant: bool = False

    @classmethod
    def parse(cls, identity: str) -> "EntitlementIdentity":
        resource_id, slug, grant = decode_entitlement(identity)
        return cls(ResourceIdentity.parse(resource_id), slug, grant)

    def encode(self) -> str:
        return encode_entitlement(self.resource.encode(), self.slug, self.grant)

    def __str__(self) -> str:
        return self.encode()


@dataclasses.dataclass(frozen=True, slots=True)
class GrantIdentity:
    entitlement: EntitlementIdentity
    principal: ResourceIdentity

    @classmethod
    def parse(cls, identity: str) -> "GrantIdentity":
        entitlement_id, principal_id = decode_grant(identity)
        return cls(EntitlementIdentity.parse(entitlement_id), ResourceIdentity.parse(principal_id))

    def encode(self) -> str:
        return encode_grant(self.entitlement.encode(), self.principal.encode())

    def __str__(self) -> str:
        return self.encode()


__all__ = [
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
