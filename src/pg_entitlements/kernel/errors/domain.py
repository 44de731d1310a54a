"""Domain errors – malformed catalog data and unparseable identifiers."""

from __future__ import annotations

from typing import Any

from pg_entitlements.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when input or catalog data violates the authorization model."""

    default_code = "domain_error"


class MalformedACLError(DomainError):
    """A native ACL entry could not be parsed."""

    default_code = "malformed_acl"

    def __init__(self, acl: str, reason: str | None = None, **kwargs: Any) -> None:
        msg = f"malformed acl: {acl}"
        if reason:
            msg = f"{msg} ({reason})"
        kwargs.setdefault("detail", {"acl": acl})
        super().__init__(msg, **kwargs)
        self.acl = acl


class InvalidIdentityError(DomainError):
    """A resource, entitlement or grant identifier does not match its grammar."""

    default_code = "invalid_identity"

    def __init__(self, identity: str, expected: str | None = None, **kwargs: Any) -> None:
        msg = f"invalid identity {identity!r}"
        if expected:
            msg = f"{msg}: expected {expected}"
        kwargs.setdefault("detail", {"identity": identity})
        super().__init__(msg, **kwargs)
        self.identity = identity
        self.expected = expected


class InvalidCursorError(DomainError):
    """A pagination cursor is corrupt or from an incompatible encoding."""

    default_code = "invalid_cursor"

    def __init__(self, cursor: str, **kwargs: Any) -> None:
        kwargs.setdefault("detail", {"cursor": cursor})
        super().__init__(f"invalid pagination cursor {cursor!r}", **kwargs)
        self.cursor = cursor


class NotFoundError(DomainError):
    """The requested catalog object does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class DatabaseNotFoundError(NotFoundError):
    """A database tag does not resolve to a known database."""

    default_code = "database_not_found"

    def __init__(self, database: str, **kwargs: Any) -> None:
        super().__init__("database", database or None, **kwargs)
        self.database = database


__all__ = [
    "DatabaseNotFoundError",
    "DomainError",
    "InvalidCursorError",
    "InvalidIdentityError",
    "MalformedACLError",
    "NotFoundError",
]
