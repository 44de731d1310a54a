"""Kernel models – the ACL capability contract and the listed-resource value."""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from pg_entitlements.kernel.identity import ResourceIdentity
from pg_entitlements.kernel.privileges import PrivilegeSet


@runtime_checkable
class ACLResource(Protocol):
    """Anything grant resolution can run against.

    ``acls`` holds native ACL strings exactly as the catalog reports them; an
    empty sequence means the object still carries its default privileges.
    """

    @property
    def owner_id(self) -> int: ...

    @property
    def acls(self) -> Sequence[str]: ...

    def all_privileges(self) -> PrivilegeSet: ...

    def default_privileges(self) -> PrivilegeSet: ...


@dataclasses.dataclass(frozen=True, slots=True)
class ResourceType:
    """Static description of one resource kind."""

    id: str
    display_name: str
    traits: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class Resource:
    """One listed catalog object, addressed by its identity."""

    id: ResourceIdentity
    display_name: str
    parent: ResourceIdentity | None = None
    profile: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def resource_type(self) -> str:
        return self.id.resource_type

    @property
    def key(self) -> str:
        """Encoded identity, the form handed to callers."""
        return self.id.encode()


__all__ = ["ACLResource", "Resource", "ResourceType"]
