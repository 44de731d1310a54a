"""Privilege model – the closed set of privilege kinds and an immutable bitmask over it.

Bit positions are part of the persisted contract: a bitmask written by one
release must decode to the same kinds in the next. New kinds are appended
after ``ALTER_SYSTEM`` and existing members are never reordered.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Callable, Iterator


class Privilege(enum.Enum):
    """One privilege kind; the value is its bit in a :class:`PrivilegeSet`."""

    INSERT = 1 << 0
    SELECT = 1 << 1
    UPDATE = 1 << 2
    DELETE = 1 << 3
    TRUNCATE = 1 << 4
    REFERENCES = 1 << 5
    TRIGGER = 1 << 6
    EXECUTE = 1 << 7
    USAGE = 1 << 8
    CREATE = 1 << 9
    TEMPORARY = 1 << 10
    CONNECT = 1 << 11
    SET = 1 << 12
    ALTER_SYSTEM = 1 << 13

    @property
    def bit(self) -> int:
        return self.value

    @property
    def display_name(self) -> str:
        """Canonical upper-case name, e.g. ``"ALTER SYSTEM"``."""
        return _DISPLAY_NAMES[self]

    @property
    def code(self) -> str:
        """Single-character code used in native ACL text (``"r"`` for SELECT)."""
        return _CODES[self]

    @property
    def slug(self) -> str:
        """Lower-case name used inside entitlement identifiers."""
        return self.display_name.lower()

    @classmethod
    def from_code(cls, code: str) -> "Privilege | None":
        """Return the kind for a native ACL letter, or ``None`` if unmodelled."""
        return _BY_CODE.get(code)

    @classmethod
    def from_name(cls, name: str) -> "Privilege | None":
        """Look up a kind by name, ignoring case, spaces and underscores."""
        return _BY_NAME.get(_name_key(name))


_CODES: dict[Privilege, str] = {
    Privilege.INSERT: "a",
    Privilege.SELECT: "r",
    Privilege.UPDATE: "w",
    Privilege.DELETE: "d",
    Privilege.TRUNCATE: "D",
    Privilege.REFERENCES: "x",
    Privilege.TRIGGER: "t",
    Privilege.EXECUTE: "X",
    Privilege.USAGE: "U",
    Privilege.CREATE: "C",
    Privilege.TEMPORARY: "T",
    Privilege.CONNECT: "c",
    Privilege.SET: "s",
    Privilege.ALTER_SYSTEM: "A",
}

_DISPLAY_NAMES: dict[Privilege, str] = {p: p.name.replace("_", " ") for p in Privilege}
_BY_CODE: dict[str, Privilege] = {code: p for p, code in _CODES.items()}


def _name_key(name: str) -> str:
    return "".join(name.replace("_", " ").split()).upper()


_BY_NAME: dict[str, Privilege] = {_name_key(name): p for p, name in _DISPLAY_NAMES.items()}


@dataclasses.dataclass(frozen=True, slots=True)
class PrivilegeSet:
    """Immutable bitmask over :class:`Privilege`.

    Iteration (and :meth:`range`) always follows declaration order, which is
    the order native ACL text is written in.

    Example::

        privs = PrivilegeSet.of(Privilege.SELECT).set(Privilege.UPDATE)
        privs.has(Privilege.SELECT)         # True
        [p.code for p in privs]             # ["r", "w"]
    """

    bits: int = 0

    def __post_init__(self) -> None:
        if self.bits < 0 or self.bits >= _TERMINATOR:
            raise ValueError(f"bits {self.bits:#x} outside the known privilege range")

    @classmethod
    def of(cls, *privileges: Privilege) -> "PrivilegeSet":
        bits = 0
        for privilege in privileges:
            bits |= privilege.bit
        return cls(bits)

    def set(self, other: "Privilege | PrivilegeSet") -> "PrivilegeSet":
        """Return the union with a single kind or another set."""
        return PrivilegeSet(self.bits | _bits(other))

    def has(self, privilege: Privilege) -> bool:
        return self.bits & privilege.bit != 0

    def issubset(self, other: "PrivilegeSet") -> bool:
        return self.bits & ~other.bits == 0

    def range(self, visit: Callable[[Privilege], bool | None]) -> None:
        """Call *visit* for each held kind in order; stop when it returns ``False``."""
        for privilege in self:
            if visit(privilege) is False:
                return

    def names(self) -> list[str]:
        return [p.display_name for p in self]

    def __iter__(self) -> Iterator[Privilege]:
        for privilege in Privilege:
            if self.bits & privilege.bit:
                yield privilege

    def __contains__(self, privilege: object) -> bool:
        return isinstance(privilege, Privilege) and self.has(privilege)

    def __len__(self) -> int:
        return self.bits.bit_count()

    def __bool__(self) -> bool:
        return self.bits != 0

    def __or__(self, other: "Privilege | PrivilegeSet") -> "PrivilegeSet":
        return self.set(other)

    def __and__(self, other: "Privilege | PrivilegeSet") -> "PrivilegeSet":
        return PrivilegeSet(self.bits & _bits(other))

    def __sub__(self, other: "Privilege | PrivilegeSet") -> "PrivilegeSet":
        return PrivilegeSet(self.bits & ~_bits(other))

    def __repr__(self) -> str:
        return f"PrivilegeSet({'|'.join(self.names()) or 'EMPTY'})"


def _bits(value: "Privilege | PrivilegeSet") -> int:
    if isinstance(value, Privilege):
        return value.bit
    return value.bits


_TERMINATOR = 1 << len(Privilege)

EMPTY_PRIVILEGES = PrivilegeSet()
ALL_PRIVILEGES = PrivilegeSet(_TERMINATOR - 1)


__all__ = ["ALL_PRIVILEGES", "EMPTY_PRIVILEGES", "Privilege", "PrivilegeSet"]
