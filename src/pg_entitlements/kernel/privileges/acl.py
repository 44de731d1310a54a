"""ACL codec – native ``grantee=privs/grantor`` entries.

Grammar::

    grantee=<code>[*]<code>[*].../grantor

An empty grantee denotes PUBLIC. ``*`` after a code marks that privilege as
held with grant option. Role names holding anything but ASCII letters, digits
and ``_`` are double-quoted with embedded quotes doubled, as the server prints
them; parsing unquotes them. Letters that are not modelled by :class:`Privilege`
are skipped, so entries written by a newer server still parse.
"""

from __future__ import annotations

import dataclasses

from pg_entitlements.kernel.errors import MalformedACLError
from pg_entitlements.kernel.privileges.privilege import (
    EMPTY_PRIVILEGES,
    Privilege,
    PrivilegeSet,
)


def _needs_quotes(name: str) -> bool:
    return any(not (ch.isascii() and (ch.isalnum() or ch == "_")) for ch in name)


def _quote_name(name: str) -> str:
    if not name or not _needs_quotes(name):
        return name
    return '"' + name.replace('"', '""') + '"'


def _read_quoted(text: str, start: int, entry: str) -> tuple[str, int]:
    """Read the quoted name opening at *start*; return it and the index after it."""
    chars: list[str] = []
    i = start + 1
    while i < len(text):
        if text[i] == '"':
            if text[i + 1 : i + 2] == '"':
                chars.append('"')
                i += 2
                continue
            return "".join(chars), i + 1
        chars.append(text[i])
        i += 1
    raise MalformedACLError(entry, "unterminated quoted name")


def _split_grantor(rest: str, entry: str) -> tuple[str, str]:
    """Split ``codes/grantor`` into its parts, unquoting a quoted grantor."""
    if not rest.endswith('"'):
        codes, sep, grantor = rest.rpartition("/")
        if not sep:
            raise MalformedACLError(entry, "missing '/'")
        if grantor.startswith('"'):
            raise MalformedACLError(entry, "unterminated quoted name")
        return codes, grantor

    # walk back to the quote that opens the grantor
    j = len(rest) - 2
    while j >= 0:
        if rest[j] == '"':
            if j > 0 and rest[j - 1] == '"':
                j -= 2
                continue
            break
        j -= 1
    if j <= 0 or rest[j - 1] != "/":
        raise MalformedACLError(entry, "missing '/'")
    grantor, end = _read_quoted(rest, j, entry)
    if end != len(rest):
        raise MalformedACLError(entry, "unterminated quoted name")
    return rest[: j - 1], grantor


@dataclasses.dataclass(frozen=True, slots=True)
class ACLEntry:
    """One principal's privileges on one object, as recorded by the server."""

    grantee: str
    grantor: str
    privileges: PrivilegeSet = EMPTY_PRIVILEGES
    grant_privileges: PrivilegeSet = EMPTY_PRIVILEGES

    def __post_init__(self) -> None:
        if not self.grant_privileges.issubset(self.privileges):
            raise ValueError("grant_privileges must be a subset of privileges")

    @property
    def is_public(self) -> bool:
        return self.grantee == ""

    def check(self, privilege: Privilege) -> tuple[bool, bool]:
        """Return ``(held, held_with_grant_option)`` for *privilege*."""
        return self.privileges.has(privilege), self.grant_privileges.has(privilege)

    @classmethod
    def from_privilege_sets(
        cls,
        privileges: PrivilegeSet,
        grant_privileges: PrivilegeSet = EMPTY_PRIVILEGES,
        *,
        grantee: str = "",
        grantor: str = "",
    ) -> "ACLEntry":
        return cls(grantee=grantee, grantor=grantor, privileges=privileges, grant_privileges=grant_privileges)

    @classmethod
    def parse(cls, text: str) -> "ACLEntry":
        """Parse one native ACL entry; raise :class:`MalformedACLError` if it is not one."""
        if text.startswith('"'):
            grantee, end = _read_quoted(text, 0, text)
            if text[end : end + 1] != "=":
                raise MalformedACLError(text, "missing '='")
            rest = text[end + 1 :]
        else:
            grantee, sep, rest = text.partition("=")
            if not sep:
                raise MalformedACLError(text, "missing '='")

        codes, grantor = _split_grantor(rest, text)

        privileges = EMPTY_PRIVILEGES
        grant_privileges = EMPTY_PRIVILEGES
        pending: Privilege | None = None
        for char in codes:
            if char == "*":
                if pending is None:
                    raise MalformedACLError(text, "'*' without a preceding privilege")
                grant_privileges = grant_privileges.set(pending)
                pending = None
                continue

            privilege = Privilege.from_code(char)
            if privilege is not None:
                pending = privilege
                privileges = privileges.set(privilege)

        return cls(grantee=grantee, grantor=grantor, privileges=privileges, grant_privileges=grant_privileges)

    def serialize(self) -> str:
        """Render in native form; an entry holding nothing renders as ``""``."""
        if not self.privileges:
            return ""

        parts = [_quote_name(self.grantee), "="]
        for privilege in self.privileges:
            parts.append(privilege.code)
            if self.grant_privileges.has(privilege):
                parts.append("*")
        parts.append("/")
        parts.append(_quote_name(self.grantor))
        return "".join(parts)

    def __str__(self) -> str:
        return self.serialize()


def parse_acls(entries: list[str] | tuple[str, ...] | None) -> list[ACLEntry]:
    """Parse every entry, failing on the first malformed one."""
    return [ACLEntry.parse(entry) for entry in entries or ()]


__all__ = ["ACLEntry", "parse_acls"]
