"""Unit tests for native ACL entry parsing and serialisation."""

from __future__ import annotations

import pytest
from hypothesis import given

from pg_entitlements.kernel.errors import MalformedACLError
from pg_entitlements.kernel.privileges import EMPTY_PRIVILEGES, ACLEntry, Privilege, PrivilegeSet, parse_acls
from pg_entitlements.testing.strategies import acl_entries


class TestACLEntryParse:
    def test_grantee_grantor_and_grant_option(self) -> None:
        entry = ACLEntry.parse("alice=r*w/bob")
        assert entry.grantee == "alice"
        assert entry.grantor == "bob"
        assert entry.privileges == PrivilegeSet.of(Privilege.SELECT, Privilege.UPDATE)
        assert entry.grant_privileges == PrivilegeSet.of(Privilege.SELECT)

    def test_check(self) -> None:
        entry = ACLEntry.parse("alice=r*w/bob")
        assert entry.check(Privilege.SELECT) == (True, True)
        assert entry.check(Privilege.UPDATE) == (True, False)
        assert entry.check(Privilege.DELETE) == (False, False)

    def test_public_entry(self) -> None:
        entry = ACLEntry.parse("=Tc/postgres")
        assert entry.is_public
        assert entry.privileges == PrivilegeSet.of(Privilege.TEMPORARY, Privilege.CONNECT)

    def test_grantor_split_on_last_slash(self) -> None:
        entry = ACLEntry.parse("a/b=r/c")
        assert entry.grantee == "a/b"
        assert entry.grantor == "c"

    def test_quoted_names_are_unquoted(self) -> None:
        entry = ACLEntry.parse('"app-user"=r*/"Ops Team"')
        assert entry.grantee == "app-user"
        assert entry.grantor == "Ops Team"
        assert entry.grant_privileges == PrivilegeSet.of(Privilege.SELECT)

    def test_quoted_name_with_separators_and_quotes(self) -> None:
        entry = ACLEntry.parse('"a=b/c"=w/"say ""hi"""')
        assert entry.grantee == "a=b/c"
        assert entry.grantor == 'say "hi"'
        assert entry.privileges == PrivilegeSet.of(Privilege.UPDATE)

    def test_unknown_letters_ignored(self) -> None:
        entry = ACLEntry.parse("alice=rzw/bob")
        assert entry.privileges == PrivilegeSet.of(Privilege.SELECT, Privilege.UPDATE)

    def test_star_after_unknown_letter_applies_to_previous_privilege(self) -> None:
        entry = ACLEntry.parse("alice=rz*/bob")
        assert entry.grant_privileges == PrivilegeSet.of(Privilege.SELECT)

    def test_empty_privilege_list(self) -> None:
        entry = ACLEntry.parse("alice=/bob")
        assert entry.privileges == EMPTY_PRIVILEGES

    @pytest.mark.parametrize("text", ["alice", "alice=r", "alice=*r/bob", "alice=r**/bob", "", '"alice=r/bob', '"alice"r/bob', 'alice=r/"bob'])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedACLError) as info:
            ACLEntry.parse(text)
        assert info.value.acl == text


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


class TestACLEntrySerialize:
    def test_serialize(self) -> None:
        entry = ACLEntry.from_privilege_sets(
            PrivilegeSet.of(Privilege.SELECT, Privilege.UPDATE),
            PrivilegeSet.of(Privilege.SELECT),
            grantee="alice",
            grantor="bob",
        )
        assert entry.serialize() == "alice=r*w/bob"
        assert str(entry) == "alice=r*w/bob"

    def test_public_is_written_with_empty_grantee(self) -> None:
        entry = ACLEntry.from_privilege_sets(PrivilegeSet.of(Privilege.CONNECT), grantor="postgres")
        assert entry.serialize() == "=c/postgres"

    def test_names_needing_quotes_are_quoted(self) -> None:
        entry = ACLEntry.from_privilege_sets(PrivilegeSet.of(Privilege.SELECT), grantee="app-user", grantor='o"k')
        assert entry.serialize() == '"app-user"=r/"o""k"'
        assert ACLEntry.parse(entry.serialize()) == entry

    def test_no_privileges_serializes_empty(self) -> None:
        assert ACLEntry.from_privilege_sets(EMPTY_PRIVILEGES, grantee="a", grantor="b").serialize() == ""

    def test_grant_must_be_subset(self) -> None:
        with pytest.raises(ValueError):
            ACLEntry.from_privilege_sets(
                PrivilegeSet.of(Privilege.SELECT), PrivilegeSet.of(Privilege.UPDATE), grantee="a", grantor="b"
            )

    @given(acl_entries())
    def test_parse_inverts_serialize(self, entry: ACLEntry) -> None:
        assert ACLEntry.parse(entry.serialize()) == entry


class TestParseACLs:
    def test_none_and_empty(self) -> None:
        assert parse_acls(None) == []
        assert parse_acls([]) == []

    def test_fails_on_first_malformed(self) -> None:
        with pytest.raises(MalformedACLError) as info:
            parse_acls(["=r/postgres", "broken", "also broken"])
        assert info.value.acl == "broken"
