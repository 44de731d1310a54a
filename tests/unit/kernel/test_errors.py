"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from pg_entitlements.kernel.errors import (
    ApplicationError,
    BaseError,
    ConnectionError,
    DatabaseNotFoundError,
    DomainError,
    InfrastructureError,
    InvalidCursorError,
    InvalidIdentityError,
    MalformedACLError,
    NotFoundError,
    QueryError,
    UnsupportedOperationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_to_dict_includes_cause_repr(self) -> None:
        err = BaseError("wrapper", cause=ValueError("original"))
        assert "original" in err.to_dict()["cause"]

    def test_cause_is_chained(self) -> None:
        cause = OSError("refused")
        assert BaseError("m", cause=cause).__cause__ is cause

    def test_str_is_json(self) -> None:
        payload = json.loads(str(BaseError("m", detail={"n": 1})))
        assert payload["message"] == "m"
        assert payload["detail"] == {"n": 1}


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class TestDomainErrors:
    def test_malformed_acl_carries_text(self) -> None:
        err = MalformedACLError("alice", "missing '='")
        assert isinstance(err, DomainError)
        assert err.acl == "alice"
        assert err.code == "malformed_acl"
        assert "missing '='" in err.message

    def test_invalid_identity_carries_text(self) -> None:
        err = InvalidIdentityError("role:x", "role:<id>")
        assert err.identity == "role:x"
        assert err.expected == "role:<id>"
        assert err.detail == {"identity": "role:x"}

    def test_invalid_cursor(self) -> None:
        err = InvalidCursorError("abc")
        assert err.cursor == "abc"
        assert err.code == "invalid_cursor"

    def test_not_found_message(self) -> None:
        assert NotFoundError("role", 10).message == "role '10' not found"
        assert NotFoundError("role").message == "role not found"

    def test_database_not_found_is_not_found(self) -> None:
        err = DatabaseNotFoundError("16384")
        assert isinstance(err, NotFoundError)
        assert err.database == "16384"
        assert err.code == "database_not_found"


# ---------------------------------------------------------------------------
# Application / infrastructure errors
# ---------------------------------------------------------------------------


class TestOperationalErrors:
    def test_unsupported_operation_detail(self) -> None:
        err = UnsupportedOperationError("nope", operation="grant", resource_type="schema")
        assert isinstance(err, ApplicationError)
        assert err.detail == {"operation": "grant", "resource_type": "schema"}

    def test_connection_error_default_message(self) -> None:
        err = ConnectionError("sales")
        assert isinstance(err, InfrastructureError)
        assert err.database == "sales"
        assert "sales" in err.message

    def test_query_error_keeps_sqlstate(self) -> None:
        err = QueryError("permission denied", sqlstate="42501")
        assert err.sqlstate == "42501"
        assert err.detail == {"sqlstate": "42501"}

    def test_raise_and_catch_by_family(self) -> None:
        with pytest.raises(InfrastructureError):
            raise QueryError("boom")
