"""Infrastructure errors – connection and query failures."""

from __future__ import annotations

from typing import Any

from pg_entitlements.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not an authorization-model violation."""

    default_code = "infrastructure_error"


class ConnectionError(InfrastructureError):  # noqa: A001
    """Failed to (re)connect to a database."""

    default_code = "connection_error"

    def __init__(
        self,
        database: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not connect to database '{database}'", **kwargs)
        self.database = database


class QueryError(InfrastructureError):
    """A catalog query or native statement failed on the server."""

    default_code = "query_error"

    def __init__(
        self,
        message: str,
        *,
        sqlstate: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"sqlstate": sqlstate})
        super().__init__(message, **kwargs)
        self.sqlstate = sqlstate


__all__ = ["ConnectionError", "InfrastructureError", "QueryError"]
