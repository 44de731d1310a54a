"""Application-layer errors – operations a resource kind cannot perform."""

from __future__ import annotations

from typing import Any

from pg_entitlements.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnsupportedOperationError(ApplicationError):
    """An operation was invoked against a resource kind that does not support it."""

    default_code = "unsupported_operation"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        resource_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"operation": operation, "resource_type": resource_type})
        super().__init__(message, **kwargs)
        self.operation = operation
        self.resource_type = resource_type


__all__ = ["ApplicationError", "UnsupportedOperationError"]
