"""Observability – SensitiveFieldsFilter and DSN redaction."""
from __future__ import annotations

import re
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {"password", "passwd", "secret", "token", "dsn", "api_key", "authorization"}
)

_KEYWORD_PASSWORD = re.compile(r"(password\s*=\s*)('[^']*'|\S+)", re.IGNORECASE)


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if k.lower() in self._fields else v) for k, v in data.items()}

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if k.lower() in self._fields:
                result[k] = self.REDACTED
            elif isinstance(v, dict):
                result[k] = self.redact_deep(v)
            else:
                result[k] = v
        return result


def redact_dsn(dsn: str) -> str:
    """Mask the password in a URL or keyword/value connection string.

    >>> redact_dsn("postgres://app:s3cret@db:5432/main")
    'postgres://app:***@db:5432/main'
    """
    try:
        return make_url(dsn).render_as_string(hide_password=True)
    except ArgumentError:
        return _KEYWORD_PASSWORD.sub(r"\1***", dsn)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter", "redact_dsn"]
