"""Observability – structured logging helpers."""
from pg_entitlements.observability.logging.factory import JsonLoggerFactory
from pg_entitlements.observability.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
    redact_dsn,
)
from pg_entitlements.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
    "redact_dsn",
]
