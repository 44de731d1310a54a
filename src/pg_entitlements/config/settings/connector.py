"""Config settings – ConnectorSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar
import logging

from sqlalchemy.exc import ArgumentError

from pg_entitlements.adapters.postgres.engine import build_url
from pg_entitlements.config.settings.base import Settings
from pg_entitlements.config.validation import InvalidSettingValueError

MAX_PAGE_SIZE = 1000


@dataclasses.dataclass
class ConnectorSettings(Settings):
    """Everything needed to inspect one PostgreSQL server.

    Loaded from ``PG_ENTITLEMENTS_*`` variables, e.g. ``PG_ENTITLEMENTS_DSN``
    and ``PG_ENTITLEMENTS_SCHEMAS=public,reporting``. ``repr`` never shows the
    DSN, which may carry a password.
    """

    _prefix: ClassVar[str] = "PG_ENTITLEMENTS"

    dsn: str = dataclasses.field(repr=False)
    schemas: list[str] = dataclasses.field(default_factory=lambda: ["public"])
    include_columns: bool = False
    include_large_objects: bool = False
    sync_all_databases: bool = False
    skip_built_in_functions: bool = False
    page_size: int = 100
    connect_timeout: float = 10.0
    log_level: str = "INFO"

    def _validate(self) -> None:
        if not self.dsn:
            raise InvalidSettingValueError("dsn", "", "must not be empty")
        try:
            build_url(self.dsn)
        except (ArgumentError, ValueError) as exc:
            raise InvalidSettingValueError("dsn", "***", str(exc)) from exc
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise InvalidSettingValueError("page_size", self.page_size, f"must be between 1 and {MAX_PAGE_SIZE}")
        if self.connect_timeout <= 0:
            raise InvalidSettingValueError("connect_timeout", self.connect_timeout, "must be positive")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown level")


__all__ = ["ConnectorSettings", "MAX_PAGE_SIZE"]
