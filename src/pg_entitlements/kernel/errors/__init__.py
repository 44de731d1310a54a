"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── MalformedACLError
    │   ├── InvalidIdentityError
    │   ├── InvalidCursorError
    │   └── NotFoundError
    │       └── DatabaseNotFoundError
    ├── ApplicationError         (application.py)
    │   └── UnsupportedOperationError
    └── InfrastructureError      (infrastructure.py)
        ├── ConnectionError
        └── QueryError
"""

from pg_entitlements.kernel.errors.application import (
    ApplicationError,
    UnsupportedOperationError,
)
from pg_entitlements.kernel.errors.base import BaseError
from pg_entitlements.kernel.errors.domain import (
    DatabaseNotFoundError,
    DomainError,
    InvalidCursorError,
    InvalidIdentityError,
    MalformedACLError,
    NotFoundError,
)
from pg_entitlements.kernel.errors.infrastructure import (
    ConnectionError,
    InfrastructureError,
    QueryError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConnectionError",
    "DatabaseNotFoundError",
    "DomainError",
    "InfrastructureError",
    "InvalidCursorError",
    "InvalidIdentityError",
    "MalformedACLError",
    "NotFoundError",
    "QueryError",
    "UnsupportedOperationError",
]
