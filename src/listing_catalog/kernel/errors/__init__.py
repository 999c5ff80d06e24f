"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── InvariantViolationError
    │   ├── ValidationError
    │   └── NotFoundError
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)
        ├── ConnectionError
        └── QueryExecutionError
"""

from listing_catalog.kernel.errors.application import ApplicationError
from listing_catalog.kernel.errors.base import BaseError
from listing_catalog.kernel.errors.domain import (
    DomainError,
    InvariantViolationError,
    NotFoundError,
    ValidationError,
)
from listing_catalog.kernel.errors.infrastructure import (
    ConnectionError,
    InfrastructureError,
    QueryExecutionError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConnectionError",
    "DomainError",
    "InfrastructureError",
    "InvariantViolationError",
    "NotFoundError",
    "QueryExecutionError",
    "ValidationError",
]
