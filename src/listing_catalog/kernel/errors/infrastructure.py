"""Infrastructure errors – I/O failures talking to the document store."""

from __future__ import annotations

from typing import Any

from listing_catalog.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"

    def public_dict(self) -> dict[str, Any]:
        return {"code": "internal_error", "message": "Internal Server Error"}


class ConnectionError(InfrastructureError):  # noqa: A001
    """Failed to connect to an external resource (the MongoDB deployment)."""

    default_code = "connection_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not connect to '{resource}'", **kwargs)
        self.resource = resource


class QueryExecutionError(InfrastructureError):
    """The store failed while executing a search.

    Carries the underlying exception as ``cause`` for logging; the public
    rendering never includes it.
    """

    default_code = "query_execution_error"

    def __init__(self, message: str = "Search query failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "ConnectionError",
    "InfrastructureError",
    "QueryExecutionError",
]
