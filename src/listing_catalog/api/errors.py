"""API – error → HTTP status mapping."""
from __future__ import annotations

from typing import Any, Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from listing_catalog.kernel.errors import (
    BaseError,
    DomainError,
    InfrastructureError,
    InvariantViolationError,
    NotFoundError,
    ValidationError,
)


class ExceptionMapper:
    """Register listing_catalog error handlers on a FastAPI app.

    Error body schema::

        {"code": "validation_error", "message": "...", "detail": {...}, "errors": [...]}

    Mappings
    --------
    ``ValidationError``          → 400
    ``InvariantViolationError``  → 400
    ``NotFoundError``            → 404
    ``DomainError``              → 422
    ``InfrastructureError``      → 500 (opaque body)
    """

    def __init__(self) -> None:
        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[BaseError], int]] = [
            (ValidationError, 400),
            (InvariantViolationError, 400),
            (NotFoundError, 404),
            (InfrastructureError, 500),
            (DomainError, 422),
        ]

    def status_for(self, exc: BaseException) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` app."""
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._make_handler(status))

    @staticmethod
    def _make_handler(status: int) -> Callable[[Request, Exception], JSONResponse]:
        def handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: ARG001
            body = exc.public_dict() if isinstance(exc, BaseError) else {"code": "error"}
            return JSONResponse(status_code=status, content=body)

        return handler


__all__ = ["ExceptionMapper"]
