"""Domain errors – caller mistakes and invariant violations."""

from __future__ import annotations

from typing import Any

from listing_catalog.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """An entity invariant was violated (e.g. rating out of bounds)."""

    default_code = "invariant_violation"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``field`` names the offending parameter when there is exactly one;
    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.errors: list[dict[str, Any]] = errors or []
        if field is not None and not self.errors:
            self.errors.append({"field": field, "reason": message})

    @classmethod
    def for_field(cls, field: str, value: Any, reason: str) -> "ValidationError":
        """Build an error for a single rejected parameter."""
        return cls(
            f"Invalid value for '{field}': {reason}",
            field=field,
            errors=[{"field": field, "value": value, "reason": reason}],
        )

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """The requested resource does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


__all__ = [
    "DomainError",
    "InvariantViolationError",
    "NotFoundError",
    "ValidationError",
]
