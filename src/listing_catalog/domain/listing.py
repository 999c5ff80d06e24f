"""Domain – Listing entity and its document mapping.

Listings are stored with the field names of the original collection
(``cuisine``, ``avg_rating``, ``price_level``, ``createdAt``); the entity
exposes domain names (``category``, ``rating``, ``price_tier``,
``created_at``).  Every translation between the two lives here.
"""
from __future__ import annotations

import dataclasses
import math
from datetime import datetime
from typing import Any, Mapping

from listing_catalog.kernel.errors import InvariantViolationError, ValidationError

RATING_MIN = 0.0
RATING_MAX = 5.0
PRICE_TIER_MIN = 1
PRICE_TIER_MAX = 4

# Document field names
FIELD_ID = "_id"
FIELD_NAME = "name"
FIELD_CATEGORY = "cuisine"
FIELD_RATING = "avg_rating"
FIELD_PRICE_TIER = "price_level"
FIELD_TAGS = "tags"
FIELD_ADDRESS = "address"
FIELD_CITY = "address.city"
FIELD_CREATED_AT = "createdAt"
FIELD_UPDATED_AT = "updatedAt"

# Fields returned by search; never the full internal document.
SEARCH_PROJECTION: dict[str, int] = {
    FIELD_ID: 1,
    FIELD_NAME: 1,
    FIELD_CATEGORY: 1,
    FIELD_RATING: 1,
    FIELD_PRICE_TIER: 1,
    FIELD_TAGS: 1,
    FIELD_ADDRESS: 1,
    FIELD_CREATED_AT: 1,
}


@dataclasses.dataclass(frozen=True)
class Address:
    city: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"city": self.city}


@dataclasses.dataclass(frozen=True)
class Listing:
    """A searchable catalog entry.

    ``rating`` and ``price_tier`` are checked against their bounds on
    construction, so an out-of-range listing can never be written.
    """

    id: str
    name: str
    category: str | None = None
    rating: float = RATING_MIN
    price_tier: int = PRICE_TIER_MIN
    tags: tuple[str, ...] = ()
    address: Address = dataclasses.field(default_factory=Address)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not (RATING_MIN <= self.rating <= RATING_MAX):
            raise InvariantViolationError(
                f"rating must be between {RATING_MIN:g} and {RATING_MAX:g}",
                detail={"rating": self.rating},
            )
        if not (PRICE_TIER_MIN <= self.price_tier <= PRICE_TIER_MAX):
            raise InvariantViolationError(
                f"price tier must be between {PRICE_TIER_MIN} and {PRICE_TIER_MAX}",
                detail={"price_tier": self.price_tier},
            )

    # ------------------------------------------------------------------
    # Document mapping
    # ------------------------------------------------------------------

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Listing":
        """Reconstruct a listing from a (possibly projected) document.

        Stored nulls are read as absent fields and get the same defaults.
        """
        address = doc.get(FIELD_ADDRESS)
        if not isinstance(address, Mapping):
            address = {}
        return cls(
            id=str(doc[FIELD_ID]),
            name=_or_default(doc.get(FIELD_NAME), ""),
            category=doc.get(FIELD_CATEGORY),
            rating=_or_default(doc.get(FIELD_RATING), RATING_MIN),
            price_tier=_or_default(doc.get(FIELD_PRICE_TIER), PRICE_TIER_MIN),
            tags=tuple(doc.get(FIELD_TAGS) or ()),
            address=Address(city=address.get("city")),
            created_at=doc.get(FIELD_CREATED_AT),
            updated_at=doc.get(FIELD_UPDATED_AT),
        )

    def to_document(self) -> dict[str, Any]:
        """Return the BSON-compatible body of the listing (without ``_id``)."""
        return {
            FIELD_NAME: self.name,
            FIELD_CATEGORY: self.category,
            FIELD_RATING: self.rating,
            FIELD_PRICE_TIER: self.price_tier,
            FIELD_TAGS: list(self.tags),
            FIELD_ADDRESS: self.address.to_dict(),
            FIELD_CREATED_AT: self.created_at,
            FIELD_UPDATED_AT: self.updated_at,
        }

    def to_dict(self) -> dict[str, Any]:
        """Render for an HTTP response."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "rating": self.rating,
            "priceTier": self.price_tier,
            "tags": list(self.tags),
            "address": self.address.to_dict(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclasses.dataclass(frozen=True)
class ListingDraft:
    """Writable fields of a listing, parsed from a request body."""

    name: str
    category: str | None = None
    rating: float = RATING_MIN
    price_tier: int = PRICE_TIER_MIN
    tags: tuple[str, ...] = ()
    city: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ListingDraft":
        """Validate a JSON body.

        Raises:
            ValidationError: listing every rejected field.
        """
        errors: list[dict[str, Any]] = []

        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append({"field": "name", "reason": "required non-empty string"})

        category = payload.get("category", payload.get("cuisine"))
        if category is not None and not isinstance(category, str):
            errors.append({"field": "category", "reason": "must be a string"})

        rating = payload.get("rating", RATING_MIN)
        if not _is_number(rating) or not (RATING_MIN <= rating <= RATING_MAX):
            errors.append(
                {"field": "rating", "reason": f"must be a number in [{RATING_MIN:g}, {RATING_MAX:g}]"}
            )

        price_tier = payload.get("priceTier", PRICE_TIER_MIN)
        if (
            not isinstance(price_tier, int)
            or isinstance(price_tier, bool)
            or not (PRICE_TIER_MIN <= price_tier <= PRICE_TIER_MAX)
        ):
            errors.append(
                {"field": "priceTier", "reason": f"must be an integer in [{PRICE_TIER_MIN}, {PRICE_TIER_MAX}]"}
            )

        tags = payload.get("tags", [])
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            errors.append({"field": "tags", "reason": "must be a list of strings"})

        address = payload.get("address") or {}
        city = address.get("city") if isinstance(address, Mapping) else None
        if city is not None and not isinstance(city, str):
            errors.append({"field": "address.city", "reason": "must be a string"})

        if errors:
            raise ValidationError("Invalid listing payload", errors=errors)

        return cls(
            name=name.strip(),
            category=category,
            rating=float(rating),
            price_tier=price_tier,
            tags=tuple(t.strip() for t in tags if t.strip()),
            city=city,
        )

    def to_listing(
        self,
        listing_id: str,
        *,
        created_at: datetime | None,
        updated_at: datetime | None,
    ) -> Listing:
        return Listing(
            id=listing_id,
            name=self.name,
            category=self.category,
            rating=self.rating,
            price_tier=self.price_tier,
            tags=self.tags,
            address=Address(city=self.city),
            created_at=created_at,
            updated_at=updated_at,
        )


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


__all__ = [
    "Address",
    "FIELD_CATEGORY",
    "FIELD_CITY",
    "FIELD_CREATED_AT",
    "FIELD_ID",
    "FIELD_NAME",
    "FIELD_PRICE_TIER",
    "FIELD_RATING",
    "FIELD_TAGS",
    "FIELD_UPDATED_AT",
    "Listing",
    "ListingDraft",
    "PRICE_TIER_MAX",
    "PRICE_TIER_MIN",
    "RATING_MAX",
    "RATING_MIN",
    "SEARCH_PROJECTION",
]
