"""Search – SearchQuery, SortSpec, PageRequest value objects."""
from __future__ import annotations

import dataclasses
from enum import Enum

from listing_catalog.domain.listing import (
    FIELD_CREATED_AT,
    FIELD_NAME,
    FIELD_PRICE_TIER,
    FIELD_RATING,
)
from listing_catalog.search.predicates import Conjunction

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest value a BSON int64 ($skip, $limit) can hold.
MAX_STORE_INT = 2**63 - 1


class SortField(str, Enum):
    """Allow-listed sort keys; each one is backed by an index."""

    NAME = "name"
    RATING = "rating"
    PRICE = "price"
    CREATED_AT = "createdAt"

    @property
    def document_field(self) -> str:
        return _DOCUMENT_FIELDS[self]


_DOCUMENT_FIELDS: dict[SortField, str] = {
    SortField.NAME: FIELD_NAME,
    SortField.RATING: FIELD_RATING,
    SortField.PRICE: FIELD_PRICE_TIER,
    SortField.CREATED_AT: FIELD_CREATED_AT,
}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def sign(self) -> int:
        return 1 if self is SortDirection.ASC else -1


@dataclasses.dataclass(frozen=True)
class SortSpec:
    """Resolved sort; defaults to newest first."""

    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters (already clamped)."""

    page: int = 1
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


@dataclasses.dataclass(frozen=True)
class SearchQuery:
    """Everything the executor needs for one request."""

    predicate: Conjunction = dataclasses.field(default_factory=Conjunction)
    sort: SortSpec = dataclasses.field(default_factory=SortSpec)
    page: PageRequest = dataclasses.field(default_factory=PageRequest)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MAX_STORE_INT",
    "PageRequest",
    "SearchQuery",
    "SortDirection",
    "SortField",
    "SortSpec",
]
