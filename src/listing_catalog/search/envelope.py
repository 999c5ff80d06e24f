"""Search – PaginationEnvelope returned by the executor."""
from __future__ import annotations

import dataclasses
import math
from typing import Any

from listing_catalog.domain.listing import Listing
from listing_catalog.search.query import PageRequest, SortSpec


def total_pages(total: int, size: int) -> int:
    """``ceil(total / size)``, never less than 1."""
    return max(math.ceil(total / size), 1)


@dataclasses.dataclass(frozen=True)
class PageMeta:
    """Effective (post-clamping, post-defaulting) pagination metadata."""

    page: int
    limit: int
    total: int
    pages: int
    sort: SortSpec

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "pages": self.pages,
            "sortBy": self.sort.field.value,
            "order": self.sort.direction.value,
        }


@dataclasses.dataclass(frozen=True)
class PaginationEnvelope:
    """One page of listings plus the metadata describing it."""

    meta: PageMeta
    data: tuple[Listing, ...] = ()

    @classmethod
    def of(
        cls,
        listings: list[Listing],
        total: int,
        page: PageRequest,
        sort: SortSpec,
    ) -> "PaginationEnvelope":
        meta = PageMeta(
            page=page.page,
            limit=page.size,
            total=total,
            pages=total_pages(total, page.size),
            sort=sort,
        )
        return cls(meta=meta, data=tuple(listings))

    @property
    def has_next(self) -> bool:
        return self.meta.page < self.meta.pages

    @property
    def has_previous(self) -> bool:
        return self.meta.page > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": self.meta.to_dict(),
            "data": [listing.to_dict() for listing in self.data],
        }


__all__ = ["PageMeta", "PaginationEnvelope", "total_pages"]
