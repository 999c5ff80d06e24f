"""MongoDB adapter – MongoListingStore."""

from __future__ import annotations

from typing import Any

from listing_catalog.domain.listing import (
    FIELD_CATEGORY,
    FIELD_CITY,
    FIELD_CREATED_AT,
    FIELD_NAME,
    FIELD_PRICE_TIER,
    FIELD_RATING,
    FIELD_TAGS,
)


class MongoListingStore:
    """Read side of the ``listings`` collection on a **motor** collection.

    Call :meth:`create_indexes` once on startup so every filter and sort
    key the search pipeline can emit is backed by an index.
    """

    COLLECTION_NAME = "listings"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    @classmethod
    async def create_indexes(cls, collection: Any) -> None:
        """Create field-level and compound search indexes.

        Idempotent – safe to call repeatedly.
        """
        await collection.create_index(FIELD_CITY, name="idx_city")
        await collection.create_index(FIELD_CATEGORY, name="idx_category")
        await collection.create_index([(FIELD_RATING, -1)], name="idx_rating")
        await collection.create_index(FIELD_PRICE_TIER, name="idx_price_tier")
        await collection.create_index(FIELD_TAGS, name="idx_tags")
        await collection.create_index([(FIELD_CREATED_AT, -1)], name="idx_created_at")
        await collection.create_index(FIELD_NAME, name="idx_name")
        # Common filter + sort combinations
        await collection.create_index(
            [(FIELD_CITY, 1), (FIELD_RATING, -1)], name="idx_city_rating"
        )
        await collection.create_index(
            [(FIELD_CATEGORY, 1), (FIELD_RATING, -1)], name="idx_category_rating"
        )

    # ------------------------------------------------------------------
    # ListingStore interface
    # ------------------------------------------------------------------

    async def aggregate(
        self,
        pipeline: list[dict[str, Any]],
        *,
        max_time_ms: int | None = None,
    ) -> list[dict[str, Any]]:
        kwargs: dict[str, Any] = {}
        if max_time_ms is not None:
            kwargs["maxTimeMS"] = max_time_ms
        cursor = self._col.aggregate(pipeline, **kwargs)
        try:
            return await cursor.to_list(length=None)
        finally:
            await cursor.close()

    async def ping(self) -> bool:
        """Return ``True`` when the deployment answers ``ping``."""
        result = await self._col.database.command("ping")
        return bool(result.get("ok"))


__all__ = ["MongoListingStore"]
