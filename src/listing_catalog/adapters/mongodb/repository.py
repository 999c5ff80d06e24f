"""MongoDB adapter – MongoListingRepository (by-id CRUD)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Callable

from bson import ObjectId
from pymongo import ReturnDocument

from listing_catalog.domain.listing import (
    FIELD_CREATED_AT,
    FIELD_ID,
    Listing,
    ListingDraft,
)
from listing_catalog.kernel.errors import NotFoundError


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _object_id(value: str) -> ObjectId | None:
    return ObjectId(value) if ObjectId.is_valid(value) else None


class MongoListingRepository:
    """Create / read / update / delete single listings.

    Identifiers that are not valid ObjectIds are treated as missing rather
    than as caller errors, matching a lookup that finds nothing.

    Usage::

        repo = MongoListingRepository(db.restaurants)
        listing = await repo.create(ListingDraft(name="Sushi Go"))
        await repo.get_or_raise(listing.id)
    """

    RESOURCE = "Listing"

    def __init__(
        self,
        collection: Any,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._col = collection
        self._clock = clock

    async def get(self, listing_id: str) -> Listing | None:
        oid = _object_id(listing_id)
        if oid is None:
            return None
        doc = await self._col.find_one({FIELD_ID: oid})
        return Listing.from_document(doc) if doc is not None else None

    async def get_or_raise(self, listing_id: str) -> Listing:
        listing = await self.get(listing_id)
        if listing is None:
            raise NotFoundError(self.RESOURCE, listing_id)
        return listing

    async def create(self, draft: ListingDraft) -> Listing:
        now = self._clock()
        listing = draft.to_listing(str(ObjectId()), created_at=now, updated_at=now)
        doc = {FIELD_ID: ObjectId(listing.id), **listing.to_document()}
        await self._col.insert_one(doc)
        return listing

    async def update(self, listing_id: str, draft: ListingDraft) -> Listing:
        oid = _object_id(listing_id)
        if oid is None:
            raise NotFoundError(self.RESOURCE, listing_id)
        changes = draft.to_listing(listing_id, created_at=None, updated_at=self._clock()).to_document()
        # createdAt is immutable after insert
        del changes[FIELD_CREATED_AT]
        doc = await self._col.find_one_and_update(
            {FIELD_ID: oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError(self.RESOURCE, listing_id)
        return Listing.from_document(doc)

    async def delete(self, listing_id: str) -> None:
        oid = _object_id(listing_id)
        result = await self._col.delete_one({FIELD_ID: oid}) if oid is not None else None
        if result is None or result.deleted_count == 0:
            raise NotFoundError(self.RESOURCE, listing_id)


__all__ = ["MongoListingRepository"]
