"""Search – PaginatedQueryExecutor."""
from __future__ import annotations

from listing_catalog.domain.listing import Listing
from listing_catalog.kernel.errors import QueryExecutionError
from listing_catalog.observability.logging import get_logger
from listing_catalog.search.envelope import PaginationEnvelope
from listing_catalog.search.pipeline import build_search_pipeline, parse_facet_result
from listing_catalog.search.ports import ListingStore
from listing_catalog.search.query import SearchQuery

logger = get_logger(__name__)


class PaginatedQueryExecutor:
    """Run a :class:`SearchQuery` as a single aggregate round trip.

    The page and the total count are produced by one ``$facet`` stage, so
    they always describe the same snapshot of matching documents.  Store
    failures are not retried: they are logged with full detail and
    re-raised as :class:`QueryExecutionError` without any partial result.
    Cancellation is never wrapped.
    """

    def __init__(self, store: ListingStore, *, max_time_ms: int | None = None) -> None:
        self._store = store
        self._max_time_ms = max_time_ms

    async def execute(self, query: SearchQuery) -> PaginationEnvelope:
        pipeline = build_search_pipeline(query)
        try:
            result = await self._store.aggregate(pipeline, max_time_ms=self._max_time_ms)
            documents, total = parse_facet_result(result)
            listings = [Listing.from_document(doc) for doc in documents]
        except Exception as exc:
            logger.error(
                "listing_search.failed",
                error=repr(exc),
                page=query.page.page,
                limit=query.page.size,
                constraints=len(query.predicate),
                exc_info=True,
            )
            raise QueryExecutionError(cause=exc) from exc
        return PaginationEnvelope.of(listings, total, query.page, query.sort)


__all__ = ["PaginatedQueryExecutor"]
