"""Search – ListingSearchService, the operation exposed to the HTTP layer."""
from __future__ import annotations

import time
from typing import Any, Mapping

from listing_catalog.kernel.errors import ValidationError
from listing_catalog.observability.logging import get_logger
from listing_catalog.search.builder import BuilderOptions, build_search_query
from listing_catalog.search.envelope import PaginationEnvelope
from listing_catalog.search.executor import PaginatedQueryExecutor

logger = get_logger(__name__)


class ListingSearchService:
    """``search(raw_params) -> PaginationEnvelope``.

    Raises :class:`~listing_catalog.kernel.errors.ValidationError` for
    malformed parameters and
    :class:`~listing_catalog.kernel.errors.QueryExecutionError` when the
    store fails.  A filter that matches nothing is an empty page, not an
    error.
    """

    def __init__(
        self,
        executor: PaginatedQueryExecutor,
        options: BuilderOptions | None = None,
    ) -> None:
        self._executor = executor
        self._options = options or BuilderOptions()

    async def search(self, raw_params: Mapping[str, Any]) -> PaginationEnvelope:
        t0 = time.monotonic()
        try:
            query = build_search_query(raw_params, options=self._options)
        except ValidationError as exc:
            logger.info("listing_search.rejected", field=exc.field, reason=exc.message)
            raise

        envelope = await self._executor.execute(query)

        logger.info(
            "listing_search.completed",
            constraints=len(query.predicate),
            sort_by=query.sort.field.value,
            order=query.sort.direction.value,
            page=envelope.meta.page,
            limit=envelope.meta.limit,
            total=envelope.meta.total,
            pages=envelope.meta.pages,
            took_ms=int((time.monotonic() - t0) * 1000),
        )
        return envelope


__all__ = ["ListingSearchService"]
