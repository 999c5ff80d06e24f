"""Search – store port consumed by the executor."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ListingStore(Protocol):
    """Runs one aggregation pipeline over the listing collection.

    Implementations must release any server-side cursor on every exit
    path, including cancellation.
    """

    async def aggregate(
        self,
        pipeline: list[dict[str, Any]],
        *,
        max_time_ms: int | None = None,
    ) -> list[dict[str, Any]]: ...


__all__ = ["ListingStore"]
