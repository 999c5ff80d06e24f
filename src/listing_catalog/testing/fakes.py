"""Testing fakes – InMemoryListingStore, InMemoryListingRepository.

``InMemoryListingStore`` evaluates the subset of the aggregation language
that :func:`~listing_catalog.search.pipeline.build_search_pipeline`
emits (``$match`` with ``$and``/``$or``/``$regex``/``$gte``/``$lte``/
``$in``/``$all``, multi-key ``$sort``, ``$facet`` with ``$skip``/
``$limit``/``$project``/``$count``), following MongoDB's array and
missing-field semantics closely enough for search tests.
"""
from __future__ import annotations

import copy
import re
import uuid
from datetime import UTC, datetime
from typing import Any, Callable, Iterable

from listing_catalog.domain.listing import FIELD_ID, Listing, ListingDraft
from listing_catalog.kernel.errors import NotFoundError

_MISSING = object()


def _get_path(doc: dict[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _candidates(value: Any) -> list[Any]:
    """Values an operator is tested against (array elements, or the value)."""
    if value is _MISSING or value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _match_operator(value: Any, op: str, arg: Any, options: str) -> bool:  # noqa: PLR0911
    match op:
        case "$regex":
            rx = re.compile(arg, re.IGNORECASE if "i" in options else 0)
            return any(isinstance(v, str) and rx.search(v) for v in _candidates(value))
        case "$options":
            return True
        case "$gte":
            return any(_is_number(v) and v >= arg for v in _candidates(value))
        case "$lte":
            return any(_is_number(v) and v <= arg for v in _candidates(value))
        case "$in":
            return any(v in arg for v in _candidates(value))
        case "$all":
            present = _candidates(value)
            return all(a in present for a in arg)
        case _:
            raise NotImplementedError(f"Unsupported operator {op!r}")


def _match_field(value: Any, cond: Any) -> bool:
    if isinstance(cond, dict) and cond and all(k.startswith("$") for k in cond):
        options = cond.get("$options", "")
        return all(_match_operator(value, op, arg, options) for op, arg in cond.items())
    if isinstance(value, list):
        return value == cond or cond in value
    return value is not _MISSING and value == cond


def matches(doc: dict[str, Any], filt: dict[str, Any]) -> bool:
    """Return ``True`` when *doc* satisfies the ``$match`` document *filt*."""
    for key, cond in filt.items():
        if key == "$and":
            if not all(matches(doc, sub) for sub in cond):
                return False
        elif key == "$or":
            if not any(matches(doc, sub) for sub in cond):
                return False
        elif not _match_field(_get_path(doc, key), cond):
            return False
    return True


def _sort_key(value: Any) -> tuple[int, Any]:
    # BSON comparison order: null < numbers < strings < ... < booleans < dates
    if value is _MISSING or value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (8, value)
    if _is_number(value):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, datetime):
        return (9, value)
    return (5, str(value))


def _sort(docs: list[dict[str, Any]], spec: dict[str, int]) -> list[dict[str, Any]]:
    result = list(docs)
    for field, direction in reversed(list(spec.items())):
        result.sort(key=lambda d: _sort_key(_get_path(d, field)), reverse=direction < 0)
    return result


def _project(doc: dict[str, Any], spec: dict[str, int]) -> dict[str, Any]:
    return {k: copy.deepcopy(doc[k]) for k, include in spec.items() if include and k in doc}


def _run_stages(docs: list[dict[str, Any]], stages: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    for stage in stages:
        ((name, arg),) = stage.items()
        match name:
            case "$match":
                docs = [d for d in docs if matches(d, arg)]
            case "$sort":
                docs = _sort(docs, arg)
            case "$skip":
                docs = docs[arg:]
            case "$limit":
                docs = docs[:arg]
            case "$project":
                docs = [_project(d, arg) for d in docs]
            case "$count":
                # $count emits no document for an empty input
                docs = [{arg: len(docs)}] if docs else []
            case "$facet":
                docs = [{key: _run_stages(docs, sub) for key, sub in arg.items()}]
            case _:
                raise NotImplementedError(f"Unsupported stage {name!r}")
    return docs


class InMemoryListingStore:
    """``ListingStore`` over a list of documents.

    Set :attr:`fail_with` to make the next :meth:`aggregate` calls raise;
    :attr:`calls` records every pipeline received.
    """

    def __init__(self, documents: Iterable[dict[str, Any]] = ()) -> None:
        self._docs: list[dict[str, Any]] = [copy.deepcopy(d) for d in documents]
        self.calls: list[list[dict[str, Any]]] = []
        self.fail_with: BaseException | None = None

    def add(self, *listings: Listing) -> None:
        for listing in listings:
            self._docs.append({FIELD_ID: listing.id, **listing.to_document()})

    async def aggregate(
        self,
        pipeline: list[dict[str, Any]],
        *,
        max_time_ms: int | None = None,  # noqa: ARG002
    ) -> list[dict[str, Any]]:
        self.calls.append(pipeline)
        if self.fail_with is not None:
            raise self.fail_with
        return _run_stages([copy.deepcopy(d) for d in self._docs], pipeline)

    async def ping(self) -> bool:
        return self.fail_with is None


class InMemoryListingRepository:
    """Dict-backed counterpart of ``MongoListingRepository``."""

    RESOURCE = "Listing"

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._items: dict[str, Listing] = {}
        self._clock = clock or (lambda: datetime.now(UTC))

    async def get(self, listing_id: str) -> Listing | None:
        return self._items.get(listing_id)

    async def get_or_raise(self, listing_id: str) -> Listing:
        listing = await self.get(listing_id)
        if listing is None:
            raise NotFoundError(self.RESOURCE, listing_id)
        return listing

    async def create(self, draft: ListingDraft) -> Listing:
        now = self._clock()
        listing = draft.to_listing(uuid.uuid4().hex, created_at=now, updated_at=now)
        self._items[listing.id] = listing
        return listing

    async def update(self, listing_id: str, draft: ListingDraft) -> Listing:
        current = await self.get_or_raise(listing_id)
        listing = draft.to_listing(
            listing_id, created_at=current.created_at, updated_at=self._clock()
        )
        self._items[listing_id] = listing
        return listing

    async def delete(self, listing_id: str) -> None:
        if self._items.pop(listing_id, None) is None:
            raise NotFoundError(self.RESOURCE, listing_id)


__all__ = ["InMemoryListingRepository", "InMemoryListingStore", "matches"]
