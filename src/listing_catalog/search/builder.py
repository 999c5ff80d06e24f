"""Search – query builder.

Turns raw, untrusted, stringly-typed request parameters into a
:class:`~listing_catalog.search.query.SearchQuery`.  Pure and
deterministic: the same parameters always produce the same query.

Recognised parameters::

    q          free text over name, category and tags
    city       case-insensitive exact city
    category   case-insensitive exact category (alias: cuisine)
    minRating  rating >= value (numeric, rejected otherwise)
    maxPrice   price tier <= value (numeric, rejected otherwise)
    tags       comma-separated tag list
    sortBy     name | rating | price | createdAt
    order      asc | desc
    page       1-based page number
    limit      page size, clamped to [1, max_page_size]
"""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Mapping

from listing_catalog.domain.listing import (
    FIELD_CATEGORY,
    FIELD_CITY,
    FIELD_NAME,
    FIELD_PRICE_TIER,
    FIELD_RATING,
    FIELD_TAGS,
)
from listing_catalog.kernel.errors import ValidationError
from listing_catalog.search.predicates import (
    AnchoredMatch,
    Conjunction,
    Constraint,
    ExactMatch,
    NumericThreshold,
    TagMatchPolicy,
    TagMembership,
    TextSearch,
    ThresholdOp,
)
from listing_catalog.search.query import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MAX_STORE_INT,
    PageRequest,
    SearchQuery,
    SortDirection,
    SortField,
    SortSpec,
)

TEXT_SEARCH_FIELDS: tuple[str, ...] = (FIELD_NAME, FIELD_CATEGORY, FIELD_TAGS)
TAG_DELIMITER = ","

_SORT_ALIASES: dict[str, SortField] = {
    "name": SortField.NAME,
    "rating": SortField.RATING,
    "avg_rating": SortField.RATING,
    "price": SortField.PRICE,
    "price_level": SortField.PRICE,
    "createdAt": SortField.CREATED_AT,
}

_DIRECTION_ALIASES: dict[str, SortDirection] = {
    "asc": SortDirection.ASC,
    "ascending": SortDirection.ASC,
    "desc": SortDirection.DESC,
    "descending": SortDirection.DESC,
}


@dataclasses.dataclass(frozen=True)
class BuilderOptions:
    """Policy knobs for :func:`build_search_query`."""

    tag_policy: TagMatchPolicy = TagMatchPolicy.ANY
    case_sensitive_categories: bool = False
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.max_page_size < 1:
            raise ValueError("max_page_size must be >= 1")
        if not (1 <= self.default_page_size <= self.max_page_size):
            raise ValueError("default_page_size must be between 1 and max_page_size")


def build_search_query(
    params: Mapping[str, Any],
    *,
    options: BuilderOptions | None = None,
) -> SearchQuery:
    """Build a validated search query from raw request parameters.

    Raises:
        ValidationError: ``minRating`` or ``maxPrice`` is not a finite number.
    """
    opts = options or BuilderOptions()
    return SearchQuery(
        predicate=build_predicate(params, options=opts),
        sort=resolve_sort(_raw(params, "sortBy"), _raw(params, "order")),
        page=resolve_page(_raw(params, "page"), _raw(params, "limit"), options=opts),
    )


def build_predicate(
    params: Mapping[str, Any],
    *,
    options: BuilderOptions | None = None,
) -> Conjunction:
    opts = options or BuilderOptions()
    constraints: list[Constraint] = []

    term = _text(params, "q")
    if term is not None:
        constraints.append(TextSearch(term=term, fields=TEXT_SEARCH_FIELDS))

    for field, names in ((FIELD_CITY, ("city",)), (FIELD_CATEGORY, ("category", "cuisine"))):
        value = _text(params, *names)
        if value is None:
            continue
        if opts.case_sensitive_categories:
            constraints.append(ExactMatch(field=field, value=value))
        else:
            constraints.append(AnchoredMatch(field=field, value=value))

    min_rating = _number(params, "minRating")
    if min_rating is not None:
        constraints.append(NumericThreshold(FIELD_RATING, min_rating, ThresholdOp.GTE))

    max_price = _number(params, "maxPrice")
    if max_price is not None:
        constraints.append(NumericThreshold(FIELD_PRICE_TIER, max_price, ThresholdOp.LTE))

    tags = parse_tags(_raw(params, "tags"))
    if tags:
        constraints.append(TagMembership(field=FIELD_TAGS, tags=tags, policy=opts.tag_policy))

    return Conjunction(tuple(constraints))


def parse_tags(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated tag list; blanks and repeats are dropped."""
    if raw is None:
        return ()
    seen: dict[str, None] = {}
    for part in raw.split(TAG_DELIMITER):
        tag = part.strip()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def resolve_sort(sort_by: str | None, order: str | None) -> SortSpec:
    """Map ``sortBy``/``order`` onto the allow-list, falling back to defaults."""
    field = _SORT_ALIASES.get((sort_by or "").strip(), SortField.CREATED_AT)
    direction = _DIRECTION_ALIASES.get((order or "").strip().lower(), SortDirection.DESC)
    return SortSpec(field=field, direction=direction)


def resolve_page(
    page: str | None,
    limit: str | None,
    *,
    options: BuilderOptions | None = None,
) -> PageRequest:
    """Coerce and clamp ``page``/``limit``; never raises.

    ``page`` is also capped so that ``offset + size`` fits the store's
    64-bit integers; such a page is past the end of any collection.
    """
    opts = options or BuilderOptions()
    size = _coerce_int(limit, opts.default_page_size)
    size = min(max(size, 1), opts.max_page_size)
    last_page = (MAX_STORE_INT - size) // size + 1
    page_num = min(max(_coerce_int(page, 1), 1), last_page)
    return PageRequest(page=page_num, size=size)


# ---------------------------------------------------------------------------
# Raw parameter helpers
# ---------------------------------------------------------------------------


def _raw(params: Mapping[str, Any], name: str) -> str | None:
    value = params.get(name)
    return None if value is None else str(value)


def _text(params: Mapping[str, Any], *names: str) -> str | None:
    """First non-blank value among *names*, trimmed."""
    for name in names:
        value = _raw(params, name)
        if value is not None and value.strip():
            return value.strip()
    return None


def _number(params: Mapping[str, Any], name: str) -> float | None:
    raw = _raw(params, name)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        raise ValidationError.for_field(name, raw, "must be a number") from None
    if not math.isfinite(value):
        raise ValidationError.for_field(name, raw, "must be a finite number")
    return value


def _coerce_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return default
    return int(value) if math.isfinite(value) else default


__all__ = [
    "BuilderOptions",
    "TAG_DELIMITER",
    "TEXT_SEARCH_FIELDS",
    "build_predicate",
    "build_search_query",
    "parse_tags",
    "resolve_page",
    "resolve_sort",
]
