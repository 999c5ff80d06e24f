"""Search – predicate tree → MongoDB aggregation pipeline translation.

The pipeline always has the shape::

    [{"$match": ...},
     {"$sort": {<field>: ±1, "_id": 1}},
     {"$facet": {"data":  [{"$skip": n}, {"$limit": n}, {"$project": ...}],
                 "total": [{"$count": "count"}]}}]

so the page and the total count come from the same matched set in one
round trip.
"""

from __future__ import annotations

from typing import Any

from listing_catalog.domain.listing import FIELD_ID, SEARCH_PROJECTION
from listing_catalog.search.escaping import anchored_pattern, contains_pattern
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
from listing_catalog.search.query import SearchQuery, SortSpec

DATA_FACET = "data"
TOTAL_FACET = "total"
COUNT_KEY = "count"

_THRESHOLD_OPERATORS: dict[ThresholdOp, str] = {
    ThresholdOp.GTE: "$gte",
    ThresholdOp.LTE: "$lte",
}

_TAG_OPERATORS: dict[TagMatchPolicy, str] = {
    TagMatchPolicy.ANY: "$in",
    TagMatchPolicy.ALL: "$all",
}


def _regex(pattern: str) -> dict[str, str]:
    return {"$regex": pattern, "$options": "i"}


def constraint_to_mongo(constraint: Constraint) -> dict[str, Any]:
    """Translate one constraint; unknown variants raise ``TypeError``."""
    match constraint:
        case ExactMatch(field=field, value=value):
            return {field: value}
        case AnchoredMatch(field=field, value=value):
            return {field: _regex(anchored_pattern(value))}
        case NumericThreshold(field=field, bound=bound, op=op):
            return {field: {_THRESHOLD_OPERATORS[op]: bound}}
        case TagMembership(field=field, tags=tags, policy=policy):
            return {field: {_TAG_OPERATORS[policy]: list(tags)}}
        case TextSearch(term=term, fields=fields):
            pattern = contains_pattern(term)
            return {"$or": [{f: _regex(pattern)} for f in fields]}
        case _:
            raise TypeError(f"Unsupported constraint: {constraint!r}")


def to_mongo_filter(predicate: Conjunction) -> dict[str, Any]:
    """Translate a conjunction into a ``$match`` document."""
    clauses = [constraint_to_mongo(c) for c in predicate]
    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def to_mongo_sort(sort: SortSpec) -> dict[str, int]:
    """Sort document with the ``_id`` ascending tie-break appended."""
    return {sort.field.document_field: sort.direction.sign, FIELD_ID: 1}


def build_search_pipeline(query: SearchQuery) -> list[dict[str, Any]]:
    """Return the single aggregation pipeline for *query*."""
    return [
        {"$match": to_mongo_filter(query.predicate)},
        {"$sort": to_mongo_sort(query.sort)},
        {
            "$facet": {
                DATA_FACET: [
                    {"$skip": query.page.offset},
                    {"$limit": query.page.size},
                    {"$project": dict(SEARCH_PROJECTION)},
                ],
                TOTAL_FACET: [{"$count": COUNT_KEY}],
            }
        },
    ]


def parse_facet_result(result: list[dict[str, Any]]) -> tuple[list[dict[str, Any]], int]:
    """Extract ``(documents, total)`` from the aggregate output."""
    if not result:
        return [], 0
    facets = result[0]
    documents = list(facets.get(DATA_FACET) or [])
    totals = facets.get(TOTAL_FACET) or []
    total = int(totals[0].get(COUNT_KEY, 0)) if totals else 0
    return documents, total


__all__ = [
    "build_search_pipeline",
    "constraint_to_mongo",
    "parse_facet_result",
    "to_mongo_filter",
    "to_mongo_sort",
]
