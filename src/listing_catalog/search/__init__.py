"""Search – query builder, predicate tree, executor and service."""
from listing_catalog.search.builder import BuilderOptions, build_search_query
from listing_catalog.search.envelope import PageMeta, PaginationEnvelope
from listing_catalog.search.escaping import escape_pattern
from listing_catalog.search.executor import PaginatedQueryExecutor
from listing_catalog.search.ports import ListingStore
from listing_catalog.search.predicates import (
    AnchoredMatch,
    Conjunction,
    ExactMatch,
    NumericThreshold,
    TagMatchPolicy,
    TagMembership,
    TextSearch,
    ThresholdOp,
)
from listing_catalog.search.query import PageRequest, SearchQuery, SortDirection, SortField, SortSpec
from listing_catalog.search.service import ListingSearchService

__all__ = [
    "AnchoredMatch",
    "BuilderOptions",
    "Conjunction",
    "ExactMatch",
    "ListingSearchService",
    "ListingStore",
    "NumericThreshold",
    "PageMeta",
    "PageRequest",
    "PaginatedQueryExecutor",
    "PaginationEnvelope",
    "SearchQuery",
    "SortDirection",
    "SortField",
    "SortSpec",
    "TagMatchPolicy",
    "TagMembership",
    "TextSearch",
    "ThresholdOp",
    "build_search_query",
    "escape_pattern",
]
