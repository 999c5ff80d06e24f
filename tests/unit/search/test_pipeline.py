"""Unit tests for predicate → MongoDB pipeline translation."""

from __future__ import annotations

import dataclasses

import bson
import pytest

from listing_catalog.search.builder import build_search_query
from listing_catalog.search.pipeline import (
    build_search_pipeline,
    constraint_to_mongo,
    parse_facet_result,
    to_mongo_filter,
    to_mongo_sort,
)
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


class TestConstraintToMongo:
    def test_exact_match(self) -> None:
        assert constraint_to_mongo(ExactMatch("address.city", "Lima")) == {"address.city": "Lima"}

    def test_anchored_match_is_escaped_and_case_insensitive(self) -> None:
        assert constraint_to_mongo(AnchoredMatch("address.city", "St. Louis")) == {
            "address.city": {"$regex": r"^St\. Louis$(?!\n)", "$options": "i"}
        }

    def test_numeric_gte(self) -> None:
        assert constraint_to_mongo(NumericThreshold("avg_rating", 4.0, ThresholdOp.GTE)) == {
            "avg_rating": {"$gte": 4.0}
        }

    def test_numeric_lte(self) -> None:
        assert constraint_to_mongo(NumericThreshold("price_level", 2.0, ThresholdOp.LTE)) == {
            "price_level": {"$lte": 2.0}
        }

    def test_tags_any_uses_in(self) -> None:
        assert constraint_to_mongo(TagMembership("tags", ("vegan", "casual"))) == {
            "tags": {"$in": ["vegan", "casual"]}
        }

    def test_tags_all_uses_all(self) -> None:
        constraint = TagMembership("tags", ("vegan", "casual"), TagMatchPolicy.ALL)
        assert constraint_to_mongo(constraint) == {"tags": {"$all": ["vegan", "casual"]}}

    def test_text_search_is_disjunction(self) -> None:
        result = constraint_to_mongo(TextSearch("a.b", ("name", "cuisine", "tags")))
        assert result == {
            "$or": [
                {"name": {"$regex": r"a\.b", "$options": "i"}},
                {"cuisine": {"$regex": r"a\.b", "$options": "i"}},
                {"tags": {"$regex": r"a\.b", "$options": "i"}},
            ]
        }

    def test_unknown_variant_raises(self) -> None:
        @dataclasses.dataclass(frozen=True)
        class Bogus:
            field: str

        with pytest.raises(TypeError):
            constraint_to_mongo(Bogus("x"))  # type: ignore[arg-type]


class TestInvalidConstraints:
    def test_empty_tag_set(self) -> None:
        with pytest.raises(ValueError):
            TagMembership("tags", ())

    def test_empty_term(self) -> None:
        with pytest.raises(ValueError):
            TextSearch("", ("name",))


class TestToMongoFilter:
    def test_empty_matches_everything(self) -> None:
        assert to_mongo_filter(Conjunction()) == {}

    def test_single_constraint_is_inlined(self) -> None:
        predicate = Conjunction((ExactMatch("cuisine", "Thai"),))
        assert to_mongo_filter(predicate) == {"cuisine": "Thai"}

    def test_multiple_constraints_use_and(self) -> None:
        predicate = Conjunction(
            (
                NumericThreshold("avg_rating", 4.0, ThresholdOp.GTE),
                NumericThreshold("price_level", 2.0, ThresholdOp.LTE),
            )
        )
        assert to_mongo_filter(predicate) == {
            "$and": [{"avg_rating": {"$gte": 4.0}}, {"price_level": {"$lte": 2.0}}]
        }


class TestToMongoSort:
    def test_tie_break_on_id_ascending(self) -> None:
        assert to_mongo_sort(SortSpec()) == {"createdAt": -1, "_id": 1}

    def test_ascending_rating(self) -> None:
        sort = SortSpec(SortField.RATING, SortDirection.ASC)
        result = to_mongo_sort(sort)
        assert list(result.items()) == [("avg_rating", 1), ("_id", 1)]


class TestBuildSearchPipeline:
    def test_shape(self) -> None:
        query = SearchQuery(page=PageRequest(page=3, size=20))
        match, sort, facet = build_search_pipeline(query)
        assert match == {"$match": {}}
        assert sort == {"$sort": {"createdAt": -1, "_id": 1}}
        data = facet["$facet"]["data"]
        assert data[0] == {"$skip": 40}
        assert data[1] == {"$limit": 20}
        assert set(data[2]["$project"]) == {
            "_id", "name", "cuisine", "avg_rating", "price_level", "tags", "address", "createdAt",
        }
        assert facet["$facet"]["total"] == [{"$count": "count"}]

    def test_projection_excludes_updated_at(self) -> None:
        (_, _, facet) = build_search_pipeline(SearchQuery())
        assert "updatedAt" not in facet["$facet"]["data"][2]["$project"]

    @pytest.mark.parametrize("limit", ["1", "100"])
    def test_huge_page_encodes_as_bson(self, limit: str) -> None:
        query = build_search_query({"page": "100000000000000000", "limit": limit})
        pipeline = build_search_pipeline(query)
        encoded = bson.decode(bson.encode({"pipeline": pipeline}))
        (skip, lim, _) = encoded["pipeline"][2]["$facet"]["data"]
        assert skip["$skip"] + lim["$limit"] <= 2**63 - 1


class TestParseFacetResult:
    def test_empty_result(self) -> None:
        assert parse_facet_result([]) == ([], 0)

    def test_empty_count_facet(self) -> None:
        assert parse_facet_result([{"data": [], "total": []}]) == ([], 0)

    def test_documents_and_total(self) -> None:
        docs, total = parse_facet_result([{"data": [{"_id": "a"}], "total": [{"count": 7}]}])
        assert docs == [{"_id": "a"}]
        assert total == 7
