"""Tests for query building."""

import pytest

from product_search.models import PriceRange, SearchFilters, SearchParams, SortField, SortOrder
from product_search.search.query_builder import (
    build_filter_clauses, build_filters_query, build_search_query, build_sort,
    build_suggest_query,
)


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_matches_all(query):
    """Blank text gives a match_all must clause."""
    body = build_search_query(SearchParams(query=query))

    assert body["query"]["bool"]["must"] == [{"match_all": {}}]


def test_text_query_multi_match():
    """Non-empty text gives a fuzzy multi_match with name boosted highest."""
    body = build_search_query(SearchParams(query="  MacBook  "))

    must = body["query"]["bool"]["must"]
    assert len(must) == 1
    match = must[0]["multi_match"]
    assert match["query"] == "MacBook"
    assert match["fuzziness"] == "AUTO"
    assert match["type"] == "best_fields"
    assert match["fields"][0] == "name^3"
    assert "specifications.*" in match["fields"]
    assert "description^2" in match["fields"]
    assert "tags^1.5" in match["fields"]


def test_macbook_first_page_request():
    """query='MacBook', no filters, page 0 of 12."""
    body = build_search_query(SearchParams(query="MacBook").for_page(0, 12))

    assert body["query"]["bool"]["must"][0]["multi_match"]["query"] == "MacBook"
    assert body["query"]["bool"]["filter"] == []
    assert body["from"] == 0
    assert body["size"] == 12


def test_category_only_filter():
    """A single active filter gives a single clause and aggregations remain."""
    body = build_search_query(SearchParams(filters=SearchFilters(category="Electronics")))

    assert body["query"]["bool"]["filter"] == [{"term": {"category": "Electronics"}}]
    assert set(body["aggs"]) == {"categories", "brands", "price_ranges", "availability"}


def test_price_range_both_bounds():
    """Test price range with min and max."""
    clauses = build_filter_clauses(SearchFilters(price_range=PriceRange(min=100, max=500)))

    assert clauses == [{"range": {"price": {"gte": 100, "lte": 500}}}]


def test_price_range_min_only():
    """Only present bounds are emitted."""
    clauses = build_filter_clauses(SearchFilters(price_range=PriceRange(min=100)))

    assert clauses == [{"range": {"price": {"gte": 100}}}]


def test_price_range_without_bounds_is_skipped():
    """An open-ended range on both sides contributes nothing."""
    assert build_filter_clauses(SearchFilters(price_range=PriceRange())) == []


def test_all_filters():
    """Every active filter contributes exactly one clause."""
    filters = SearchFilters(
        category="Electronics",
        brand="Apple",
        price_range=PriceRange(min=500, max=3000),
        rating=4.0,
        availability="In Stock",
        tags=["wireless", "premium"],
    )

    clauses = build_filter_clauses(filters)

    assert clauses == [
        {"term": {"category": "Electronics"}},
        {"term": {"brand": "Apple"}},
        {"range": {"price": {"gte": 500, "lte": 3000}}},
        {"range": {"rating": {"gte": 4.0}}},
        {"term": {"availability": "In Stock"}},
        {"terms": {"tags": ["wireless", "premium"]}},
    ]


def test_empty_values_contribute_nothing():
    """Empty strings and empty tag lists are unconstrained."""
    assert build_filter_clauses(SearchFilters(category="", brand="", tags=[])) == []


def test_zero_rating_is_a_filter():
    """A zero minimum rating is still an explicit bound."""
    assert build_filter_clauses(SearchFilters(rating=0)) == [{"range": {"rating": {"gte": 0}}}]


def test_price_aggregation_buckets():
    """Fixed price bucket scheme."""
    body = build_search_query(SearchParams(filters=SearchFilters(brand="Sony")))

    ranges = body["aggs"]["price_ranges"]["range"]["ranges"]
    assert body["aggs"]["price_ranges"]["range"]["field"] == "price"
    assert [r["key"] for r in ranges] == ["0-100", "100-500", "500-1000", "1000-2000", "2000+"]
    assert ranges[-1] == {"key": "2000+", "from": 2000}
    assert body["aggs"]["categories"]["terms"] == {"field": "category", "size": 20}
    assert body["aggs"]["availability"]["terms"] == {"field": "availability", "size": 10}


@pytest.mark.parametrize("sort_by", [None, SortField.RELEVANCE])
def test_default_sort_is_relevance(sort_by):
    """Relevance sorts by score descending regardless of direction."""
    assert build_sort(sort_by, SortOrder.ASC) == [{"_score": {"order": "desc"}}]


@pytest.mark.parametrize(
    "sort_by,field",
    [(SortField.PRICE, "price"), (SortField.RATING, "rating"), (SortField.NAME, "name.keyword")],
)
def test_field_sort_with_score_tiebreak(sort_by, field):
    """Field sorts use the mapped field and fall back to score."""
    body = build_search_query(SearchParams(sort_by=sort_by, sort_order=SortOrder.ASC))

    assert body["sort"] == [{field: {"order": "asc"}}, {"_score": {"order": "desc"}}]


def test_sort_accepts_plain_strings():
    """Sort values coming straight from request JSON."""
    assert build_sort("rating", "desc")[0] == {"rating": {"order": "desc"}}


def test_filters_query():
    """Aggregation-only request for filter options."""
    body = build_filters_query()

    assert body["size"] == 0
    assert "query" not in body
    for name, field in [("categories", "category"), ("brands", "brand"), ("availability", "availability")]:
        assert body["aggs"][name]["terms"] == {"field": field, "size": 100}


def test_suggest_query():
    """Term suggester over names, capped at five."""
    body = build_suggest_query("macb")

    assert body["size"] == 0
    suggest = body["suggest"]["product_suggest"]
    assert suggest["text"] == "macb"
    assert suggest["term"] == {"field": "name", "size": 5}


def test_builder_is_pure():
    """Building twice yields equal, independent bodies."""
    params = SearchParams(query="tv", filters=SearchFilters(tags=["smart"]))

    first = build_search_query(params)
    first["aggs"]["price_ranges"]["range"]["ranges"].clear()
    first["query"]["bool"]["filter"][0]["terms"]["tags"].append("x")

    second = build_search_query(params)
    assert len(second["aggs"]["price_ranges"]["range"]["ranges"]) == 5
    assert params.filters.tags == ["smart"]
