"""Tests for response transformation."""

import pytest

from product_search.search.transformer import (
    extract_suggestions, transform_filter_options, transform_search_response
)

from tests.factories import make_product, make_search_response


def test_transform_hits(sample_aggregations):
    """Hits become products in order, with totals and timing."""
    data = make_search_response(
        [make_product("1"), make_product("2")], total=30, took=7, aggregations=sample_aggregations
    )

    result = transform_search_response(data)

    assert [p.id for p in result.products] == ["1", "2"]
    assert result.total == 30
    assert result.took == 7
    assert result.products[0].score == 1.0
    assert result.products[0].specifications["touch_bar"] is False


def test_transform_aggregations(sample_aggregations):
    """Bucket lists are copied as returned."""
    data = make_search_response([make_product()], aggregations=sample_aggregations)

    aggs = transform_search_response(data).aggregations

    assert aggs is not None
    assert [(b.key, b.doc_count) for b in aggs.brands] == [("Apple", 7), ("Dell", 5)]
    assert aggs.price_ranges[1].from_ == 1000.0
    assert aggs.price_ranges[1].to == 2000.0
    assert aggs.price_ranges[2].to is None
    assert aggs.availability[0].key == "In Stock"


def test_transform_without_aggregations():
    """A response with no aggregations leaves the field unset."""
    result = transform_search_response(make_search_response([make_product()]))

    assert result.aggregations is None
    assert result.total == 1


def test_transform_partial_aggregations():
    """Missing aggregation names become empty bucket lists."""
    data = make_search_response(
        [], aggregations={"categories": {"buckets": [{"key": "Fashion", "doc_count": 2}]}}
    )

    aggs = transform_search_response(data).aggregations

    assert aggs.categories[0].key == "Fashion"
    assert aggs.brands == []
    assert aggs.price_ranges == []


def test_transform_integer_total():
    """Legacy responses report total as a bare integer."""
    data = make_search_response([make_product()])
    data["hits"]["total"] = 99

    assert transform_search_response(data).total == 99


def test_transform_id_from_hit():
    """Documents without an id field take the hit's _id."""
    source = make_product("7")
    del source["id"]
    data = {"took": 1, "hits": {"total": {"value": 1}, "hits": [{"_id": "7", "_score": 0.5, "_source": source}]}}

    assert transform_search_response(data).products[0].id == "7"


def test_transform_malformed_response():
    """Error payloads are not search responses."""
    with pytest.raises(KeyError):
        transform_search_response({"error": {"type": "index_not_found_exception"}, "status": 404})


def test_transform_filter_options(sample_aggregations):
    """Filter options are bucket keys."""
    options = transform_filter_options({"hits": {"hits": []}, "aggregations": sample_aggregations})

    assert options.categories == ["Electronics"]
    assert options.brands == ["Apple", "Dell"]
    assert options.availability_options == ["In Stock"]


def test_extract_suggestions():
    """Option texts of the first suggestion entry."""
    data = {
        "suggest": {
            "product_suggest": [
                {"text": "mackbook", "offset": 0, "length": 8, "options": [
                    {"text": "macbook", "score": 0.85, "freq": 40},
                    {"text": "matebook", "score": 0.7, "freq": 3},
                ]}
            ]
        }
    }

    assert extract_suggestions(data) == ["macbook", "matebook"]


def test_extract_suggestions_missing():
    """No suggest section means no suggestions."""
    assert extract_suggestions({"hits": {"hits": []}}) == []
    assert extract_suggestions({"suggest": {"product_suggest": []}}) == []


def test_transform_hits_not_an_object():
    """A hits section that is not an object is rejected."""
    with pytest.raises(TypeError):
        transform_search_response({"took": 1, "hits": []})


def test_transform_filter_options_malformed():
    """Aggregations of the wrong shape give no options."""
    options = transform_filter_options({"aggregations": ["x"]})

    assert options.categories == []
    assert options.brands == []
    assert options.availability_options == []


def test_extract_suggestions_malformed():
    """Suggest sections of the wrong shape give no suggestions."""
    assert extract_suggestions({"suggest": ["x"]}) == []
    assert extract_suggestions({"suggest": {"product_suggest": ["x"]}}) == []
    assert extract_suggestions({"suggest": {"product_suggest": [{"options": "x"}]}}) == []
