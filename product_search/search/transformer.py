"""Reshape raw OpenSearch responses into result models."""

from typing import Any, Optional

from ..models import Aggregations, FilterOptions, Product, SearchResult
from .query_builder import SUGGESTION_NAME

AGGREGATION_NAMES = ("categories", "brands", "price_ranges", "availability")


def _object(value: Any, name: str) -> dict:
    if not isinstance(value, dict):
        raise TypeError(f"'{name}' is {type(value).__name__}, expected an object")
    return value


def _buckets(aggs: Any, name: str) -> list:
    # Anything not shaped like {"buckets": [...]} counts as no buckets
    agg = aggs.get(name) if isinstance(aggs, dict) else None
    buckets = agg.get("buckets") if isinstance(agg, dict) else None
    return buckets if isinstance(buckets, list) else []


def _total(hits: dict) -> int:
    total = hits.get("total", 0)
    # Older engines report a bare integer instead of {"value": n}
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total)


def hit_to_product(hit: dict) -> Product:
    """Convert a single search hit into a Product, keeping its score."""
    source = dict(_object(hit, "hit")["_source"])
    source.setdefault("id", hit.get("_id"))
    source["score"] = hit.get("_score")
    return Product.model_validate(source)


def transform_aggregations(aggs: Optional[dict]) -> Optional[Aggregations]:
    """Copy bucket lists verbatim; None when the response carried none."""
    if not aggs:
        return None
    return Aggregations(**{name: _buckets(aggs, name) for name in AGGREGATION_NAMES})


def transform_search_response(data: dict[str, Any]) -> SearchResult:
    """
    Transform a raw search response.

    Raises KeyError/TypeError/ValueError when the response is not shaped
    like a search response.
    """
    hits = _object(_object(data, "response")["hits"], "hits")
    hit_list = hits.get("hits", [])
    if not isinstance(hit_list, list):
        raise TypeError(f"'hits.hits' is {type(hit_list).__name__}, expected a list")
    products = [hit_to_product(hit) for hit in hit_list]

    return SearchResult(
        products=products,
        total=_total(hits),
        took=int(data.get("took", 0)),
        aggregations=transform_aggregations(data.get("aggregations")),
    )


def transform_filter_options(data: dict[str, Any]) -> FilterOptions:
    """Extract filter option keys from an aggregation-only response."""
    aggs = _object(data, "response")["aggregations"]
    return FilterOptions(
        categories=[str(b["key"]) for b in _buckets(aggs, "categories")],
        brands=[str(b["key"]) for b in _buckets(aggs, "brands")],
        availability_options=[str(b["key"]) for b in _buckets(aggs, "availability")],
    )


def extract_suggestions(data: dict[str, Any]) -> list[str]:
    """Option texts of the first suggestion entry; empty for any other shape."""
    suggest = data.get("suggest") if isinstance(data, dict) else None
    entries = suggest.get(SUGGESTION_NAME) if isinstance(suggest, dict) else None
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
        return []

    options = entries[0].get("options")
    if not isinstance(options, list):
        return []
    return [option["text"] for option in options if isinstance(option, dict) and "text" in option]
