"""Translate search intents into OpenSearch query DSL bodies."""

from typing import Any

from ..models import SearchFilters, SearchParams, SortField, SortOrder

# Field boosts: name > description = brand > tags > category/subcategory
SEARCH_FIELDS = [
    "name^3",
    "description^2",
    "brand^2",
    "category",
    "subcategory",
    "tags^1.5",
    "specifications.*",
]

# name is an analyzed text field; sort on its keyword sub-field instead
SORT_FIELDS = {
    SortField.PRICE: "price",
    SortField.RATING: "rating",
    SortField.NAME: "name.keyword",
}

PRICE_RANGES = [
    {"key": "0-100", "from": 0, "to": 100},
    {"key": "100-500", "from": 100, "to": 500},
    {"key": "500-1000", "from": 500, "to": 1000},
    {"key": "1000-2000", "from": 1000, "to": 2000},
    {"key": "2000+", "from": 2000},
]

SUGGESTION_NAME = "product_suggest"
MAX_SUGGESTIONS = 5


def build_aggregations() -> dict:
    """Facet aggregations requested with every search."""
    return {
        "categories": {"terms": {"field": "category", "size": 20}},
        "brands": {"terms": {"field": "brand", "size": 20}},
        "price_ranges": {"range": {
            "field": "price",
            "ranges": [dict(r) for r in PRICE_RANGES],
        }},
        "availability": {"terms": {"field": "availability", "size": 10}},
    }


def build_text_clause(query: str) -> dict:
    """Free-text clause; blank text matches every document."""
    text = (query or "").strip()
    if not text:
        return {"match_all": {}}

    return {
        "multi_match": {
            "query": text,
            "fields": list(SEARCH_FIELDS),
            "type": "best_fields",
            "fuzziness": "AUTO",
        }
    }


def build_filter_clauses(filters: SearchFilters) -> list[dict]:
    """One filter clause per active filter, combined with AND semantics."""
    clauses: list[dict] = []

    if filters.category:
        clauses.append({"term": {"category": filters.category}})

    if filters.brand:
        clauses.append({"term": {"brand": filters.brand}})

    if filters.price_range is not None:
        bounds: dict[str, Any] = {}
        if filters.price_range.min is not None:
            bounds["gte"] = filters.price_range.min
        if filters.price_range.max is not None:
            bounds["lte"] = filters.price_range.max
        if bounds:
            clauses.append({"range": {"price": bounds}})

    if filters.rating is not None:
        clauses.append({"range": {"rating": {"gte": filters.rating}}})

    if filters.availability:
        clauses.append({"term": {"availability": filters.availability}})

    if filters.tags:
        clauses.append({"terms": {"tags": list(filters.tags)}})

    return clauses


def build_sort(sort_by, sort_order=SortOrder.DESC) -> list[dict]:
    """Sort clauses with relevance as the tie-break for field sorts."""
    relevance = {"_score": {"order": "desc"}}
    if sort_by is None or sort_by == SortField.RELEVANCE:
        return [relevance]

    field = SORT_FIELDS[SortField(sort_by)]
    return [{field: {"order": SortOrder(sort_order).value}}, relevance]


def build_search_query(params: SearchParams) -> dict:
    """Build the full search request body for the given parameters."""
    return {
        "from": params.from_,
        "size": params.size,
        "query": {
            "bool": {
                "must": [build_text_clause(params.query)],
                "filter": build_filter_clauses(params.filters),
            }
        },
        "aggs": build_aggregations(),
        "sort": build_sort(params.sort_by, params.sort_order),
    }


def build_filters_query() -> dict:
    """Aggregation-only request listing every category, brand and availability."""
    return {
        "size": 0,
        "aggs": {
            "categories": {"terms": {"field": "category", "size": 100}},
            "brands": {"terms": {"field": "brand", "size": 100}},
            "availability": {"terms": {"field": "availability", "size": 100}},
        },
    }


def build_suggest_query(text: str) -> dict:
    """Term-suggester request against product names."""
    return {
        "size": 0,
        "suggest": {
            SUGGESTION_NAME: {
                "text": text,
                "term": {"field": "name", "size": MAX_SUGGESTIONS},
            }
        },
    }
