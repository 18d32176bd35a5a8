"""Search service layer."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..client import OpenSearchClient
from ..models import FilterOptions, Product, SearchParams, SearchResult
from .query_builder import build_filters_query, build_search_query, build_suggest_query
from .transformer import extract_suggestions, transform_filter_options, transform_search_response

logger = logging.getLogger(__name__)

MIN_SUGGESTION_LENGTH = 2

# Anything that can go wrong between dispatch and a parsed result
RESPONSE_ERRORS = (
    httpx.HTTPError, ValidationError, AttributeError, KeyError, TypeError, ValueError
)


class SearchError(Exception):
    """Raised when a primary search request fails."""


class SearchService:
    """Service for querying the product index."""

    def __init__(self, client: OpenSearchClient):
        self.client = client

    async def search(self, params: SearchParams) -> SearchResult:
        """Search products. Any failure surfaces as a single SearchError."""
        body = build_search_query(params)
        try:
            data = await self.client.search(body)
            return transform_search_response(data)
        except RESPONSE_ERRORS as e:
            logger.error("Search error for query=%r: %s", params.query, e)
            raise SearchError("Failed to perform search") from e

    async def get_filters(self) -> FilterOptions:
        """Get every available filter value. Empty options on failure."""
        try:
            data = await self.client.search(build_filters_query())
            return transform_filter_options(data)
        except RESPONSE_ERRORS as e:
            logger.warning("Error fetching filters: %s", e)
            return FilterOptions()

    async def get_suggestions(self, text: str) -> list[str]:
        """Name completions for partial query text. Best effort."""
        if not text or len(text) < MIN_SUGGESTION_LENGTH:
            return []

        try:
            data = await self.client.search(build_suggest_query(text))
            return extract_suggestions(data)
        except RESPONSE_ERRORS as e:
            logger.warning("Error fetching suggestions for %r: %s", text, e)
            return []

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Get a single product. None when missing or on failure."""
        try:
            data = await self.client.get_document(product_id)
            if not data.get("found", True):
                return None
            source = dict(data["_source"])
            source.setdefault("id", data.get("_id", product_id))
            return Product.model_validate(source)
        except RESPONSE_ERRORS as e:
            logger.warning("Error fetching product %s: %s", product_id, e)
            return None
