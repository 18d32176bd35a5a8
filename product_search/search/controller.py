"""Incremental result loading (infinite scroll) state machine."""

import logging
from enum import Enum
from typing import Callable, Optional

from ..models import (
    Aggregations, Product, SearchFilters, SearchParams, SortField, SortOrder
)
from .service import SearchError, SearchService

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Failed to load search results. Please try again."


class ResultsState(str, Enum):
    """Controller state."""
    IDLE = "idle"
    LOADING_INITIAL = "loading_initial"
    LOADING_MORE = "loading_more"
    LOADED = "loaded"
    ERROR = "error"


class ResultsController:
    """Accumulates pages of search results for one search intent.

    Changing the query, filters or sort resets the accumulated products and
    loads page 0; load_more() appends the next page. Every request is tagged
    with a generation number and responses from superseded requests are
    dropped.
    """

    def __init__(
        self,
        service: SearchService,
        page_size: int = 12,
        on_aggregations: Optional[Callable[[Aggregations], None]] = None,
    ):
        self.service = service
        self.page_size = page_size
        self.on_aggregations = on_aggregations

        self.query = ""
        self.filters = SearchFilters()
        self.sort_by = SortField.RELEVANCE
        self.sort_order = SortOrder.DESC

        self.state = ResultsState.IDLE
        self.products: list[Product] = []
        self.total = 0
        self.page = 0
        self.has_more = True
        self.error: Optional[str] = None

        self._generation = 0
        self._failed: Optional[tuple[int, bool]] = None

    def params(self) -> SearchParams:
        """Current search intent, without a page window."""
        return SearchParams(
            query=self.query,
            filters=self.filters,
            sort_by=None if self.sort_by == SortField.RELEVANCE else self.sort_by,
            sort_order=self.sort_order,
        )

    async def update(
        self,
        query: Optional[str] = None,
        filters: Optional[SearchFilters] = None,
        sort_by: Optional[SortField] = None,
        sort_order: Optional[SortOrder] = None,
    ) -> None:
        """Apply changed search parameters and load the first page."""
        if query is not None:
            self.query = query
        if filters is not None:
            self.filters = filters
        if sort_by is not None:
            self.sort_by = SortField(sort_by)
        if sort_order is not None:
            self.sort_order = SortOrder(sort_order)

        self.products = []
        self.page = 0
        self.has_more = True
        self.error = None
        await self._fetch(0, reset=True)

    async def change_sort(self, sort_by: SortField) -> None:
        """Toggle direction on the same field, else switch with its default."""
        sort_by = SortField(sort_by)
        if sort_by == self.sort_by:
            order = SortOrder.ASC if self.sort_order == SortOrder.DESC else SortOrder.DESC
        else:
            order = SortOrder.ASC if sort_by == SortField.PRICE else SortOrder.DESC
        await self.update(sort_by=sort_by, sort_order=order)

    async def load_more(self) -> bool:
        """Load the next page. Returns False when there is nothing to do."""
        if self.state != ResultsState.LOADED or not self.has_more:
            return False
        await self._fetch(self.page + 1, reset=False)
        return True

    async def retry(self) -> bool:
        """Re-issue the request that failed, at the same page."""
        if self.state != ResultsState.ERROR or self._failed is None:
            return False
        page, reset = self._failed
        await self._fetch(page, reset=reset)
        return True

    async def _fetch(self, page: int, reset: bool) -> None:
        self._generation += 1
        generation = self._generation

        self.state = ResultsState.LOADING_INITIAL if reset else ResultsState.LOADING_MORE
        self.error = None
        self._failed = None

        params = self.params().for_page(page, self.page_size)
        try:
            result = await self.service.search(params)
        except SearchError as e:
            if generation == self._generation:
                logger.error("Loading page %d failed: %s", page, e)
                self._fail(page, reset)
            return
        except Exception:
            # Unexpected errors still propagate, but the state must not stay loading
            if generation == self._generation:
                logger.exception("Loading page %d raised", page)
                self._fail(page, reset)
            raise

        if generation != self._generation:
            logger.debug("Discarding stale response for generation %d", generation)
            return

        if reset:
            self.products = list(result.products)
        else:
            self.products.extend(result.products)

        self.total = result.total
        self.page = page
        self.has_more = (
            len(result.products) == self.page_size
            and (page + 1) * self.page_size < result.total
        )
        self.state = ResultsState.LOADED

        if self.on_aggregations and result.aggregations is not None:
            self.on_aggregations(result.aggregations)

    def _fail(self, page: int, reset: bool) -> None:
        self.state = ResultsState.ERROR
        self.error = ERROR_MESSAGE
        self._failed = (page, reset)
