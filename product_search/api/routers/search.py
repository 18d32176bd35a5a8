"""API endpoints for searching products."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ...models import FilterOptions, Product, SearchParams, SearchResult
from ...search.service import SearchError, SearchService

router = APIRouter()


def get_search_service(request: Request) -> SearchService:
    """Dependency to get search service."""
    return SearchService(request.app.state.search_client)


@router.post("/search", response_model=SearchResult)
async def search_products(
    params: SearchParams,
    service: SearchService = Depends(get_search_service),
):
    """
    Search products.

    - query: free text; empty matches everything
    - filters: category, brand, price_range, rating, availability, tags
    - from / size: record offset and page size
    - sort_by / sort_order: relevance, price, rating or name
    """
    try:
        return await service.search(params)
    except SearchError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/search/filters", response_model=FilterOptions)
async def get_filters(service: SearchService = Depends(get_search_service)):
    """All filter values present in the index."""
    return await service.get_filters()


@router.get("/search/suggestions", response_model=list[str])
async def get_suggestions(
    q: str = Query("", description="Partial query text"),
    service: SearchService = Depends(get_search_service),
):
    """Up to five name suggestions for partial query text."""
    return await service.get_suggestions(q)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    service: SearchService = Depends(get_search_service),
):
    """Get product by ID."""
    product = await service.get_product_by_id(product_id)

    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return product
