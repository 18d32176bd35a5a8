"""Data models for catalog products and search requests/results."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool

# Specification values are scalars only; shape varies per category.
SpecValue = Union[StrictBool, int, float, str]


class SortField(str, Enum):
    """Sortable fields exposed to callers."""
    RELEVANCE = "relevance"
    PRICE = "price"
    RATING = "rating"
    NAME = "name"


class SortOrder(str, Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


class PriceRange(BaseModel):
    """Inclusive price bounds. Either side may be open."""

    min: Optional[float] = None
    max: Optional[float] = None


class SearchFilters(BaseModel):
    """Structured filters. Unset fields leave the dimension unconstrained."""

    category: Optional[str] = None
    brand: Optional[str] = None
    price_range: Optional[PriceRange] = None
    rating: Optional[float] = Field(None, description="Minimum rating")
    availability: Optional[str] = None
    tags: Optional[list[str]] = None

    def is_empty(self) -> bool:
        """Check whether no filter is active."""
        has_price = self.price_range is not None and (
            self.price_range.min is not None or self.price_range.max is not None
        )
        return not (
            self.category
            or self.brand
            or has_price
            or self.rating is not None
            or self.availability
            or self.tags
        )


class SearchParams(BaseModel):
    """A complete search intent: text, filters, sort and page window."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = ""
    filters: SearchFilters = Field(default_factory=SearchFilters)
    from_: int = Field(0, alias="from", ge=0, description="Zero-based record offset")
    size: int = Field(20, ge=0, description="Page size")
    sort_by: Optional[SortField] = None
    sort_order: SortOrder = SortOrder.DESC

    def for_page(self, page: int, page_size: int) -> "SearchParams":
        """Return a copy positioned at the given zero-based page."""
        return self.model_copy(update={"from_": page * page_size, "size": page_size})


class Product(BaseModel):
    """Catalog product as stored in the search index."""

    id: str = Field(..., description="Stable product identifier")
    name: str = Field(..., description="Product name")
    description: str = ""
    category: str = ""
    subcategory: str = ""
    brand: str = ""
    price: float = Field(..., ge=0, description="Current price")
    currency: str = Field(default="USD", description="Currency code")
    rating: float = Field(0.0, ge=0, le=5, description="Average rating")
    reviews_count: int = Field(0, ge=0, description="Number of reviews")
    availability: str = ""
    specifications: dict[str, SpecValue] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    image_url: str = ""

    # Engine relevance score, kept for ordering/debugging but never serialized
    score: Optional[float] = Field(None, exclude=True)


class Bucket(BaseModel):
    """Aggregation bucket."""

    key: str
    doc_count: int = 0


class RangeBucket(Bucket):
    """Range aggregation bucket with its numeric bounds."""

    model_config = ConfigDict(populate_by_name=True)

    from_: Optional[float] = Field(None, alias="from")
    to: Optional[float] = None


class Aggregations(BaseModel):
    """Facet counts returned alongside search hits."""

    categories: list[Bucket] = Field(default_factory=list)
    brands: list[Bucket] = Field(default_factory=list)
    price_ranges: list[RangeBucket] = Field(default_factory=list)
    availability: list[Bucket] = Field(default_factory=list)


class SearchResult(BaseModel):
    """Search results container."""

    products: list[Product] = Field(default_factory=list)
    total: int = 0
    took: int = 0
    aggregations: Optional[Aggregations] = None


class FilterOptions(BaseModel):
    """Full universe of filter values, used before any search has run."""

    categories: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    availability_options: list[str] = Field(default_factory=list)
