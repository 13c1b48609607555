from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SortOption(str, Enum):
    FEATURED = "featured"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NEWEST = "newest"


class Product(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str = ""
    brand: str = ""
    category: str = ""
    image_url: str = ""
    images: list[str] = []
    features: list[str] = []
    specifications: dict[str, str] = {}
    price: Decimal
    original_price: Optional[Decimal] = None
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = 0
    in_stock: bool = True
    stock_quantity: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Category(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: str = ""
    image_url: str = ""
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None


class PriceRange(BaseModel):
    """Raw bound strings as typed by the shopper; blank means unbounded."""
    min: str = ""
    max: str = ""


class CatalogFilters(BaseModel):
    search_query: str = ""
    category: str = ""
    price_range: PriceRange = PriceRange()
    sort_by: SortOption = SortOption.FEATURED


class UpdateFiltersRequest(BaseModel):
    search_query: Optional[str] = None
    category: Optional[str] = None
    price_range: Optional[PriceRange] = None
    sort_by: Optional[SortOption] = None


class CatalogResponse(BaseModel):
    products: list[Product]
    categories: list[Category]
    filters: CatalogFilters
    result_count: int
    is_loading: bool
    error: Optional[str] = None
