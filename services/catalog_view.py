"""
Product catalog snapshot and the search/filter/sort projection shown to shoppers.

The pipeline is pure and recomputed on every read: search, category and
price filters (all must match), then a stable sort.
"""

import asyncio
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from pydantic import ValidationError

from core.config import settings
from core.exceptions import CollectionError
from schemas.catalog_schemas import CatalogFilters, Category, PriceRange, Product, SortOption
from services.collection_client import CATEGORIES, PRODUCTS, CollectionClient
from utils.logger import get_logger

logger = get_logger(__name__)

ALL_CATEGORIES = "All"
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def category_key(name: str) -> str:
    """Category identifier products carry for a display name: ``"Home & Garden"`` -> ``"cat_homegarden"``."""
    return "cat_" + _NON_ALPHANUMERIC.sub("", name.lower())


def matches_search(product: Product, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return (needle in product.title.lower()
            or needle in (product.brand or "").lower()
            or needle in (product.description or "").lower())


def matches_category(product: Product, category: str) -> bool:
    if not category or category == ALL_CATEGORIES:
        return True
    return product.category == category_key(category)


def parse_bound(value: Optional[str]) -> Optional[Decimal]:
    """Price bound from user input; None (unbounded) when blank or not a finite number."""
    if value is None or not value.strip():
        return None
    try:
        bound = Decimal(value.strip())
    except InvalidOperation:
        return None
    return bound if bound.is_finite() else None


def matches_price(product: Product, price_range: PriceRange) -> bool:
    low = parse_bound(price_range.min)
    high = parse_bound(price_range.max)
    if low is not None and product.price < low:
        return False
    if high is not None and product.price > high:
        return False
    return True


def filter_products(products: Iterable[Product], filters: CatalogFilters) -> List[Product]:
    return [
        product for product in products
        if matches_search(product, filters.search_query)
        and matches_category(product, filters.category)
        and matches_price(product, filters.price_range)
    ]


def sort_products(products: Iterable[Product], sort_by: str) -> List[Product]:
    """Stable sort; ``featured`` and unknown keys keep the incoming order."""
    products = list(products)

    if sort_by == SortOption.PRICE_LOW:
        return sorted(products, key=lambda p: p.price)
    if sort_by == SortOption.PRICE_HIGH:
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_by == SortOption.RATING:
        return sorted(products, key=lambda p: p.rating, reverse=True)
    if sort_by == SortOption.NEWEST:
        # undated products sort last
        dated = [p for p in products if p.created_at is not None]
        undated = [p for p in products if p.created_at is None]
        return sorted(dated, key=lambda p: p.created_at, reverse=True) + undated

    return products


class CatalogView:

    def __init__(self, client: CollectionClient, page_size: int = settings.CATALOG_PAGE_SIZE):
        self._client = client
        self.page_size = page_size
        self.products: List[Product] = []
        self.categories: List[Category] = []
        self.is_loading = False
        self.error: Optional[str] = None

    async def load(self):
        """
        Fetch newest products (one page) and all categories concurrently.

        On failure the previous snapshot is kept and ``error`` is set; there is
        no retry. ``is_loading`` is cleared either way.
        """
        self.is_loading = True
        self.error = None
        try:
            product_rows, category_rows = await asyncio.gather(
                self._client.list(PRODUCTS, order_by={"created_at": "desc"}, limit=self.page_size),
                self._client.list(CATEGORIES, order_by={"name": "asc"}),
            )
            products = [Product.model_validate(row) for row in product_rows]
            categories = [Category.model_validate(row) for row in category_rows]
        except (CollectionError, ValidationError) as e:
            self.error = "Failed to load catalog"
            logger.error(
                f"Failed to load initial data: {str(e)}",
                extra={"error_type": type(e).__name__},
                exc_info=True
            )
        else:
            self.products = products
            self.categories = categories
            logger.info(
                "Catalog loaded",
                extra={"products": len(products), "categories": len(categories)}
            )
        finally:
            self.is_loading = False

    def apply(self, filters: CatalogFilters) -> List[Product]:
        return sort_products(filter_products(self.products, filters), filters.sort_by)
