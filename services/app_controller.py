"""
Top-level storefront controller.

Owns the shopper-facing UI state (search text, category, price bounds,
sort key, cart panel) and sequences catalog and cart loads against auth
transitions:

    Initializing --(user)--> Authenticated   reset + reload cart
    Initializing --(none)--> Anonymous       reset cart, no fetch

Re-entering the current state for the same user does nothing.
"""

import asyncio
from typing import Callable, List, Optional

from core.config import settings
from core.exceptions import CollectionError
from schemas.auth_schemas import AuthPhase, AuthState, User
from schemas.catalog_schemas import CatalogFilters, PriceRange, Product, SortOption
from services.auth_session import AuthSession
from services.cart_store import CartStore
from services.catalog_view import CatalogView
from services.collection_client import CART_ITEMS, CollectionClient
from utils.identifiers import generate_record_id, utc_now
from utils.logger import get_logger

logger = get_logger(__name__)


class AppController:

    def __init__(self, session: AuthSession, client: CollectionClient,
                 page_size: int = settings.CATALOG_PAGE_SIZE):
        self.session = session
        self.client = client
        self.catalog = CatalogView(client, page_size=page_size)
        self.cart = CartStore(client, on_update=self.reload_cart)

        self.user: Optional[User] = None
        self.auth_loading = True
        self.phase = AuthPhase.INITIALIZING
        self._cart_owner_id: Optional[str] = None

        self.filters = CatalogFilters()
        self.is_cart_open = False

        self._unsubscribe: Optional[Callable[[], None]] = None

    async def start(self, token: Optional[str] = None):
        """Subscribe to the auth session, then load the catalog while the session initializes."""
        self._unsubscribe = self.session.subscribe(self.handle_auth_state)
        await asyncio.gather(self.catalog.load(), self.session.initialize(token))

    def close(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def handle_auth_state(self, state: AuthState):
        self.user = state.user
        self.auth_loading = state.is_loading

        if state.is_loading:
            self.phase = AuthPhase.INITIALIZING
            return

        if state.user is None:
            if self.phase is not AuthPhase.ANONYMOUS:
                self.phase = AuthPhase.ANONYMOUS
                self._cart_owner_id = None
                self.cart.reset()
            return

        if self.phase is AuthPhase.AUTHENTICATED and self._cart_owner_id == state.user.id:
            return

        self.phase = AuthPhase.AUTHENTICATED
        self._cart_owner_id = state.user.id
        # drop the previous shopper's lines and products before the new load lands
        self.cart.reset()
        await self.reload_cart()

    async def reload_cart(self):
        if self.user is None:
            return
        await self.cart.load(self.user.id)

    # -- catalog UI state --

    @property
    def visible_products(self) -> List[Product]:
        return self.catalog.apply(self.filters)

    def search(self, query: str):
        self.filters = self.filters.model_copy(update={"search_query": query})

    def select_category(self, category: str):
        self.filters = self.filters.model_copy(update={"category": category})

    def set_price_range(self, min_price: str = "", max_price: str = ""):
        self.filters = self.filters.model_copy(update={"price_range": PriceRange(min=min_price, max=max_price)})

    def clear_price_range(self):
        self.set_price_range()

    def set_sort(self, sort_by: SortOption):
        self.filters = self.filters.model_copy(update={"sort_by": sort_by})

    def clear_filters(self):
        """Reset search, category and price; the sort key is kept."""
        self.filters = CatalogFilters(sort_by=self.filters.sort_by)

    def open_cart(self):
        self.is_cart_open = True

    def close_cart(self):
        self.is_cart_open = False

    # -- cart commands --

    def _require_user(self, action: str) -> bool:
        if self.user is None:
            logger.warning("User not authenticated", extra={"action": action})
            return False
        return True

    async def add_to_cart(self, product_id: str) -> bool:
        """
        Add one unit of ``product_id``: bump the existing line or create one.

        Returns False without touching the store when nobody is signed in,
        and False when the write fails. The cart is reloaded after every
        write attempt.
        """
        if not self._require_user("add_to_cart"):
            return False

        user_id = self.user.id
        existing = self.cart.find_item(product_id)
        now = utc_now()
        added = True
        try:
            if existing is not None:
                await self.client.update(CART_ITEMS, existing.id, {
                    "quantity": existing.quantity + 1,
                    "updated_at": now
                })
            else:
                await self.client.create(CART_ITEMS, {
                    "id": generate_record_id("cart"),
                    "user_id": user_id,
                    "product_id": product_id,
                    "quantity": 1,
                    "created_at": now,
                    "updated_at": now
                })
        except CollectionError as e:
            logger.error(
                f"Failed to add to cart: {str(e)}",
                extra={"user_id": user_id, "product_id": product_id},
                exc_info=True
            )
            added = False

        await self.reload_cart()
        return added

    async def update_quantity(self, item_id: str, quantity: int) -> bool:
        if not self._require_user("update_quantity"):
            return False
        await self.cart.update_quantity(item_id, quantity)
        return True

    async def remove_item(self, item_id: str) -> bool:
        if not self._require_user("remove_item"):
            return False
        await self.cart.remove_item(item_id)
        return True

    async def clear_cart(self) -> bool:
        if not self._require_user("clear_cart"):
            return False
        await self.cart.clear_cart()
        return True
