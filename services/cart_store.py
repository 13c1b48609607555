"""
Cart state for the signed-in shopper.

The store holds the cart lines exactly as last read from the collection
store plus the products they reference. Nothing is patched locally: every
mutation writes to the store and then asks the owner to reload.

Loads and resets bump a generation counter. A load (or product lookup)
only applies its result if no newer load or reset was issued while it was
in flight, so a response arriving after a logout or user switch is dropped.
"""

from decimal import Decimal
from typing import Awaitable, Callable, Dict, List

from pydantic import ValidationError

from core.exceptions import CollectionError
from schemas.cart_schemas import CartItem, CartLine
from schemas.catalog_schemas import Product
from services.collection_client import CART_ITEMS, PRODUCTS, CollectionClient
from utils.identifiers import utc_now
from utils.logger import get_logger

logger = get_logger(__name__)


class CartStore:

    def __init__(self, client: CollectionClient, on_update: Callable[[], Awaitable[None]]):
        """
        Args:
            client: collection store
            on_update: reload requested after every mutation (owned by the controller)
        """
        self._client = client
        self._on_update = on_update
        self._generation = 0
        self.items: List[CartItem] = []
        self.products: Dict[str, Product] = {}
        self.is_loading = False

    def reset(self):
        self._generation += 1
        self.items = []
        self.products = {}
        self.is_loading = False

    async def load(self, user_id: str):
        self._generation += 1
        generation = self._generation

        try:
            rows = await self._client.list(
                CART_ITEMS,
                where={"user_id": user_id},
                order_by={"created_at": "desc"}
            )
            items = [CartItem.model_validate(row) for row in rows]
        except (CollectionError, ValidationError) as e:
            logger.error(
                f"Failed to load cart items: {str(e)}",
                extra={"user_id": user_id, "error_type": type(e).__name__},
                exc_info=True
            )
            # an unknown cart is shown as empty rather than stale
            items = []

        if generation != self._generation:
            logger.debug("Discarding superseded cart load", extra={"user_id": user_id})
            return

        self.items = items
        await self.resolve_products()

    async def resolve_products(self):
        """Fetch the products referenced by the current lines in one batched query."""
        if not self.items:
            return

        generation = self._generation
        product_ids = sorted({item.product_id for item in self.items})

        self.is_loading = True
        try:
            rows = await self._client.list(PRODUCTS, where={"id": {"in": product_ids}})
            lookup = {row["id"]: Product.model_validate(row) for row in rows}
        except (CollectionError, ValidationError) as e:
            logger.error(
                f"Failed to load cart products: {str(e)}",
                extra={"product_ids": product_ids, "error_type": type(e).__name__},
                exc_info=True
            )
            return
        finally:
            if generation == self._generation:
                self.is_loading = False

        if generation == self._generation:
            self.products = lookup

    def _owns(self, item_id: str, action: str) -> bool:
        """Writes are limited to lines from the shopper's last cart load."""
        if any(item.id == item_id for item in self.items):
            return True
        logger.warning(
            "Cart line not in current cart",
            extra={"item_id": item_id, "action": action}
        )
        return False

    async def update_quantity(self, item_id: str, new_quantity: int):
        if new_quantity <= 0:
            await self.remove_item(item_id)
            return

        if not self._owns(item_id, "update_quantity"):
            await self._on_update()
            return

        try:
            await self._client.update(CART_ITEMS, item_id, {
                "quantity": new_quantity,
                "updated_at": utc_now()
            })
        except CollectionError as e:
            logger.error(
                f"Failed to update quantity: {str(e)}",
                extra={"item_id": item_id, "quantity": new_quantity},
                exc_info=True
            )

        await self._on_update()

    async def remove_item(self, item_id: str):
        if not self._owns(item_id, "remove_item"):
            await self._on_update()
            return

        try:
            await self._client.delete(CART_ITEMS, item_id)
        except CollectionError as e:
            logger.error(
                f"Failed to remove item: {str(e)}",
                extra={"item_id": item_id},
                exc_info=True
            )

        await self._on_update()

    async def clear_cart(self):
        """Delete lines one by one. Stops at the first failure; whatever was deleted stays deleted."""
        items = list(self.items)
        deleted = 0
        try:
            for item in items:
                await self._client.delete(CART_ITEMS, item.id)
                deleted += 1
        except CollectionError as e:
            logger.error(
                f"Failed to clear cart: {str(e)}",
                extra={"deleted": deleted, "remaining": len(items) - deleted},
                exc_info=True
            )

        await self._on_update()

    def find_item(self, product_id: str) -> CartItem | None:
        return next((item for item in self.items if item.product_id == product_id), None)

    def calculate_total(self) -> Decimal:
        # lines whose product is not resolved yet count as zero
        total = Decimal("0")
        for item in self.items:
            product = self.products.get(item.product_id)
            if product is not None:
                total += product.price * item.quantity
        return total

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def lines(self) -> List[CartLine]:
        lines = []
        for item in self.items:
            product = self.products.get(item.product_id)
            if product is not None:
                lines.append(CartLine(item=item, product=product, line_total=product.price * item.quantity))
        return lines
