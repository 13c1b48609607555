from models.users import User
from models.orders import Order
from models.order_items import OrderItem
from models.products import Product
from models.categories import Category
from models.cart_items import CartItem
from models.reviews import Review

__all__ = ["User", "Order", "OrderItem", "Product", "Category", "CartItem", "Review"]
