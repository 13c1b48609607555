from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict
from schemas.catalog_schemas import Product


class CartItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    product_id: str
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CartLine(BaseModel):
    item: CartItem
    product: Product
    line_total: Decimal


class CartResponse(BaseModel):
    lines: list[CartLine]
    item_count: int
    total: Decimal
    is_open: bool
    is_loading: bool


class AddToCartRequest(BaseModel):
    product_id: str


class UpdateQuantityRequest(BaseModel):
    # zero or negative removes the line
    quantity: int


class CartPanelRequest(BaseModel):
    is_open: bool
