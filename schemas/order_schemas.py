from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str


class OrderItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    product_id: str
    quantity: int
    price: Decimal
    created_at: Optional[datetime] = None


class Order(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    total_amount: Decimal
    status: str = "pending"
    shipping_address: Optional[Address] = None
    billing_address: Optional[Address] = None
    payment_method: Optional[str] = None
    payment_status: str = "pending"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: list[OrderItem] = []


class Review(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    product_id: str
    rating: int = Field(ge=1, le=5)
    title: str = ""
    comment: str = ""
    verified_purchase: bool = False
    helpful_count: int = 0
    created_at: Optional[datetime] = None
