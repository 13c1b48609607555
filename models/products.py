from core.database import Base
from sqlalchemy import (Column, Integer, String, Boolean, Float, Numeric, JSON)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin, UpdatedAtMixin

class Product(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "products"

    #pk
    id = Column(String, primary_key=True, index=True)

    #relationships
    order_items = relationship("OrderItem", back_populates="product")
    cart_items = relationship("CartItem", back_populates="product")
    reviews = relationship("Review", back_populates="product")

    title = Column(String, nullable=False)
    description = Column(String, default="")
    brand = Column(String, default="")
    # opaque category identifier (e.g. "cat_electronics"), not a foreign key
    category = Column(String, index=True)
    image_url = Column(String, default="")
    images = Column(JSON, default=list)
    features = Column(JSON, default=list)
    specifications = Column(JSON, default=dict)

    price = Column(Numeric(10, 2), nullable=False)
    original_price = Column(Numeric(10, 2), nullable=True)
    rating = Column(Float, default=0)
    review_count = Column(Integer, default=0)
    in_stock = Column(Boolean, default=True)
    stock_quantity = Column(Integer, default=0)
