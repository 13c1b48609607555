from core.database import Base
from sqlalchemy import (Column, Integer, String, ForeignKey, Numeric)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin

class OrderItem(Base, CreatedAtMixin):
    __tablename__ = "order_items"

    #pk
    id = Column(String, primary_key=True, index=True)

    #fk
    order_id = Column(String, ForeignKey("orders.id"))
    product_id = Column(String, ForeignKey("products.id"))

    #relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")

    # unit price at the time of purchase
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer)
