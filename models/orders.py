from core.database import Base
from sqlalchemy.orm import relationship
from sqlalchemy import (Column, String, ForeignKey, Numeric, Enum, JSON)
from .mixins import CreatedAtMixin, UpdatedAtMixin

class Order(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "orders"

    #pk
    id = Column(String, primary_key=True, index=True)

    #fk
    user_id = Column(String, ForeignKey("users.id"))

    #relationships
    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order")

    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum("pending", "confirmed", "shipped", "delivered", "cancelled", name="order_status"), default="pending")
    shipping_address = Column(JSON)
    billing_address = Column(JSON)
    payment_method = Column(String)
    payment_status = Column(String, default="pending")
