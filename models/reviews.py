from core.database import Base
from sqlalchemy import (Column, Integer, String, Boolean, ForeignKey)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin

class Review(Base, CreatedAtMixin):
    __tablename__ = "reviews"

    #pk
    id = Column(String, primary_key=True, index=True)

    #fk
    user_id = Column(String, ForeignKey("users.id"))
    product_id = Column(String, ForeignKey("products.id"))

    #relationships
    user = relationship("User", back_populates="reviews")
    product = relationship("Product", back_populates="reviews")

    rating = Column(Integer, nullable=False)
    title = Column(String)
    comment = Column(String)
    verified_purchase = Column(Boolean, default=False)
    helpful_count = Column(Integer, default=0)
