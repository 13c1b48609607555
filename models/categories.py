from core.database import Base
from sqlalchemy import (Column, String, ForeignKey)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin

class Category(Base, CreatedAtMixin):
    __tablename__ = "categories"

    #pk
    id = Column(String, primary_key=True, index=True)

    #fk
    parent_id = Column(String, ForeignKey("categories.id"), nullable=True)

    #relationships
    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship("Category", back_populates="parent")

    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False)
    description = Column(String, default="")
    image_url = Column(String, default="")
