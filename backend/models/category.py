# backend/models/category.py
from sqlalchemy import Column, Integer, String, Text, Boolean
from sqlalchemy.orm import relationship
from database import Base

# Product grouping; only public categories are shown in the storefront
class Category(Base):
    __tablename__ = "inventory_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    is_public = Column(Boolean, default=True, nullable=False)

    # Products keep existing with a NULL category when the category is removed
    products = relationship("Product", back_populates="category", passive_deletes=True)
