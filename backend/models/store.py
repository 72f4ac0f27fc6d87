# backend/models/store.py
from sqlalchemy import (
    Column, Integer, String, Text, Float, Boolean, DateTime, ForeignKey, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from database import Base


# Physical sales location shown in the storefront
class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    address = Column(String(250), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)

    # Contact details
    phone = Column(String(40), nullable=True)
    email = Column(String(120), nullable=True)

    # Location
    city = Column(String(100), nullable=True, index=True)
    province = Column(String(100), nullable=True, index=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Display order and visibility
    position = Column(Integer, default=0, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    product_links = relationship("StoreProduct", back_populates="store", cascade="all, delete-orphan", passive_deletes=True)


# Placement: a product sold at a store, with its own activation flag
class StoreProduct(Base):
    __tablename__ = "store_products"

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("inventory_products.id", ondelete="CASCADE"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    store = relationship("Store", back_populates="product_links")
    product = relationship("Product", back_populates="store_links")

    __table_args__ = (
        # One placement row per (store, product) pair
        UniqueConstraint("store_id", "product_id", name="uq_store_product"),
    )
