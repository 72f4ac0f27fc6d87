# backend/models/catalog.py
import enum
from sqlalchemy import (
    Column, Integer, String, Text, Float, Numeric, Boolean, DateTime, Enum, JSON,
    ForeignKey, UniqueConstraint, Index, func
)
from sqlalchemy.orm import relationship
from database import Base


# Storefront sections a catalog entry can be placed in
class CatalogSection(str, enum.Enum):
    HOME = "home"
    OFFERS = "offers"
    RECOMMENDED = "recommended"
    ON_ORDER = "on_order"
    NEW = "new"
    DISCOUNTS = "discounts"
    POPULAR = "popular"
    SEASONAL = "seasonal"
    SPECIALS = "specials"
    LIMITED = "limited"


class HomeSection(str, enum.Enum):
    HOME = "home"
    OFFERS = "offers"
    RECOMMENDED = "recommended"
    NEW = "new"


# Curated, positioned and optionally time-bounded showcase entry for a product.
# Can override the product price or wholesale tiers, globally or for one store.
class CatalogEntry(Base):
    __tablename__ = "catalog_entries"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("inventory_products.id", ondelete="CASCADE"), nullable=False, index=True)
    section = Column(
        Enum(CatalogSection, name="catalogsection", values_callable=lambda e: [m.value for m in e]),
        default=CatalogSection.HOME, nullable=False,
    )

    # Card customisation
    title = Column(String(150), nullable=True)
    subtitle = Column(String(250), nullable=True)
    image_url = Column(String(500), nullable=True)
    badge = Column(String(50), nullable=True)

    position = Column(Integer, default=0, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    price_override = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    wholesale_override_rules = Column(JSON, nullable=True)

    # NULL store means the entry applies to every store
    store_id = Column(Integer, ForeignKey("stores.id", ondelete="CASCADE"), nullable=True)
    starts_at = Column(DateTime(timezone=True), nullable=True)
    ends_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    product = relationship("Product", back_populates="catalog_entries")
    store = relationship("Store")

    __table_args__ = (
        UniqueConstraint("product_id", "section", "store_id", name="uq_catalog_product_section_store"),
        Index("ix_catalog_entries_section_active", "section", "is_active"),
    )


# Legacy home-page showcase entry; product_id may be NULL for purely visual cards
class HomeProduct(Base):
    __tablename__ = "home_products"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("inventory_products.id", ondelete="SET NULL"), nullable=True, index=True)

    # Display fields, may differ from the underlying product
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    price_override = Column(Float, nullable=True)

    section = Column(
        Enum(HomeSection, name="homesection", values_callable=lambda e: [m.value for m in e]),
        default=HomeSection.HOME, nullable=False,
    )
    badge = Column(String(50), nullable=True)
    position = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    product = relationship("Product", back_populates="home_entries")
