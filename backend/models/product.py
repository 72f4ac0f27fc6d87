# backend/models/product.py
import enum
from sqlalchemy import (
    Column, Integer, String, Text, Float, Numeric, Boolean, DateTime, Enum, JSON,
    ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship
from database import Base


class ProductType(str, enum.Enum):
    RAW = "raw"
    INTERMEDIATE = "intermediate"
    FINAL = "final"


# Model Product
# Raw material, intermediate preparation or final good sold to customers.
# Holds pricing (including optional wholesale tiers), stock levels,
# identifiers and the filename of the primary image stored in UPLOAD_DIR.
class Product(Base):
    __tablename__ = "inventory_products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=True)
    type = Column(
        Enum(ProductType, name="producttype", values_callable=lambda e: [m.value for m in e]),
        default=ProductType.RAW, nullable=False, index=True,
    )

    unit_id = Column(Integer, ForeignKey("inventory_units.id"), nullable=False)
    category_id = Column(
        Integer, ForeignKey("inventory_categories.id", ondelete="SET NULL"), nullable=True, index=True
    )

    standard_weight_grams = Column(Float, default=0)
    net_weight = Column(Float, default=0)

    # Stock levels, expressed in the product unit.
    stock = Column(Float, default=0, nullable=False)
    min_stock = Column(Float, default=0)

    # Prices and tax rate.
    price = Column(Numeric(10, 2, asdecimal=False), CheckConstraint("price >= 0"), default=0)
    distributor_price = Column(Numeric(10, 2, asdecimal=False), default=0)
    tax_rate = Column(Numeric(5, 2, asdecimal=False), default=0)

    # Ordered list of tiers: [{"minQty": 10, "discountPercent": 5}, ...] or NULL
    wholesale_rules = Column(JSON, nullable=True)

    sku = Column(String(64), unique=True, nullable=True)
    barcode = Column(String(64), unique=True, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Bare filename inside UPLOAD_DIR, shared between products is allowed.
    primary_image_url = Column(String(500), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    unit = relationship("Unit", back_populates="products")
    category = relationship("Category", back_populates="products")

    recipe_items = relationship(
        "Recipe", foreign_keys="Recipe.final_product_id", back_populates="final_product",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    used_in_recipes = relationship(
        "Recipe", foreign_keys="Recipe.input_product_id", back_populates="input_product",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    movements = relationship("InventoryMovement", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)
    store_links = relationship("StoreProduct", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)
    catalog_entries = relationship("CatalogEntry", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)
    home_entries = relationship("HomeProduct", back_populates="product", passive_deletes=True)

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', type='{self.type}')>"
