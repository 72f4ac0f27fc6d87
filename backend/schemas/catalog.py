# backend/schemas/catalog.py
from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from models.catalog import CatalogSection, HomeSection
from models.product import ProductType
from schemas.base import ORMBase
from schemas.product import WholesaleTier


# ---- Catalog (showcase) ----

class CatalogEntryCreate(ORMBase):
    product_id: int
    section: CatalogSection = CatalogSection.HOME
    title: Optional[str] = Field(default=None, max_length=150)
    subtitle: Optional[str] = Field(default=None, max_length=250)
    image_url: Optional[str] = None
    badge: Optional[str] = Field(default=None, max_length=50)
    position: int = 0
    is_active: bool = True
    price_override: Optional[float] = Field(default=None, ge=0)
    # Normalized with the same rules as product wholesale tiers
    wholesale_override_rules: Optional[Any] = None
    store_id: Optional[int] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None


class CatalogEntryUpdate(ORMBase):
    product_id: Optional[int] = None
    section: Optional[CatalogSection] = None
    title: Optional[str] = Field(default=None, max_length=150)
    subtitle: Optional[str] = Field(default=None, max_length=250)
    image_url: Optional[str] = None
    badge: Optional[str] = Field(default=None, max_length=50)
    position: Optional[int] = None
    is_active: Optional[bool] = None
    price_override: Optional[float] = Field(default=None, ge=0)
    wholesale_override_rules: Optional[Any] = None
    store_id: Optional[int] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None


class CatalogProduct(ORMBase):
    id: int
    name: str
    type: ProductType
    price: Optional[float] = None
    primary_image_url: Optional[str] = None
    is_active: bool


class CatalogEntryOut(ORMBase):
    id: int
    product_id: int
    section: CatalogSection
    title: Optional[str] = None
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    badge: Optional[str] = None
    position: int
    is_active: bool
    price_override: Optional[float] = None
    wholesale_override_rules: Optional[List[WholesaleTier]] = None
    store_id: Optional[int] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    product: Optional[CatalogProduct] = None
    # Price and tiers a customer actually gets: override first, product otherwise
    effective_price: Optional[float] = None
    effective_wholesale_rules: Optional[List[WholesaleTier]] = None


# ---- Home products (legacy showcase) ----

class HomeProductCreate(ORMBase):
    product_id: Optional[int] = None
    name: str = Field(max_length=150)
    description: Optional[str] = None
    image_url: Optional[str] = None
    price_override: Optional[float] = Field(default=None, ge=0)
    section: HomeSection = HomeSection.HOME
    badge: Optional[str] = Field(default=None, max_length=50)
    position: int = 0
    is_active: bool = True
    created_by: Optional[int] = None


class HomeProductUpdate(ORMBase):
    product_id: Optional[int] = None
    name: Optional[str] = Field(default=None, max_length=150)
    description: Optional[str] = None
    image_url: Optional[str] = None
    price_override: Optional[float] = Field(default=None, ge=0)
    section: Optional[HomeSection] = None
    badge: Optional[str] = Field(default=None, max_length=50)
    position: Optional[int] = None
    is_active: Optional[bool] = None


class HomeProductOut(ORMBase):
    id: int
    product_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    price_override: Optional[float] = None
    section: HomeSection
    badge: Optional[str] = None
    position: int
    is_active: bool
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
