# backend/schemas/store.py
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr

from models.product import ProductType
from schemas.base import ORMBase


# Shared store attributes
class StoreBase(ORMBase):
    name: str
    address: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    city: Optional[str] = None
    province: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    position: int = 0
    is_active: bool = True
    created_by: Optional[int] = None


class StoreCreate(StoreBase):
    pass


# Partial update - all fields optional
class StoreUpdate(ORMBase):
    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    city: Optional[str] = None
    province: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    position: Optional[int] = None
    is_active: Optional[bool] = None


class StoreOut(StoreBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---- Placements ----

class StoreProductOut(ORMBase):
    id: int
    store_id: int
    product_id: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StoreProductsAssign(ORMBase):
    product_ids: List[int]


class StoreProductToggle(ORMBase):
    is_active: bool


# Product fields flattened into a placement listing
class PlacementProduct(ORMBase):
    id: int
    name: str
    price: float
    primary_image_url: Optional[str] = None
    type: ProductType
    is_active: bool
    category_id: Optional[int] = None
    category: Optional[str] = None
    unit_id: Optional[int] = None
    unit: Optional[str] = None


class PlacementView(ORMBase):
    link_id: int
    store_id: int
    product_id: int
    is_active: bool
    product: PlacementProduct
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Public-facing store carrying a product
class ProductStoreView(ORMBase):
    store_id: int
    name: str
    address: str
    city: Optional[str] = None
    province: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
