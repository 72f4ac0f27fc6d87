# backend/schemas/category.py
from typing import Optional
from schemas.base import ORMBase


class CategoryCreate(ORMBase):
    name: str
    description: Optional[str] = None
    is_public: bool = True


class CategoryUpdate(ORMBase):
    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None


class CategoryOut(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
    is_public: bool


class CategoryUpdateResult(ORMBase):
    detail: str
    updated: int
