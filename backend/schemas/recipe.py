# backend/schemas/recipe.py
from typing import Optional
from pydantic import Field

from models.product import ProductType
from models.recipe import RecipeItemType
from schemas.base import ORMBase


class RecipeCreate(ORMBase):
    final_product_id: int
    input_product_id: int
    quantity: float = Field(gt=0)
    quantity_in_grams: bool = False
    item_type: RecipeItemType = RecipeItemType.INPUT


class RecipeUpdate(ORMBase):
    quantity: Optional[float] = Field(default=None, gt=0)
    quantity_in_grams: Optional[bool] = None
    item_type: Optional[RecipeItemType] = None


class RecipeOut(ORMBase):
    id: int
    final_product_id: int
    input_product_id: int
    quantity: float
    quantity_in_grams: bool
    item_type: RecipeItemType


# Recipe line with denormalized input product data for display
class RecipeLine(RecipeOut):
    input_product_name: Optional[str] = None
    input_product_type: Optional[ProductType] = None
    unit: Optional[str] = None
