# backend/models/recipe.py
import enum
from sqlalchemy import Column, Integer, Float, Boolean, Enum, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


class RecipeItemType(str, enum.Enum):
    INPUT = "input"
    MATERIAL = "material"


# Bill-of-materials edge: how much of an input goes into a final/intermediate product.
# Cycles are not checked here.
class Recipe(Base):
    __tablename__ = "inventory_recipes"

    id = Column(Integer, primary_key=True, index=True)
    final_product_id = Column(
        Integer, ForeignKey("inventory_products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    input_product_id = Column(
        Integer, ForeignKey("inventory_products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quantity = Column(Float, nullable=False)
    quantity_in_grams = Column(Boolean, default=False, nullable=False)
    item_type = Column(
        Enum(RecipeItemType, name="recipeitemtype", values_callable=lambda e: [m.value for m in e]),
        default=RecipeItemType.INPUT, nullable=False,
    )

    final_product = relationship("Product", foreign_keys=[final_product_id], back_populates="recipe_items")
    input_product = relationship("Product", foreign_keys=[input_product_id], back_populates="used_in_recipes")
