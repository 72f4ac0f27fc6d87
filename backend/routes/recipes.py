# backend/routes/recipes.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from database import get_db
from models.product import Product
from models.recipe import Recipe
from schemas.base import DetailResponse
from schemas.recipe import RecipeCreate, RecipeUpdate, RecipeOut, RecipeLine
from utils.audit import write_log
from utils.errors import storage_errors

router = APIRouter(tags=["Recipes"])


def _product_exists(db: Session, product_id: int) -> bool:
    return db.query(Product.id).filter(Product.id == product_id).first() is not None


def _get_recipe_or_404(db: Session, recipe_id: int) -> Recipe:
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe item not found")
    return recipe


# Map a recipe edge to a display line with the input product details
def _recipe_to_line(recipe: Recipe) -> RecipeLine:
    inp = recipe.input_product
    unit = None
    if inp is not None and inp.unit is not None:
        unit = inp.unit.abbreviation or inp.unit.name
    return RecipeLine(
        id=recipe.id,
        final_product_id=recipe.final_product_id,
        input_product_id=recipe.input_product_id,
        quantity=recipe.quantity,
        quantity_in_grams=recipe.quantity_in_grams,
        item_type=recipe.item_type,
        input_product_name=inp.name if inp else None,
        input_product_type=inp.type if inp else None,
        unit=unit,
    )


# Bill of materials of a product
@router.get("/products/{product_id}/recipe", response_model=List[RecipeLine])
def get_product_recipe(product_id: int, db: Session = Depends(get_db)):
    if not _product_exists(db, product_id):
        raise HTTPException(status_code=404, detail="Product not found")

    rows = (
        db.query(Recipe)
        .options(joinedload(Recipe.input_product).joinedload(Product.unit))
        .filter(Recipe.final_product_id == product_id)
        .order_by(Recipe.id.asc())
        .all()
    )
    return [_recipe_to_line(r) for r in rows]


@router.post("/recipes", response_model=RecipeOut, status_code=201)
def create_recipe_item(payload: RecipeCreate, db: Session = Depends(get_db)):
    for pid in (payload.final_product_id, payload.input_product_id):
        if not _product_exists(db, pid):
            raise HTTPException(status_code=404, detail=f"Product {pid} not found")

    with storage_errors(db, "Error creating recipe item"):
        recipe = Recipe(**payload.model_dump())
        db.add(recipe)
        db.commit()
        db.refresh(recipe)

    write_log(db, action="RECIPE_CREATE", resource="recipes", meta={"id": recipe.id})
    return recipe


@router.put("/recipes/{recipe_id}", response_model=RecipeOut)
def update_recipe_item(recipe_id: int, payload: RecipeUpdate, db: Session = Depends(get_db)):
    recipe = _get_recipe_or_404(db, recipe_id)

    with storage_errors(db, "Error updating recipe item"):
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(recipe, key, value)
        db.commit()
        db.refresh(recipe)

    write_log(db, action="RECIPE_UPDATE", resource="recipes", meta={"id": recipe.id})
    return recipe


@router.delete("/recipes/{recipe_id}", response_model=DetailResponse)
def delete_recipe_item(recipe_id: int, db: Session = Depends(get_db)):
    recipe = _get_recipe_or_404(db, recipe_id)

    with storage_errors(db, "Error deleting recipe item"):
        db.delete(recipe)
        db.commit()

    write_log(db, action="RECIPE_DELETE", resource="recipes", meta={"id": recipe_id})
    return {"detail": "Recipe item deleted"}
