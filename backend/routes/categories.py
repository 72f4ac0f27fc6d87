# backend/routes/categories.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from models.category import Category
from schemas.base import DetailResponse
from schemas.category import CategoryCreate, CategoryUpdate, CategoryOut, CategoryUpdateResult
from utils.audit import write_log
from utils.errors import storage_errors

router = APIRouter(prefix="/categories", tags=["Categories"])

# Category endpoints are plain passthroughs to storage; a missing id simply affects no rows.


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    with storage_errors(db, "Error creating category"):
        category = Category(**payload.model_dump())
        db.add(category)
        db.commit()
        db.refresh(category)

    write_log(db, action="CATEGORY_CREATE", resource="categories", meta={"id": category.id})
    return category


@router.get("", response_model=List[CategoryOut])
def list_categories(
    public: Optional[str] = Query(None, description="'true' returns public categories only"),
    db: Session = Depends(get_db),
):
    with storage_errors(db, "Error fetching categories"):
        query = db.query(Category)
        if public == "true":
            query = query.filter(Category.is_public.is_(True))
        return query.order_by(Category.id.asc()).all()


@router.put("/{category_id}", response_model=CategoryUpdateResult)
def update_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)):
    values = payload.model_dump(exclude_unset=True)

    with storage_errors(db, "Error updating category"):
        updated = 0
        if values:
            updated = (
                db.query(Category)
                .filter(Category.id == category_id)
                .update(values, synchronize_session=False)
            )
        db.commit()

    write_log(db, action="CATEGORY_UPDATE", resource="categories", meta={"id": category_id, "updated": updated})
    return {"detail": "Category updated", "updated": updated}


@router.delete("/{category_id}", response_model=DetailResponse)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    # Products in this category keep existing with categoryId = NULL
    with storage_errors(db, "Error deleting category"):
        db.query(Category).filter(Category.id == category_id).delete(synchronize_session=False)
        db.commit()

    write_log(db, action="CATEGORY_DELETE", resource="categories", meta={"id": category_id})
    return {"detail": "Category deleted"}
