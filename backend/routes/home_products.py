# backend/routes/home_products.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from models.catalog import HomeProduct, HomeSection
from models.product import Product
from schemas.base import DetailResponse
from schemas.catalog import HomeProductCreate, HomeProductUpdate, HomeProductOut
from utils.audit import write_log
from utils.errors import storage_errors

router = APIRouter(prefix="/home-products", tags=["Home products"])

# Legacy home-page showcase; entries may point at no product at all.


def _get_home_product_or_404(db: Session, entry_id: int) -> HomeProduct:
    entry = db.query(HomeProduct).filter(HomeProduct.id == entry_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Home product not found")
    return entry


def _check_product(db: Session, product_id: Optional[int]) -> None:
    if product_id is not None and not db.query(Product.id).filter(Product.id == product_id).first():
        raise HTTPException(status_code=404, detail="Product not found")


@router.get("", response_model=List[HomeProductOut])
def list_home_products(
    section: Optional[HomeSection] = Query(None),
    active_only: bool = Query(True, alias="activeOnly"),
    db: Session = Depends(get_db),
):
    query = db.query(HomeProduct)
    if section:
        query = query.filter(HomeProduct.section == section)
    if active_only:
        query = query.filter(HomeProduct.is_active.is_(True))
    return query.order_by(HomeProduct.position.asc(), HomeProduct.id.asc()).all()


@router.post("", response_model=HomeProductOut, status_code=201)
def create_home_product(payload: HomeProductCreate, db: Session = Depends(get_db)):
    _check_product(db, payload.product_id)

    with storage_errors(db, "Error creating home product"):
        entry = HomeProduct(**payload.model_dump())
        db.add(entry)
        db.commit()
        db.refresh(entry)

    write_log(db, user_id=entry.created_by, action="HOME_PRODUCT_CREATE", resource="home_products", meta={"id": entry.id})
    return entry


@router.put("/{entry_id}", response_model=HomeProductOut)
def update_home_product(entry_id: int, payload: HomeProductUpdate, db: Session = Depends(get_db)):
    entry = _get_home_product_or_404(db, entry_id)
    values = payload.model_dump(exclude_unset=True)
    if "product_id" in values:
        _check_product(db, values["product_id"])

    with storage_errors(db, "Error updating home product"):
        for key, value in values.items():
            setattr(entry, key, value)
        db.commit()
        db.refresh(entry)

    write_log(db, action="HOME_PRODUCT_UPDATE", resource="home_products", meta={"id": entry.id})
    return entry


@router.delete("/{entry_id}", response_model=DetailResponse)
def delete_home_product(entry_id: int, db: Session = Depends(get_db)):
    entry = _get_home_product_or_404(db, entry_id)

    with storage_errors(db, "Error deleting home product"):
        db.delete(entry)
        db.commit()

    write_log(db, action="HOME_PRODUCT_DELETE", resource="home_products", meta={"id": entry_id})
    return {"detail": "Home product deleted"}
