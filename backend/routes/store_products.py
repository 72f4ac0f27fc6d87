# backend/routes/store_products.py
from typing import Any, List
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session, contains_eager

from database import get_db
from models.product import Product, ProductType
from models.store import Store, StoreProduct
from schemas.base import DetailResponse
from schemas.store import (
    PlacementProduct, PlacementView, ProductStoreView,
    StoreProductOut, StoreProductsAssign, StoreProductToggle,
)
from utils.audit import write_log
from utils.errors import storage_errors

router = APIRouter(tags=["Store products"])


def _get_placement_or_404(db: Session, store_id: int, product_id: int) -> StoreProduct:
    row = (
        db.query(StoreProduct)
        .filter(StoreProduct.store_id == store_id, StoreProduct.product_id == product_id)
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="Placement not found")
    return row


# Flatten a placement and its product into the storefront view
def _placement_to_view(sp: StoreProduct) -> PlacementView:
    p = sp.product
    category = p.category
    unit = p.unit
    return PlacementView(
        link_id=sp.id,
        store_id=sp.store_id,
        product_id=p.id,
        is_active=bool(sp.is_active),
        product=PlacementProduct(
            id=p.id,
            name=p.name,
            price=float(p.price or 0),
            primary_image_url=p.primary_image_url or None,
            type=p.type,
            is_active=bool(p.is_active),
            category_id=category.id if category else None,
            category=category.name if category else None,
            unit_id=unit.id if unit else None,
            unit=(unit.abbreviation or unit.name) if unit else None,
        ),
        created_at=sp.created_at,
        updated_at=sp.updated_at,
    )


# Final, active products placed in a store; optional case-insensitive name search
@router.get("/stores/{store_id}/products", response_model=List[PlacementView])
def list_store_products(
    store_id: int,
    active_only: str = Query("true", alias="activeOnly"),
    q: str = Query("", description="Search by product name"),
    db: Session = Depends(get_db),
):
    query = (
        db.query(StoreProduct)
        .join(Product, StoreProduct.product_id == Product.id)
        .options(
            contains_eager(StoreProduct.product).joinedload(Product.category),
            contains_eager(StoreProduct.product).joinedload(Product.unit),
        )
        .filter(
            StoreProduct.store_id == store_id,
            Product.type == ProductType.FINAL,
            Product.is_active.is_(True),
        )
    )

    if active_only == "true":
        query = query.filter(StoreProduct.is_active.is_(True))

    search = (q or "").strip()
    if search:
        query = query.filter(Product.name.icontains(search, autoescape=True))

    rows = query.order_by(StoreProduct.created_at.desc(), StoreProduct.id.desc()).all()
    return [_placement_to_view(sp) for sp in rows]


# Assign products to a store: find-or-create each placement, re-activating inactive ones
@router.post("/stores/{store_id}/products", response_model=List[StoreProductOut], status_code=201)
def add_products_to_store(store_id: int, body: Any = Body(None), db: Session = Depends(get_db)):
    product_ids = None
    if isinstance(body, dict):
        product_ids = body.get("productIds", body.get("product_ids"))
    if not isinstance(product_ids, list) or not product_ids:
        raise HTTPException(status_code=400, detail="productIds is required (array)")
    try:
        payload = StoreProductsAssign(product_ids=product_ids)
    except ValidationError:
        raise HTTPException(status_code=400, detail="productIds must contain integer ids")

    if not db.query(Store.id).filter(Store.id == store_id).first():
        raise HTTPException(status_code=404, detail="Store not found")

    ids = list(dict.fromkeys(payload.product_ids))
    found = {pid for (pid,) in db.query(Product.id).filter(Product.id.in_(ids)).all()}
    missing = [pid for pid in ids if pid not in found]
    if missing:
        raise HTTPException(status_code=404, detail=f"Products not found: {missing}")

    existing = {
        sp.product_id: sp
        for sp in db.query(StoreProduct).filter(
            StoreProduct.store_id == store_id, StoreProduct.product_id.in_(ids)
        )
    }

    # The whole batch is committed at once: either every placement is stored or none
    rows: List[StoreProduct] = []
    with storage_errors(db, "Error assigning products to store"):
        for pid in ids:
            row = existing.get(pid)
            if row is None:
                row = StoreProduct(store_id=store_id, product_id=pid, is_active=True)
                db.add(row)
            elif not row.is_active:
                row.is_active = True
            rows.append(row)
        db.commit()
        for row in rows:
            db.refresh(row)

    write_log(
        db, action="STORE_PRODUCTS_ADD", resource="store_products",
        meta={"store_id": store_id, "product_ids": ids},
    )
    return rows


@router.delete("/stores/{store_id}/products/{product_id}", response_model=DetailResponse)
def remove_product_from_store(store_id: int, product_id: int, db: Session = Depends(get_db)):
    row = _get_placement_or_404(db, store_id, product_id)

    with storage_errors(db, "Error removing product from store"):
        db.delete(row)
        db.commit()

    write_log(
        db, action="STORE_PRODUCTS_REMOVE", resource="store_products",
        meta={"store_id": store_id, "product_id": product_id},
    )
    return {"detail": "Product removed from store"}


@router.patch("/stores/{store_id}/products/{product_id}", response_model=StoreProductOut)
def toggle_store_product(
    store_id: int, product_id: int, payload: StoreProductToggle, db: Session = Depends(get_db),
):
    row = _get_placement_or_404(db, store_id, product_id)

    with storage_errors(db, "Error updating placement"):
        row.is_active = payload.is_active
        db.commit()
        db.refresh(row)

    write_log(
        db, action="STORE_PRODUCTS_TOGGLE", resource="store_products",
        meta={"store_id": store_id, "product_id": product_id, "is_active": payload.is_active},
    )
    return row


# Active stores carrying a product, in display order
@router.get("/products/{product_id}/stores", response_model=List[ProductStoreView])
def list_stores_for_product(product_id: int, db: Session = Depends(get_db)):
    links = (
        db.query(StoreProduct)
        .join(Store, StoreProduct.store_id == Store.id)
        .options(contains_eager(StoreProduct.store))
        .filter(
            StoreProduct.product_id == product_id,
            StoreProduct.is_active.is_(True),
            Store.is_active.is_(True),
        )
        .order_by(Store.position.asc(), Store.id.asc())
        .all()
    )

    return [
        ProductStoreView(
            store_id=link.store_id,
            name=link.store.name,
            address=link.store.address,
            city=link.store.city,
            province=link.store.province,
            image_url=link.store.image_url or None,
            is_active=bool(link.store.is_active),
        )
        for link in links
    ]
