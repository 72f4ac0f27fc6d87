# backend/routes/stores.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from models.store import Store
from schemas.base import DetailResponse
from schemas.store import StoreCreate, StoreUpdate, StoreOut
from utils.audit import write_log
from utils.errors import storage_errors

router = APIRouter(prefix="/stores", tags=["Stores"])


def _get_store_or_404(db: Session, store_id: int) -> Store:
    store = db.query(Store).filter(Store.id == store_id).first()
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


# Stores in display order
@router.get("", response_model=List[StoreOut])
def list_stores(
    active_only: bool = Query(False, alias="activeOnly"),
    db: Session = Depends(get_db),
):
    query = db.query(Store)
    if active_only:
        query = query.filter(Store.is_active.is_(True))
    return query.order_by(Store.position.asc(), Store.id.asc()).all()


@router.get("/{store_id}", response_model=StoreOut)
def get_store(store_id: int, db: Session = Depends(get_db)):
    return _get_store_or_404(db, store_id)


@router.post("", response_model=StoreOut, status_code=201)
def create_store(payload: StoreCreate, db: Session = Depends(get_db)):
    with storage_errors(db, "Error creating store"):
        store = Store(**payload.model_dump())
        db.add(store)
        db.commit()
        db.refresh(store)

    write_log(db, user_id=store.created_by, action="STORE_CREATE", resource="stores", meta={"id": store.id})
    return store


@router.put("/{store_id}", response_model=StoreOut)
def update_store(store_id: int, payload: StoreUpdate, db: Session = Depends(get_db)):
    store = _get_store_or_404(db, store_id)

    with storage_errors(db, "Error updating store"):
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(store, key, value)
        db.commit()
        db.refresh(store)

    write_log(db, action="STORE_UPDATE", resource="stores", meta={"id": store.id})
    return store


@router.delete("/{store_id}", response_model=DetailResponse)
def delete_store(store_id: int, db: Session = Depends(get_db)):
    store = _get_store_or_404(db, store_id)
    name = store.name

    # Placements and store-specific catalog entries cascade in the database
    with storage_errors(db, "Error deleting store"):
        db.delete(store)
        db.commit()

    write_log(db, action="STORE_DELETE", resource="stores", meta={"id": store_id})
    return {"detail": f"Store '{name}' deleted"}
