# backend/routes/catalog.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session, contains_eager

from database import get_db
from models.catalog import CatalogEntry, CatalogSection
from models.product import Product
from models.store import Store
from schemas.base import DetailResponse
from schemas.catalog import CatalogEntryCreate, CatalogEntryUpdate, CatalogEntryOut
from utils.audit import write_log
from utils.errors import storage_errors
from utils.wholesale import WholesaleRulesError, normalize_wholesale_rules

router = APIRouter(prefix="/catalog", tags=["Catalog"])


def _to_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive datetimes are taken as UTC so every stored bound compares consistently
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _entry_to_out(entry: CatalogEntry) -> CatalogEntryOut:
    out = CatalogEntryOut.model_validate(entry)
    product = entry.product
    if entry.price_override is not None:
        out.effective_price = entry.price_override
    elif product is not None:
        out.effective_price = product.price
    out.effective_wholesale_rules = entry.wholesale_override_rules or (product.wholesale_rules if product else None)
    return out


def _get_entry_or_404(db: Session, entry_id: int) -> CatalogEntry:
    entry = db.query(CatalogEntry).filter(CatalogEntry.id == entry_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Catalog entry not found")
    return entry


def _prepare_values(db: Session, values: Dict[str, Any], current: Optional[CatalogEntry] = None) -> Dict[str, Any]:
    """Validate a create/update payload against storage; returns the values to assign."""
    if "wholesale_override_rules" in values:
        try:
            values["wholesale_override_rules"] = normalize_wholesale_rules(
                values["wholesale_override_rules"], field="wholesaleOverrideRules"
            )
        except WholesaleRulesError as e:
            raise HTTPException(status_code=400, detail=str(e))

    for key in ("starts_at", "ends_at"):
        if key in values:
            values[key] = _to_utc(values[key])

    def merged(key):
        if key in values:
            return values[key]
        return getattr(current, key) if current is not None else None

    product_id = merged("product_id")
    section = merged("section") or CatalogSection.HOME
    store_id = merged("store_id")
    starts_at = _to_utc(merged("starts_at"))
    ends_at = _to_utc(merged("ends_at"))

    if "product_id" in values:
        if product_id is None or not db.query(Product.id).filter(Product.id == product_id).first():
            raise HTTPException(status_code=404, detail="Product not found")
    if "store_id" in values and store_id is not None:
        if not db.query(Store.id).filter(Store.id == store_id).first():
            raise HTTPException(status_code=404, detail="Store not found")

    if starts_at and ends_at and ends_at < starts_at:
        raise HTTPException(status_code=400, detail="endsAt must be after startsAt")

    # NULL store ids are compared explicitly; a SQL unique index would let them repeat
    dup = db.query(CatalogEntry.id).filter(
        CatalogEntry.product_id == product_id,
        CatalogEntry.section == section,
        CatalogEntry.store_id.is_(None) if store_id is None else CatalogEntry.store_id == store_id,
    )
    if current is not None:
        dup = dup.filter(CatalogEntry.id != current.id)
    if dup.first():
        raise HTTPException(status_code=409, detail="Catalog entry already exists for this product, section and store")

    return values


# Showcase entries in display order; by default only those visible right now
@router.get("", response_model=List[CatalogEntryOut])
def list_catalog(
    section: Optional[CatalogSection] = Query(None),
    store_id: Optional[int] = Query(None, alias="storeId"),
    active_only: bool = Query(True, alias="activeOnly"),
    db: Session = Depends(get_db),
):
    query = (
        db.query(CatalogEntry)
        .join(Product, CatalogEntry.product_id == Product.id)
        .options(contains_eager(CatalogEntry.product))
    )

    if section:
        query = query.filter(CatalogEntry.section == section)
    if store_id is not None:
        # Store-specific entries plus the ones shared by every store
        query = query.filter(or_(CatalogEntry.store_id == store_id, CatalogEntry.store_id.is_(None)))
    if active_only:
        now = datetime.now(timezone.utc)
        query = query.filter(
            CatalogEntry.is_active.is_(True),
            Product.is_active.is_(True),
            or_(CatalogEntry.starts_at.is_(None), CatalogEntry.starts_at <= now),
            or_(CatalogEntry.ends_at.is_(None), CatalogEntry.ends_at >= now),
        )

    rows = query.order_by(CatalogEntry.position.asc(), CatalogEntry.id.asc()).all()
    return [_entry_to_out(e) for e in rows]


@router.get("/{entry_id}", response_model=CatalogEntryOut)
def get_catalog_entry(entry_id: int, db: Session = Depends(get_db)):
    return _entry_to_out(_get_entry_or_404(db, entry_id))


@router.post("", response_model=CatalogEntryOut, status_code=201)
def create_catalog_entry(payload: CatalogEntryCreate, db: Session = Depends(get_db)):
    values = _prepare_values(db, payload.model_dump())

    with storage_errors(db, "Error creating catalog entry"):
        entry = CatalogEntry(**values)
        db.add(entry)
        db.commit()
        db.refresh(entry)

    write_log(db, action="CATALOG_CREATE", resource="catalog", meta={"id": entry.id})
    return _entry_to_out(entry)


@router.put("/{entry_id}", response_model=CatalogEntryOut)
def update_catalog_entry(entry_id: int, payload: CatalogEntryUpdate, db: Session = Depends(get_db)):
    entry = _get_entry_or_404(db, entry_id)
    values = _prepare_values(db, payload.model_dump(exclude_unset=True), current=entry)

    with storage_errors(db, "Error updating catalog entry"):
        for key, value in values.items():
            setattr(entry, key, value)
        db.commit()
        db.refresh(entry)

    write_log(db, action="CATALOG_UPDATE", resource="catalog", meta={"id": entry.id})
    return _entry_to_out(entry)


@router.delete("/{entry_id}", response_model=DetailResponse)
def delete_catalog_entry(entry_id: int, db: Session = Depends(get_db)):
    entry = _get_entry_or_404(db, entry_id)

    with storage_errors(db, "Error deleting catalog entry"):
        db.delete(entry)
        db.commit()

    write_log(db, action="CATALOG_DELETE", resource="catalog", meta={"id": entry_id})
    return {"detail": "Catalog entry deleted"}
