# backend/routes/movements.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload
from typing import Optional

from database import get_db
from models.movement import InventoryMovement, MovementType
from models.product import Product
from utils.audit import write_log
from utils.errors import storage_errors
import schemas.movement as movement_schemas

router = APIRouter(prefix="/movements", tags=["Movements"])

# Movements are an append-only ledger: there are no update or delete endpoints.


def _movement_to_response(m: InventoryMovement) -> movement_schemas.MovementResponse:
    return movement_schemas.MovementResponse(
        id=m.id,
        product_id=m.product_id,
        quantity=m.quantity,
        type=m.type,
        description=m.description,
        price=m.price,
        reference_type=m.reference_type,
        reference_id=m.reference_id,
        date=m.date,
        created_by=m.created_by,
        product_name=m.product.name if m.product else None,
    )


def stock_delta(movement_type: MovementType, quantity: float) -> float:
    """Signed change a movement applies to the product stock."""
    if movement_type == MovementType.ADJUSTMENT:
        if quantity == 0:
            raise HTTPException(status_code=400, detail="Adjustment quantity must be non-zero")
        return quantity
    if quantity <= 0:
        raise HTTPException(status_code=400, detail="Quantity must be greater than zero")
    if movement_type == MovementType.OUT:
        return -quantity
    return quantity


@router.get("", response_model=movement_schemas.MovementPage)
def list_movements(
    product_id: Optional[int] = Query(None, alias="productId"),
    type: Optional[MovementType] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    db: Session = Depends(get_db),
):
    query = db.query(InventoryMovement).options(joinedload(InventoryMovement.product))

    if product_id is not None:
        query = query.filter(InventoryMovement.product_id == product_id)
    if type:
        query = query.filter(InventoryMovement.type == type.value)

    # Newest first
    query = query.order_by(InventoryMovement.date.desc(), InventoryMovement.id.desc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": [_movement_to_response(m) for m in items],
        "total": total,
        "page": page,
        "page_size": page_size,
    }


@router.get("/{movement_id}", response_model=movement_schemas.MovementResponse)
def get_movement(movement_id: int, db: Session = Depends(get_db)):
    m = (
        db.query(InventoryMovement)
        .options(joinedload(InventoryMovement.product))
        .filter(InventoryMovement.id == movement_id)
        .first()
    )
    if not m:
        raise HTTPException(status_code=404, detail="Movement not found")
    return _movement_to_response(m)


@router.post("", response_model=movement_schemas.MovementResponse, status_code=201)
def create_movement(payload: movement_schemas.MovementCreate, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == payload.product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    delta = stock_delta(payload.type, payload.quantity)
    new_stock = (product.stock or 0) + delta
    if new_stock < 0:
        raise HTTPException(status_code=400, detail="Stock cannot become negative")

    with storage_errors(db, "Error recording movement"):
        product.stock = new_stock
        movement = InventoryMovement(
            product_id=product.id,
            quantity=payload.quantity,
            type=payload.type.value,
            description=payload.description,
            price=payload.price,
            reference_type=payload.reference_type,
            reference_id=payload.reference_id,
            created_by=payload.created_by,
        )
        db.add(movement)
        db.commit()
        db.refresh(movement)

    write_log(
        db, user_id=payload.created_by, action="MOVEMENT_CREATE", resource="movements",
        meta={"id": movement.id, "product_id": product.id, "delta": delta},
    )
    return _movement_to_response(movement)
