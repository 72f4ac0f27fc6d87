# backend/routes/units.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from models.unit import Unit
from schemas.base import DetailResponse
from schemas.unit import UnitCreate, UnitUpdate, UnitOut
from utils.audit import write_log
from utils.errors import storage_errors

router = APIRouter(prefix="/units", tags=["Units"])


def _get_unit_or_404(db: Session, unit_id: int) -> Unit:
    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if not unit:
        raise HTTPException(status_code=404, detail="Unit not found")
    return unit


@router.get("", response_model=List[UnitOut])
def list_units(db: Session = Depends(get_db)):
    return db.query(Unit).order_by(Unit.name.asc()).all()


@router.post("", response_model=UnitOut, status_code=201)
def create_unit(payload: UnitCreate, db: Session = Depends(get_db)):
    with storage_errors(db, "Error creating unit"):
        unit = Unit(**payload.model_dump())
        db.add(unit)
        db.commit()
        db.refresh(unit)

    write_log(db, action="UNIT_CREATE", resource="units", meta={"id": unit.id})
    return unit


@router.put("/{unit_id}", response_model=UnitOut)
def update_unit(unit_id: int, payload: UnitUpdate, db: Session = Depends(get_db)):
    unit = _get_unit_or_404(db, unit_id)

    with storage_errors(db, "Error updating unit"):
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(unit, key, value)
        db.commit()
        db.refresh(unit)

    write_log(db, action="UNIT_UPDATE", resource="units", meta={"id": unit.id})
    return unit


@router.delete("/{unit_id}", response_model=DetailResponse)
def delete_unit(unit_id: int, db: Session = Depends(get_db)):
    unit = _get_unit_or_404(db, unit_id)
    name = unit.name

    # Units still referenced by products are rejected by the foreign key
    with storage_errors(db, "Error deleting unit"):
        db.delete(unit)
        db.commit()

    write_log(db, action="UNIT_DELETE", resource="units", meta={"id": unit_id})
    return {"detail": f"Unit '{name}' deleted"}
