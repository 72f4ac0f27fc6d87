# backend/schemas/unit.py
from typing import Optional
from schemas.base import ORMBase


class UnitBase(ORMBase):
    name: str
    abbreviation: str
    description: Optional[str] = None
    factor: float = 0


class UnitCreate(UnitBase):
    pass


class UnitUpdate(ORMBase):
    name: Optional[str] = None
    abbreviation: Optional[str] = None
    description: Optional[str] = None
    factor: Optional[float] = None


class UnitOut(UnitBase):
    id: int
