# backend/schemas/movement.py
from datetime import datetime
from typing import List, Optional

from models.movement import MovementType
from schemas.base import ORMBase


# Base schema for inventory movement data
class MovementBase(ORMBase):
    product_id: int
    quantity: float
    type: MovementType
    description: Optional[str] = None
    price: Optional[float] = None
    reference_type: Optional[str] = None  # e.g. "order"
    reference_id: Optional[int] = None


# Schema for recording a new movement
class MovementCreate(MovementBase):
    created_by: int


# Schema for returning movement details
class MovementResponse(MovementBase):
    id: int
    date: datetime
    created_by: int
    product_name: Optional[str] = None


# Paginated response for movement history
class MovementPage(ORMBase):
    items: List[MovementResponse]
    total: int
    page: int
    page_size: int
