# backend/models/movement.py
import enum
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base


class MovementType(str, enum.Enum):
    IN = "in"
    OUT = "out"
    ADJUSTMENT = "adjustment"
    PRODUCTION = "production"


# Immutable ledger entry for a stock-affecting event
class InventoryMovement(Base):
    __tablename__ = "inventory_movements"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("inventory_products.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Quantity involved in the movement (signed for adjustments)
    quantity = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    # Unit cost, normally only recorded for incoming stock
    price = Column(Float, nullable=True)

    type = Column(String(20), nullable=False, index=True)

    # Optional link to the document that caused the movement (e.g. "order", 42)
    reference_type = Column(String(50), nullable=True)
    reference_id = Column(Integer, nullable=True)

    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by = Column(Integer, nullable=False)

    product = relationship("Product", back_populates="movements")
