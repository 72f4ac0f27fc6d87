# backend/models/unit.py
from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import relationship
from database import Base

# Measurement unit used to express product stock and recipe quantities (kg, l, un)
class Unit(Base):
    __tablename__ = "inventory_units"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    abbreviation = Column(String(20), nullable=False)
    description = Column(String, nullable=True)
    # Conversion factor relative to the base unit
    factor = Column(Float, default=0)

    products = relationship("Product", back_populates="unit")
