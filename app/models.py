# app/models.py
"""SQLAlchemy ORM models for persisted entities.

Defines the `Vehicle` model: one row per upstream `vehicle_id`.
"""
from sqlalchemy import CheckConstraint, Column, Integer, Text, TIMESTAMP, func
from .db import Base

class Vehicle(Base):
    __tablename__ = "vehicles"
    __table_args__ = (
        CheckConstraint("mileage >= 0", name="ck_vehicles_mileage_unsigned"),
        CheckConstraint("price >= 0", name="ck_vehicles_price_unsigned"),
    )
    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, nullable=False, unique=True, index=True)
    vin = Column(Text, nullable=False, unique=True, index=True)
    make = Column(Text)
    model = Column(Text)
    mileage = Column(Integer)
    price = Column(Integer)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Vehicle vehicle_id={self.vehicle_id} vin={self.vin!r}>"
