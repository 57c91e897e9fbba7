# app/crud.py
"""CRUD operations for `Vehicle` entities.

Vehicles are only ever created by the sync flow: `first_or_create_vehicle`
looks a row up by its business key and inserts it when missing, leaving
existing rows untouched.
"""
from typing import Any, Dict, NamedTuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from .errors import StorageConstraintViolation
from .models import Vehicle


class VehicleLookup(NamedTuple):
    record: Vehicle
    was_created: bool


def first_or_create_vehicle(db: Session, vehicle_id: int, defaults: Dict[str, Any]) -> VehicleLookup:
    obj = get_vehicle(db, vehicle_id)
    if obj is not None:
        return VehicleLookup(obj, False)
    obj = Vehicle(**{**defaults, "vehicle_id": vehicle_id})
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise StorageConstraintViolation(
            f"Cannot insert vehicle {vehicle_id} (vin {defaults.get('vin')!r}): {exc.orig}"
        ) from exc
    db.refresh(obj)
    return VehicleLookup(obj, True)

def get_vehicle(db: Session, vehicle_id: int):
    return db.query(Vehicle).filter(Vehicle.vehicle_id == vehicle_id).first()

def list_vehicles(db: Session, skip: int = 0, limit: int = 50):
    q = db.query(Vehicle)
    total = q.count()
    items = q.order_by(Vehicle.id).offset(skip).limit(limit).all()
    return {"total": total, "items": items}

def count_vehicles(db: Session) -> int:
    return db.query(func.count(Vehicle.id)).scalar()
