# app/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

# Upstream inventory API payloads

class ListingPrice(BaseModel):
    total: Optional[int] = Field(None, ge=0)

class VehicleListing(BaseModel):
    vehicle_id: int = Field(..., alias="vehicleId", ge=0)
    make: Optional[str] = None
    model: Optional[str] = None
    mileage: Optional[int] = Field(None, ge=0)
    price: Optional[ListingPrice] = None
    vin: str = Field(..., min_length=1)

class Inventory(BaseModel):
    vehicles: List[VehicleListing]

class InventoryResponse(BaseModel):
    inventory: Inventory

# Stored records and sync summaries

class VehicleOut(BaseModel):
    id: int
    vehicle_id: int
    vin: str
    make: Optional[str]
    model: Optional[str]
    mileage: Optional[int]
    price: Optional[int]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    model_config = ConfigDict(from_attributes=True)

class SyncResultOut(BaseModel):
    new_vehicles_added: List[VehicleOut]
    existing_vehicles_found: List[VehicleOut]
    success: bool
    message: str
    model_config = ConfigDict(from_attributes=True)
