# app/api/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from typing import List
from .. import crud, schemas
from ..db import get_db
from ..errors import StorageConstraintViolation
from ..fetcher import InventoryFetcher
from ..services import InventorySynchronizer
from ..utils import logger

router = APIRouter()

def get_fetcher(request: Request) -> InventoryFetcher:
    return request.app.state.fetcher

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/sync", response_model=schemas.SyncResultOut)
def sync(
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    fetcher: InventoryFetcher = Depends(get_fetcher),
):
    try:
        result = InventorySynchronizer(db, fetcher).sync_page(page)
    except StorageConstraintViolation as e:
        logger.error("Sync of page %d aborted: %s", page, e)
        raise HTTPException(status_code=409, detail=str(e))
    return schemas.SyncResultOut.model_validate(result)

@router.get("/vehicles", response_model=List[schemas.VehicleOut])
def vehicles(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db)
):
    res = crud.list_vehicles(db, skip=skip, limit=limit)
    return res["items"]

@router.get("/vehicles/{vehicle_id}", response_model=schemas.VehicleOut)
def get_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    obj = crud.get_vehicle(db, vehicle_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return obj
