# app/services.py
from dataclasses import dataclass, field
from typing import Dict, List
from sqlalchemy.orm import Session
from . import crud
from .fetcher import InventoryFetcher
from .models import Vehicle
from .schemas import VehicleListing
from .utils import logger

NO_NEW_VEHICLES = "No new vehicles were found"
NEW_VEHICLES_ADDED = "New vehicles were added to the database"


@dataclass
class SyncResult:
    new_vehicles_added: List[Vehicle] = field(default_factory=list)
    existing_vehicles_found: List[Vehicle] = field(default_factory=list)
    success: bool = False
    message: str = ""


def normalize_listing(listing: VehicleListing) -> Dict:
    return {
        "vehicle_id": listing.vehicle_id,
        "make": listing.make,
        "model": listing.model,
        "mileage": listing.mileage,
        "price": listing.price.total if listing.price is not None else None,
        "vin": listing.vin,
    }


class InventorySynchronizer:
    """Stores unseen vehicles from one inventory page.

    Each new vehicle is committed on its own, so a storage error halfway
    through a page leaves the vehicles before it in the database.
    """

    def __init__(self, db: Session, fetcher: InventoryFetcher):
        self.db = db
        self.fetcher = fetcher

    def sync_page(self, page_number: int = 1) -> SyncResult:
        result = SyncResult()
        new_vehicles_found = False

        for listing in self.fetcher.fetch_page(page_number):
            data = normalize_listing(listing)
            record, was_created = crud.first_or_create_vehicle(self.db, data["vehicle_id"], data)
            if was_created:
                new_vehicles_found = True
                result.new_vehicles_added.append(record)
                logger.debug("Added vehicle %s", data["vehicle_id"])
            else:
                result.existing_vehicles_found.append(record)
                logger.debug("Vehicle %s already stored", data["vehicle_id"])

        # success only reflects whether anything new was stored
        if not new_vehicles_found:
            result.message = NO_NEW_VEHICLES
        else:
            result.message = NEW_VEHICLES_ADDED
            result.success = True

        logger.info(
            "Synced page %d: %d added, %d existing",
            page_number, len(result.new_vehicles_added), len(result.existing_vehicles_found)
        )
        return result
