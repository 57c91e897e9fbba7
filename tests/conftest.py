# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from app.db import Storage
from app.schemas import VehicleListing


@pytest.fixture
def storage():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    storage = Storage(engine)
    storage.create_tables()
    yield storage
    engine.dispose()


@pytest.fixture
def db(storage):
    session = storage.session()
    yield session
    session.close()


def make_item(vehicle_id, vin, make=None, model=None, mileage=None, price=None):
    """Raw inventory item as the search API returns it."""
    item = {"vehicleId": vehicle_id, "vin": vin, "make": make, "model": model, "mileage": mileage}
    if price is not None:
        item["price"] = {"total": price}
    return item


def make_listing(*args, **kwargs):
    return VehicleListing.model_validate(make_item(*args, **kwargs))
