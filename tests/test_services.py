# tests/test_services.py
from unittest.mock import MagicMock, patch

import httpx
import pytest

from app import crud
from app.errors import StorageConstraintViolation
from app.fetcher import InventoryFetcher
from app.services import (
    NEW_VEHICLES_ADDED,
    NO_NEW_VEHICLES,
    InventorySynchronizer,
    normalize_listing,
)
from conftest import make_listing


def _fetcher(*pages):
    fetcher = MagicMock(spec=InventoryFetcher)
    fetcher.fetch_page.side_effect = list(pages)
    return fetcher


PAGE_ONE = [
    make_listing(100, "A1", make="Ford", price=20000),
    make_listing(101, "A2", make="Tesla", price=35000),
]


def test_normalize_listing_maps_upstream_fields():
    listing = make_listing(100, "A1", make="Ford", model="F-150", mileage=42000, price=20000)
    assert normalize_listing(listing) == {
        "vehicle_id": 100,
        "make": "Ford",
        "model": "F-150",
        "mileage": 42000,
        "price": 20000,
        "vin": "A1",
    }


def test_normalize_listing_without_price():
    assert normalize_listing(make_listing(100, "A1"))["price"] is None


def test_fresh_page_adds_every_vehicle_in_order(db):
    fetcher = _fetcher(PAGE_ONE)
    result = InventorySynchronizer(db, fetcher).sync_page(1)

    fetcher.fetch_page.assert_called_once_with(1)
    assert result.success is True
    assert result.message == NEW_VEHICLES_ADDED
    assert [v.vehicle_id for v in result.new_vehicles_added] == [100, 101]
    assert [v.make for v in result.new_vehicles_added] == ["Ford", "Tesla"]
    assert [v.price for v in result.new_vehicles_added] == [20000, 35000]
    assert result.existing_vehicles_found == []


def test_default_page_is_one(db):
    fetcher = _fetcher([])
    InventorySynchronizer(db, fetcher).sync_page()
    fetcher.fetch_page.assert_called_once_with(1)


def test_second_sync_finds_only_existing_vehicles(db):
    sync = InventorySynchronizer(db, _fetcher(PAGE_ONE, PAGE_ONE, PAGE_ONE))
    sync.sync_page(1)
    count_after_first = crud.count_vehicles(db)

    for _ in range(2):
        result = sync.sync_page(1)
        assert result.success is False
        assert result.message == NO_NEW_VEHICLES
        assert result.new_vehicles_added == []
        assert [v.vehicle_id for v in result.existing_vehicles_found] == [100, 101]
        assert crud.count_vehicles(db) == count_after_first == 2


def test_existing_vehicle_is_not_overwritten(db):
    sync = InventorySynchronizer(db, _fetcher(
        [make_listing(100, "A1", make="Ford", price=20000)],
        [make_listing(100, "A1", make="Ford", price=18000)],
    ))
    sync.sync_page(1)
    result = sync.sync_page(1)
    assert result.existing_vehicles_found[0].price == 20000


def test_mixed_page_is_a_success(db):
    sync = InventorySynchronizer(db, _fetcher(
        [make_listing(100, "A1")],
        [make_listing(100, "A1"), make_listing(102, "A3")],
    ))
    sync.sync_page(1)
    result = sync.sync_page(2)
    assert result.success is True
    assert [v.vehicle_id for v in result.new_vehicles_added] == [102]
    assert [v.vehicle_id for v in result.existing_vehicles_found] == [100]


def test_vin_collision_aborts_but_keeps_earlier_rows(db):
    crud.first_or_create_vehicle(db, 1, {"vin": "DUP"})
    page = [
        make_listing(100, "A1"),
        make_listing(101, "DUP"),
        make_listing(102, "A3"),
    ]
    with pytest.raises(StorageConstraintViolation):
        InventorySynchronizer(db, _fetcher(page)).sync_page(1)

    assert crud.get_vehicle(db, 100) is not None
    assert crud.get_vehicle(db, 101) is None
    assert crud.get_vehicle(db, 102) is None
    assert crud.count_vehicles(db) == 2


def test_failed_fetch_looks_like_an_empty_page(db):
    # fetch_page downgrades transport errors to [], so the result matches a
    # page with no listings; success only says whether anything was added
    result = InventorySynchronizer(db, _fetcher([])).sync_page(5)
    assert result.success is False
    assert result.message == NO_NEW_VEHICLES
    assert result.new_vehicles_added == []
    assert result.existing_vehicles_found == []


@patch("app.fetcher.httpx.post")
def test_transport_failure_looks_like_an_empty_page(mock_post, db):
    mock_post.side_effect = httpx.ConnectError("connection refused")
    fetcher = InventoryFetcher(url="https://search.test/api/v1/search")

    result = InventorySynchronizer(db, fetcher).sync_page(1)

    mock_post.assert_called_once()
    assert result.success is False
    assert result.message == NO_NEW_VEHICLES
    assert result.new_vehicles_added == []
    assert result.existing_vehicles_found == []
    assert crud.count_vehicles(db) == 0


def test_result_is_readable_after_session_closes(storage):
    db = storage.session()
    result = InventorySynchronizer(db, _fetcher(PAGE_ONE)).sync_page(1)
    db.close()

    assert [v.make for v in result.new_vehicles_added] == ["Ford", "Tesla"]
    assert [v.vin for v in result.new_vehicles_added] == ["A1", "A2"]
    assert result.new_vehicles_added[0].id is not None
