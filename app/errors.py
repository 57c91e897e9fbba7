# app/errors.py
"""Error types raised by the fetch and storage layers."""


class InventorySyncError(Exception):
    """Base class for inventory sync failures."""


class FetchError(InventorySyncError):
    """The upstream inventory page could not be obtained."""


class TransportError(FetchError):
    """Network or HTTP failure while calling the inventory API."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(FetchError):
    """The inventory API answered with a body we cannot interpret."""


class StorageError(InventorySyncError):
    pass


class StorageConstraintViolation(StorageError):
    """A unique key (vehicle_id or vin) conflicted on insert."""


class StorageConnectionError(StorageError):
    """The database could not be reached."""
