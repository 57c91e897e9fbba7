# app/fetcher.py
"""Single-page client for the Carvana inventory search API."""
import os
from typing import List
import httpx
from dotenv import load_dotenv
from pydantic import ValidationError
from .errors import FetchError, MalformedResponse, TransportError
from .schemas import InventoryResponse, VehicleListing
from .utils import logger

load_dotenv()

DEFAULT_API_URL = "https://apim.carvana.io/search-api/api/v1/search/search"
PAGE_SIZE = 20

# the search API rejects requests that don't look like they come from carvana.com
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:88.0) Gecko/20100101 Firefox/88.0",
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.5",
    "Content-Type": "application/json",
    "Origin": "https://www.carvana.com",
    "Connection": "keep-alive",
    "Referer": "https://www.carvana.com/",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}


def build_payload(page_number: int) -> dict:
    payload = {"pagination": {"page": 1, "pageSize": PAGE_SIZE}}
    payload["pagination"]["page"] = page_number
    return payload


class InventoryFetcher:
    def __init__(self, url: str = None):
        self.url = url or os.getenv("INVENTORY_API_URL", DEFAULT_API_URL)

    def request_page(self, page_number: int) -> List[VehicleListing]:
        """POST one search request and return the validated vehicles.

        Raises TransportError when the API can't be reached or answers with a
        non-2xx status, and MalformedResponse when the body isn't the expected
        ``{"inventory": {"vehicles": [...]}}`` document.
        """
        if page_number < 1:
            raise ValueError(f"page_number must be positive, got {page_number}")
        try:
            resp = httpx.post(self.url, json=build_payload(page_number), headers=HEADERS)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(str(exc), status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise MalformedResponse(f"response is not JSON: {exc}") from exc
        try:
            parsed = InventoryResponse.model_validate(body)
        except ValidationError as exc:
            raise MalformedResponse(f"unexpected response shape: {exc}") from exc
        return parsed.inventory.vehicles

    def fetch_page(self, page_number: int) -> List[VehicleListing]:
        """Like request_page, but failures are logged and yield an empty list.

        Callers can't tell a failed fetch from a page without listings.
        """
        try:
            vehicles = self.request_page(page_number)
        except TransportError as e:
            logger.error("Error: %s: %s", e.status_code or "transport", e)
            return []
        except FetchError as e:
            logger.error("Error: inventory response is invalid for page %s: %s", page_number, e)
            return []
        logger.info("Fetched %d vehicles from page %d", len(vehicles), page_number)
        return vehicles
