# app/main.py
"""FastAPI application factory.

Run with ``uvicorn --factory app.main:create_app``.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.api.routes import router as api_router
from app.db import Storage, get_database_url
from app.fetcher import InventoryFetcher
from app.utils import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Ensure the database is reachable and tables exist before serving
    app.state.storage.check_connection()
    app.state.storage.create_tables()
    logger.info("Database ready")
    yield


def create_app(storage: Storage = None, fetcher: InventoryFetcher = None) -> FastAPI:
    app = FastAPI(title="Inventory Sync", lifespan=lifespan)
    app.state.storage = storage or Storage.from_url(get_database_url())
    app.state.fetcher = fetcher or InventoryFetcher()
    app.include_router(api_router)
    return app
