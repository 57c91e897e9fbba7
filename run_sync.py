"""Synchronize one inventory page and print the result as JSON.

Usage: python run_sync.py [page]
"""
import argparse
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Store unseen vehicles from one inventory page.")
    parser.add_argument("page", nargs="?", type=int, default=1, help="page number to pull (default: 1)")
    args = parser.parse_args(argv)
    if args.page < 1:
        parser.error("page must be a positive integer")
    return args


def run(page, storage, fetcher):
    """Run one sync and return the rendered JSON summary."""
    from app.schemas import SyncResultOut
    from app.services import InventorySynchronizer

    db = storage.session()
    try:
        result = InventorySynchronizer(db, fetcher).sync_page(page)
        return SyncResultOut.model_validate(result).model_dump_json(indent=2)
    finally:
        db.close()


def main(argv=None):
    from app.db import Storage, get_database_url
    from app.fetcher import InventoryFetcher

    args = parse_args(argv)
    storage = Storage.from_url(get_database_url())
    storage.check_connection()
    storage.create_tables()
    print(run(args.page, storage, InventoryFetcher()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
