# app/db.py
"""Database engine and session utilities.

The storage handle is built once by the caller (app factory or CLI runner) and
passed down explicitly; nothing here connects at import time.
"""
import os
from dotenv import load_dotenv
from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from .errors import StorageConnectionError

load_dotenv()

Base = declarative_base()


def get_database_url() -> str:
    url = os.getenv("DATABASE_URL") or os.getenv("POSTGRES_URL")
    if not url:
        raise RuntimeError("DATABASE_URL not set")
    return url


def normalize_database_url(url: str) -> str:
    # SQLAlchemy 2.x doesn't accept 'postgres://'
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


class Storage:
    """Owns the engine and the session factory for one database."""

    def __init__(self, engine):
        self.engine = engine
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

    @classmethod
    def from_url(cls, url: str) -> "Storage":
        url = normalize_database_url(url)
        kwargs = {}
        if not url.startswith("sqlite"):
            # tuned pool settings for cloud DB
            kwargs = dict(
                pool_size=int(os.getenv("DB_POOL_SIZE", 5)),
                max_overflow=int(os.getenv("DB_MAX_OVERFLOW", 10)),
                pool_pre_ping=True,
            )
        return cls(create_engine(url, **kwargs))

    def session(self) -> Session:
        return self.session_factory()

    def create_tables(self) -> None:
        from . import models  # noqa: F401 ensure models are imported so tables are known
        Base.metadata.create_all(bind=self.engine)

    def check_connection(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except OperationalError as exc:
            raise StorageConnectionError(f"Database unreachable: {exc}") from exc


def get_db(request: Request):
    db = request.app.state.storage.session()
    try:
        yield db
    finally:
        db.close()
