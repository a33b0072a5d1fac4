"""Database wiring for the user store.

Auction lots and bids live in memory; only users are persisted. DATABASE_URL picks
the backend, SQLite for local runs and tests, Postgres when deployed.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from auctionhouse.config import settings


def engine_options(url: str) -> dict:
    """Keyword arguments for `create_engine` given a database URL."""
    if url.startswith("sqlite"):
        # Request handlers and the user directory share connections across threads
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
