"""SQLAlchemy ORM models."""

from auctionhouse.models.user import User

__all__ = [
    "User",
]
