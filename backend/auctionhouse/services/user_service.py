"""User service — user CRUD, blocking, and the user directory consumed by auctions."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from auctionhouse.errors import BusinessError, NotFoundError
from auctionhouse.middleware.auth import hash_password, verify_password
from auctionhouse.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UserRef:
    """What the auction core needs to know about a user."""

    id: int
    username: str
    blocked: bool = False


class UserDirectory(Protocol):
    def get_by_username(self, username: str) -> Optional[UserRef]: ...

    def get_by_id(self, user_id: int) -> Optional[UserRef]: ...


def to_ref(user: User) -> UserRef:
    return UserRef(
        id=user.id,
        username=user.username,
        blocked=bool(user.blocked),
    )


class SqlUserDirectory:
    """User directory backed by the users table. Opens a short-lived session per lookup."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get_by_username(self, username: str) -> Optional[UserRef]:
        db = self._session_factory()
        try:
            user = get_user_by_username(db, username)
            return to_ref(user) if user else None
        finally:
            db.close()

    def get_by_id(self, user_id: int) -> Optional[UserRef]:
        db = self._session_factory()
        try:
            user = db.query(User).filter(User.id == user_id).first()
            return to_ref(user) if user else None
        finally:
            db.close()


class InMemoryUserDirectory:
    """Dictionary-backed directory, for embedding the auction core without a database."""

    def __init__(self, users: Optional[list[UserRef]] = None):
        self._by_username = {u.username: u for u in users or []}

    def get_by_username(self, username: str) -> Optional[UserRef]:
        return self._by_username.get(username)

    def get_by_id(self, user_id: int) -> Optional[UserRef]:
        return next((u for u in self._by_username.values() if u.id == user_id), None)


def _require(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise BusinessError(f"{name} cannot be null or empty")
    return value


def create_user(
    db: Session,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    organisation: str,
    is_admin: bool = False,
) -> User:
    """Create a user after validating every field is present and the username is free."""
    _require(username, "username")
    _require(password, "password")
    _require(first_name, "firstName")
    _require(last_name, "lastName")
    _require(organisation, "organisation")

    if get_user_by_username(db, username):
        raise BusinessError(f"user with username {username} already exist")

    user = User(
        username=username,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        organisation=organisation,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (id=%s)", user.username, user.id)
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(f"user {user_id} doesn't exist")
    return user


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def update_user(
    db: Session,
    user_id: int,
    first_name: str,
    last_name: str,
    organisation: str,
) -> User:
    user = get_user(db, user_id)
    user.first_name = _require(first_name, "firstName")
    user.last_name = _require(last_name, "lastName")
    user.organisation = _require(organisation, "organisation")
    db.commit()
    db.refresh(user)
    return user


def block_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    user.blocked = True
    db.commit()
    logger.info("Blocked user %s", user.username)
    return user


def unblock_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    user.blocked = False
    db.commit()
    logger.info("Unblocked user %s", user.username)
    return user


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """Return the user if the credentials match, else None."""
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def ensure_admin(db: Session, username: str, password: str) -> User:
    """Get or create the admin account."""
    user = get_user_by_username(db, username)
    if not user:
        user = create_user(
            db,
            username=username,
            password=password,
            first_name="Admin",
            last_name="Admin",
            organisation="Auction House",
            is_admin=True,
        )
    return user
