"""Typed failures raised by the auction core and the user directory.

The HTTP layer maps each kind onto a status code in `auctionhouse.main`.
"""


class AuctionHouseError(Exception):
    """Base class for all domain failures."""

    status_code = 500
    title = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessError(AuctionHouseError):
    """Bad input or an operation attempted in the wrong state."""

    status_code = 400
    title = "BAD_REQUEST"


class NotFoundError(AuctionHouseError):
    """Referenced entity does not exist."""

    status_code = 404
    title = "NOT_FOUND"


class UnauthorizedError(AuctionHouseError):
    """Caller lacks the required relationship to the entity."""

    status_code = 401
    title = "UNAUTHORIZED"


class ConflictError(AuctionHouseError):
    """Entity with the same identity already exists."""

    status_code = 409
    title = "CONFLICT"
