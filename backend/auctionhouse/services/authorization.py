"""Ownership checks evaluated before any auction lot is touched."""

from dataclasses import dataclass
from typing import Union

from auctionhouse.domain.auction_lot import AuctionLot
from auctionhouse.errors import UnauthorizedError


@dataclass(frozen=True, slots=True)
class Authorized:
    pass


@dataclass(frozen=True, slots=True)
class Denied:
    reason: str


Decision = Union[Authorized, Denied]


def check_owner(lot: AuctionLot, requester_id: int, reason: str = "not the owner") -> Decision:
    if requester_id == lot.owner_id:
        return Authorized()
    return Denied(reason)


def enforce(decision: Decision) -> None:
    """Raise UnauthorizedError for a Denied decision."""
    if isinstance(decision, Denied):
        raise UnauthorizedError(decision.reason)
