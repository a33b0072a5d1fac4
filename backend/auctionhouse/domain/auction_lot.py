"""Auction lot domain model — lifecycle state machine, bids, and closing."""

import math
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from auctionhouse import allocation
from auctionhouse.errors import BusinessError


class AuctionStatus(str, Enum):
    OPENED = "OPENED"
    CLOSED = "CLOSED"


class BidState(str, Enum):
    PENDING = "PENDING"
    WIN = "WIN"
    LOSE = "LOSE"


@dataclass(frozen=True, slots=True)
class Bid:
    """One bid against one lot. Immutable; closing the lot replaces it with its settled copy."""

    id: int
    auction_lot_id: int
    bidder_id: int
    quantity: int
    price: float
    state: BidState = BidState.PENDING
    win_quantity: int = 0


@dataclass(frozen=True, slots=True)
class ClosingSummary:
    total_sold_quantity: int
    total_revenue: float
    winning_bids: tuple[Bid, ...]


@dataclass(frozen=True, slots=True)
class AuctionLotView:
    """Read model of a lot. `owner_id` and `bids` are only filled in for the owner."""

    id: int
    symbol: str
    min_price: float
    quantity: int
    status: AuctionStatus
    owner_id: Optional[int] = None
    bids: Optional[tuple[Bid, ...]] = None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(eq=False)
class AuctionLot:
    """A quantity of a symbol offered by one owner, open for sealed bids until closed.

    All reads and writes of `status` and `bids` go through `_lock`, so bids cannot
    be appended once closing has begun and the allocation runs at most once.
    """

    id: int
    owner_id: int
    symbol: str
    quantity: int
    min_price: float
    status: AuctionStatus = field(default=AuctionStatus.OPENED, init=False)
    _bids: list[Bid] = field(default_factory=list, init=False, repr=False)
    _summary: Optional[ClosingSummary] = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self):
        if not self.symbol or not self.symbol.strip():
            raise BusinessError("symbol cannot be null or empty")
        if not math.isfinite(self.min_price) or self.min_price <= 0:
            raise BusinessError("minPrice must be above 0")
        if not _is_int(self.quantity):
            raise BusinessError("quantity must be a whole number")
        if self.quantity <= 0:
            raise BusinessError("quantity must be above 0")

    @property
    def bids(self) -> list[Bid]:
        """Snapshot of the bids in submission order."""
        with self._lock:
            return list(self._bids)

    def place_bid(self, bid_id: int, bidder_id: int, quantity: int, price: float) -> Bid:
        """Validate and append a bid. Nothing is mutated when validation fails."""
        with self._lock:
            if self.status != AuctionStatus.OPENED:
                raise BusinessError("already closed")
            if bidder_id == self.owner_id:
                raise BusinessError("cannot bid on owned auction")
            if not _is_int(quantity):
                raise BusinessError("quantity must be a whole number")
            if quantity <= 0:
                raise BusinessError("quantity must be above 0")
            if quantity > self.quantity:
                raise BusinessError("quantity must be not more than auction lot's quantity")
            if not math.isfinite(price) or price <= 0:
                raise BusinessError("price must be positive")
            if price < self.min_price:
                raise BusinessError("price must be not less than auction lot's minimum price")

            bid = Bid(
                id=bid_id,
                auction_lot_id=self.id,
                bidder_id=bidder_id,
                quantity=quantity,
                price=price,
            )
            self._bids.append(bid)
            return bid

    def close(self) -> ClosingSummary:
        """Close the lot and allocate it to the highest bids.

        Steps (all under the lot lock):
        1. Reject if already closed
        2. Rank bids by price, earlier submission first on ties
        3. Fill each bid from the remaining quantity
        4. Mark every bid WIN or LOSE and build the summary
        """
        with self._lock:
            if self.status != AuctionStatus.OPENED:
                raise BusinessError("already closed")

            requests = [
                allocation.BidRequest(sequence=i, price=b.price, quantity=b.quantity)
                for i, b in enumerate(self._bids)
            ]
            result = allocation.allocate(self.quantity, requests)

            winners = []
            for fill in result.fills:
                settled = replace(
                    self._bids[fill.sequence],
                    state=BidState.WIN if fill.win_quantity > 0 else BidState.LOSE,
                    win_quantity=fill.win_quantity,
                )
                self._bids[fill.sequence] = settled
                if settled.state == BidState.WIN:
                    winners.append(settled)

            self._summary = ClosingSummary(
                total_sold_quantity=result.total_sold_quantity,
                total_revenue=result.total_revenue,
                winning_bids=tuple(winners),
            )
            self.status = AuctionStatus.CLOSED
            return self._summary

    def get_closing_summary(self) -> ClosingSummary:
        with self._lock:
            if self.status != AuctionStatus.CLOSED or self._summary is None:
                raise BusinessError("must be closed")
            return self._summary

    def view(self, full: bool = False) -> AuctionLotView:
        with self._lock:
            return AuctionLotView(
                id=self.id,
                symbol=self.symbol,
                min_price=self.min_price,
                quantity=self.quantity,
                status=self.status,
                owner_id=self.owner_id if full else None,
                bids=tuple(self._bids) if full else None,
            )
