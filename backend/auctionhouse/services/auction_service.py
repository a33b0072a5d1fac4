"""Auction service — creating lots, bidding, closing, and owner-aware queries."""

import logging
from typing import Optional, Union

from auctionhouse.domain.auction_lot import AuctionLot, AuctionLotView, Bid, ClosingSummary
from auctionhouse.domain.registry import AuctionRegistry
from auctionhouse.errors import BusinessError, NotFoundError, UnauthorizedError
from auctionhouse.services.authorization import Denied, check_owner, enforce
from auctionhouse.services.user_service import UserDirectory, UserRef

logger = logging.getLogger(__name__)

NOT_OWNER = "not the owner"
NOT_OWNER_OF_LOT = "user is not the owner of auction lot."


class AuctionService:
    """Public operations on auction lots.

    Holds no state of its own beyond the registry and the user directory.
    User lookups always happen before a lot lock is taken.
    """

    def __init__(self, registry: AuctionRegistry, users: UserDirectory):
        self.registry = registry
        self.users = users

    def _check_active(self, user: Optional[UserRef], who: Union[str, int]) -> UserRef:
        if user is None:
            logger.warning("Rejected request from unknown user %s", who)
            raise NotFoundError(f"user {who} doesn't exist")
        if user.blocked:
            logger.warning("Rejected request from blocked user %s", who)
            raise UnauthorizedError(f"user {who} is blocked")
        return user

    def _resolve_user(self, username: str, role: str) -> UserRef:
        if username is None or not username.strip():
            raise BusinessError(f"{role} name cannot be null")
        return self._check_active(self.users.get_by_username(username), username)

    def _resolve_requester(self, requester_id: int) -> UserRef:
        return self._check_active(self.users.get_by_id(requester_id), requester_id)

    def _require_owner(self, lot: AuctionLot, requester: UserRef, reason: str) -> None:
        decision = check_owner(lot, requester.id, reason)
        if isinstance(decision, Denied):
            logger.warning("User %s denied on auction lot %s: %s", requester.username, lot.id, decision.reason)
        enforce(decision)

    def create(self, owner_username: str, symbol: str, min_price: float, quantity: int) -> AuctionLot:
        """Open a new lot owned by `owner_username`."""
        owner = self._resolve_user(owner_username, "owner")
        try:
            lot = AuctionLot(
                id=self.registry.next_id(),
                owner_id=owner.id,
                symbol=symbol,
                quantity=quantity,
                min_price=min_price,
            )
        except BusinessError as exc:
            logger.debug("Auction lot by %s rejected: %s", owner.username, exc)
            raise
        self.registry.add(lot)
        logger.info(
            "Auction lot %s opened by %s: %s x %s at min %s",
            lot.id, owner.username, lot.quantity, lot.symbol, lot.min_price,
        )
        return lot

    def bid(self, lot_id: int, quantity: int, price: float, bidder_username: str) -> Bid:
        bidder = self._resolve_user(bidder_username, "bidder")
        lot = self.registry.get(lot_id)
        try:
            bid = lot.place_bid(self.registry.next_bid_id(), bidder.id, quantity, price)
        except BusinessError as exc:
            logger.debug("Bid on lot %s by %s rejected: %s", lot_id, bidder.username, exc)
            raise
        logger.info("Bid %s on lot %s by %s: %s @ %s", bid.id, lot_id, bidder.username, quantity, price)
        return bid

    def close(self, lot_id: int, requester_id: int) -> ClosingSummary:
        """Close a lot (owner only) and return its allocation outcome."""
        requester = self._resolve_requester(requester_id)
        lot = self.registry.get(lot_id)
        self._require_owner(lot, requester, NOT_OWNER)
        try:
            summary = lot.close()
        except BusinessError as exc:
            logger.debug("Close of lot %s rejected: %s", lot_id, exc)
            raise
        logger.info(
            "Auction lot %s closed: sold %s of %s, revenue %s, %d winning bid(s)",
            lot_id, summary.total_sold_quantity, lot.quantity,
            summary.total_revenue, len(summary.winning_bids),
        )
        return summary

    def get(self, lot_id: int, requester_id: int) -> AuctionLotView:
        lot = self.registry.get(lot_id)
        return lot.view(full=lot.owner_id == requester_id)

    def get_all_bids(self, lot_id: int, requester_id: int) -> list[Bid]:
        requester = self._resolve_requester(requester_id)
        lot = self.registry.get(lot_id)
        self._require_owner(lot, requester, NOT_OWNER_OF_LOT)
        return lot.bids

    def get_closing_summary(self, lot_id: int, requester_id: int) -> ClosingSummary:
        requester = self._resolve_requester(requester_id)
        lot = self.registry.get(lot_id)
        self._require_owner(lot, requester, NOT_OWNER_OF_LOT)
        return lot.get_closing_summary()

    def list_all(self, requester_id: int) -> list[AuctionLotView]:
        return [lot.view(full=lot.owner_id == requester_id) for lot in self.registry.list_all()]

    def list_owned(self, requester_id: int) -> list[AuctionLotView]:
        return [lot.view(full=True) for lot in self.registry.list_by_owner(requester_id)]
