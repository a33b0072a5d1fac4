"""In-memory registry of auction lots, indexed by id and by owner."""

import itertools
import logging
import threading
from collections import defaultdict
from typing import Optional

from auctionhouse.domain.auction_lot import AuctionLot
from auctionhouse.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class IdGenerator:
    """Issues strictly increasing integer ids, starting at `start`."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)


class AuctionRegistry:
    """Authoritative collection of all lots for the lifetime of the process.

    The registry lock guards only the indices; each lot serializes its own
    state changes.
    """

    def __init__(self, lot_ids: Optional[IdGenerator] = None, bid_ids: Optional[IdGenerator] = None):
        self._lot_ids = lot_ids or IdGenerator()
        self._bid_ids = bid_ids or IdGenerator()
        self._by_id: dict[int, AuctionLot] = {}
        self._by_owner: dict[int, list[int]] = defaultdict(list)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Fresh lot id."""
        return self._lot_ids.next_id()

    def next_bid_id(self) -> int:
        return self._bid_ids.next_id()

    def add(self, lot: AuctionLot) -> None:
        with self._lock:
            if lot.id in self._by_id:
                raise ConflictError(f"auction lot {lot.id} already exists")
            self._by_id[lot.id] = lot
            self._by_owner[lot.owner_id].append(lot.id)
        logger.debug("Registered auction lot %s for owner %s", lot.id, lot.owner_id)

    def get(self, lot_id: int) -> AuctionLot:
        with self._lock:
            lot = self._by_id.get(lot_id)
        if lot is None:
            raise NotFoundError(f"auction lot {lot_id} doesn't exist")
        return lot

    def list_all(self) -> list[AuctionLot]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda lot: lot.id)

    def list_by_owner(self, owner_id: int) -> list[AuctionLot]:
        with self._lock:
            return [self._by_id[i] for i in self._by_owner.get(owner_id, [])]

    def rebuild_owner_index(self) -> None:
        """Recompute the owner index from the id index."""
        with self._lock:
            by_owner: dict[int, list[int]] = defaultdict(list)
            for lot_id in sorted(self._by_id):
                by_owner[self._by_id[lot_id].owner_id].append(lot_id)
            self._by_owner = by_owner

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
