"""
Sealed-bid allocation for a single lot.

Implements uniform-capacity, price-priority allocation with partial fills and
discriminatory (pay-as-bid) revenue.

Key rules:
    Ranking:     price descending, then submission order ascending
    Allocation:  allocated_i = min(quantity_i, remaining)
    Revenue:     sum_i price_i * allocated_i

Where:
    remaining = lot quantity not yet handed out while walking the ranking
"""

import math
from typing import NamedTuple, Sequence


class BidRequest(NamedTuple):
    """A bid as seen by the allocator: position in submission order, price, quantity."""

    sequence: int
    price: float
    quantity: int


class Fill(NamedTuple):
    sequence: int
    price: float
    quantity: int
    win_quantity: int


class Allocation(NamedTuple):
    fills: list[Fill]
    total_sold_quantity: int
    total_revenue: float


def rank(bids: Sequence[BidRequest]) -> list[BidRequest]:
    """Order bids by price descending; earlier submissions win ties."""
    return sorted(bids, key=lambda b: (-b.price, b.sequence))


def allocate(lot_quantity: int, bids: Sequence[BidRequest]) -> Allocation:
    """Allocate `lot_quantity` units across `bids`.

    Args:
        lot_quantity: Total units offered (must be > 0).
        bids: Bids in any order; `sequence` gives their submission order.

    Returns:
        Allocation with one fill per bid in ranked order, the quantity sold
        and the pay-as-bid revenue.

    Raises:
        ValueError: If lot_quantity is not positive or a bid is malformed.
    """
    if lot_quantity <= 0:
        raise ValueError("Lot quantity must be positive")
    for b in bids:
        if b.quantity <= 0:
            raise ValueError(f"Bid {b.sequence} quantity must be positive")
        if not math.isfinite(b.price) or b.price <= 0:
            raise ValueError(f"Bid {b.sequence} price must be a positive finite number")

    remaining = lot_quantity
    fills = []
    for b in rank(bids):
        allocated = min(b.quantity, remaining)
        remaining -= allocated
        fills.append(Fill(b.sequence, b.price, b.quantity, allocated))

    total_revenue = sum((f.price * f.win_quantity for f in fills if f.win_quantity > 0), 0.0)
    return Allocation(
        fills=fills,
        total_sold_quantity=lot_quantity - remaining,
        total_revenue=total_revenue,
    )
