"""Deterministic tests for the allocation engine.

Verifies:
1. Price priority with submission-order tie break
2. Partial fill of the lowest winning bid
3. Conservation — sold quantity never exceeds the lot
4. Pay-as-bid revenue
5. Edge cases (no bids, under-subscribed lot, malformed input)
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from auctionhouse.allocation import BidRequest, allocate, rank


class TestRank:
    """Test bid ordering."""

    def test_price_descending(self):
        bids = [BidRequest(0, 3.0, 1), BidRequest(1, 3.5, 1), BidRequest(2, 4.0, 1)]
        assert [b.sequence for b in rank(bids)] == [2, 1, 0]

    def test_ties_go_to_earlier_submission(self):
        bids = [BidRequest(0, 2.0, 1), BidRequest(1, 5.0, 1), BidRequest(2, 5.0, 1)]
        assert [b.sequence for b in rank(bids)] == [1, 2, 0]

    def test_input_order_is_irrelevant(self):
        bids = [BidRequest(2, 5.0, 1), BidRequest(1, 5.0, 1), BidRequest(0, 5.0, 1)]
        assert [b.sequence for b in rank(bids)] == [0, 1, 2]


class TestAllocate:
    """Test the allocation walk."""

    def test_oversubscribed_lot(self):
        """Highest bids fill first, the next one is partially filled, the rest lose."""
        bids = [BidRequest(0, 3.00, 3), BidRequest(1, 3.50, 5), BidRequest(2, 4.00, 7)]
        result = allocate(10, bids)

        fills = {f.sequence: f.win_quantity for f in result.fills}
        assert fills == {2: 7, 1: 3, 0: 0}
        assert result.total_sold_quantity == 10
        assert result.total_revenue == pytest.approx(38.5)

    def test_undersubscribed_lot(self):
        result = allocate(5, [BidRequest(0, 3.00, 2)])
        assert result.fills[0].win_quantity == 2
        assert result.total_sold_quantity == 2
        assert result.total_revenue == pytest.approx(6.0)

    def test_no_bids(self):
        result = allocate(5, [])
        assert result.fills == []
        assert result.total_sold_quantity == 0
        assert result.total_revenue == 0.0

    def test_exact_fill_leaves_later_bids_empty(self):
        bids = [BidRequest(0, 10.0, 4), BidRequest(1, 9.0, 6), BidRequest(2, 8.0, 1)]
        result = allocate(10, bids)
        assert [f.win_quantity for f in result.fills] == [4, 6, 0]

    def test_conservation(self):
        """Sold quantity equals the sum of fills and never exceeds the lot."""
        bids = [BidRequest(i, 1.0 + (i % 4) * 0.25, 1 + i % 3) for i in range(20)]
        for lot_quantity in (1, 7, 25, 100):
            result = allocate(lot_quantity, bids)
            assert result.total_sold_quantity == sum(f.win_quantity for f in result.fills)
            assert result.total_sold_quantity <= lot_quantity
            total_demand = sum(b.quantity for b in bids)
            assert result.total_sold_quantity == min(lot_quantity, total_demand)

    def test_revenue_is_pay_as_bid(self):
        """Each winner pays its own price, not a clearing price."""
        bids = [BidRequest(0, 5.0, 2), BidRequest(1, 2.0, 2)]
        result = allocate(4, bids)
        assert result.total_revenue == pytest.approx(5.0 * 2 + 2.0 * 2)
        assert result.total_revenue == pytest.approx(
            sum(f.price * f.win_quantity for f in result.fills)
        )

    def test_zero_lot_quantity_raises(self):
        with pytest.raises(ValueError):
            allocate(0, [])

    def test_non_positive_bid_quantity_raises(self):
        with pytest.raises(ValueError):
            allocate(5, [BidRequest(0, 1.0, 0)])

    def test_non_finite_price_raises(self):
        with pytest.raises(ValueError):
            allocate(5, [BidRequest(0, float("inf"), 1)])
