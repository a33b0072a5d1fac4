"""Auction request/response schemas."""

from typing import Optional

from pydantic import BaseModel


class CreateAuctionRequest(BaseModel):
    symbol: str
    min_price: float
    quantity: int


class BidRequest(BaseModel):
    quantity: int
    price: float


class BidResponse(BaseModel):
    id: int
    auction_lot_id: int
    bidder_id: int
    quantity: int
    price: float
    state: str  # PENDING | WIN | LOSE
    win_quantity: int

    class Config:
        from_attributes = True


class AuctionResponse(BaseModel):
    id: int
    symbol: str
    min_price: float
    quantity: int
    status: str  # OPENED | CLOSED
    # Owner view only
    owner_id: Optional[int] = None
    bids: Optional[list[BidResponse]] = None

    class Config:
        from_attributes = True


class ClosingSummaryResponse(BaseModel):
    total_sold_quantity: int
    total_revenue: float
    winning_bids: list[BidResponse]

    class Config:
        from_attributes = True
