"""Auctions router — lot creation, bidding, closing, and queries."""

from fastapi import APIRouter, Depends, Request

from auctionhouse.domain.auction_lot import AuctionLotView, Bid, ClosingSummary
from auctionhouse.middleware.auth import get_current_user
from auctionhouse.models.user import User
from auctionhouse.schemas.auction import (
    AuctionResponse,
    BidRequest,
    BidResponse,
    ClosingSummaryResponse,
    CreateAuctionRequest,
)
from auctionhouse.services.auction_service import AuctionService

router = APIRouter(prefix="/api/auctions", tags=["auctions"])


def get_auction_service(request: Request) -> AuctionService:
    """FastAPI dependency returning the process-wide auction service."""
    return request.app.state.auction_service


def _bid_to_response(bid: Bid) -> BidResponse:
    return BidResponse(
        id=bid.id,
        auction_lot_id=bid.auction_lot_id,
        bidder_id=bid.bidder_id,
        quantity=bid.quantity,
        price=bid.price,
        state=bid.state.value,
        win_quantity=bid.win_quantity,
    )


def _view_to_response(view: AuctionLotView) -> AuctionResponse:
    return AuctionResponse(
        id=view.id,
        symbol=view.symbol,
        min_price=view.min_price,
        quantity=view.quantity,
        status=view.status.value,
        owner_id=view.owner_id,
        bids=[_bid_to_response(b) for b in view.bids] if view.bids is not None else None,
    )


def _summary_to_response(summary: ClosingSummary) -> ClosingSummaryResponse:
    return ClosingSummaryResponse(
        total_sold_quantity=summary.total_sold_quantity,
        total_revenue=summary.total_revenue,
        winning_bids=[_bid_to_response(b) for b in summary.winning_bids],
    )


@router.post("", response_model=AuctionResponse, status_code=201)
def create_auction(
    req: CreateAuctionRequest,
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    """Open a new auction lot owned by the caller."""
    lot = auctions.create(current_user.username, req.symbol, req.min_price, req.quantity)
    return _view_to_response(lot.view(full=True))


@router.get("", response_model=list[AuctionResponse])
def list_auctions(
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    """List all lots; bids are only included on the caller's own lots."""
    return [_view_to_response(v) for v in auctions.list_all(current_user.id)]


@router.get("/mine", response_model=list[AuctionResponse])
def list_my_auctions(
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    return [_view_to_response(v) for v in auctions.list_owned(current_user.id)]


@router.get("/{lot_id}", response_model=AuctionResponse)
def get_auction(
    lot_id: int,
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    return _view_to_response(auctions.get(lot_id, current_user.id))


@router.post("/{lot_id}/bids", response_model=BidResponse, status_code=201)
def place_bid(
    lot_id: int,
    req: BidRequest,
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    """Place a sealed bid on someone else's open lot."""
    bid = auctions.bid(lot_id, req.quantity, req.price, current_user.username)
    return _bid_to_response(bid)


@router.get("/{lot_id}/bids", response_model=list[BidResponse])
def get_bids(
    lot_id: int,
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    """All bids on a lot (owner only)."""
    return [_bid_to_response(b) for b in auctions.get_all_bids(lot_id, current_user.id)]


@router.post("/{lot_id}/close", response_model=ClosingSummaryResponse)
def close_auction(
    lot_id: int,
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    """Close a lot and allocate it to the highest bids (owner only)."""
    return _summary_to_response(auctions.close(lot_id, current_user.id))


@router.get("/{lot_id}/closing-summary", response_model=ClosingSummaryResponse)
def get_closing_summary(
    lot_id: int,
    current_user: User = Depends(get_current_user),
    auctions: AuctionService = Depends(get_auction_service),
):
    return _summary_to_response(auctions.get_closing_summary(lot_id, current_user.id))
