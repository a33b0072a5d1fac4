"""Users router — admin-only user management."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from auctionhouse.database import get_db
from auctionhouse.middleware.auth import require_admin
from auctionhouse.models.user import User
from auctionhouse.schemas.user import CreateUserRequest, UpdateUserRequest, UserResponse
from auctionhouse.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    req: CreateUserRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Create a new user (admin only)."""
    user = user_service.create_user(
        db,
        username=req.username,
        password=req.password,
        first_name=req.first_name,
        last_name=req.last_name,
        organisation=req.organisation,
    )
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return [UserResponse.model_validate(u) for u in user_service.list_users(db)]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return UserResponse.model_validate(user_service.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    req: UpdateUserRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Update a user's name and organisation."""
    user = user_service.update_user(
        db,
        user_id,
        first_name=req.first_name,
        last_name=req.last_name,
        organisation=req.organisation,
    )
    return UserResponse.model_validate(user)


@router.put("/{user_id}/block", status_code=204)
def block_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user_service.block_user(db, user_id)
    return Response(status_code=204)


@router.put("/{user_id}/unblock", status_code=204)
def unblock_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user_service.unblock_user(db, user_id)
    return Response(status_code=204)
