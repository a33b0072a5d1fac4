"""Auth router — login and current user info."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from auctionhouse.config import settings
from auctionhouse.database import get_db
from auctionhouse.middleware.auth import create_access_token, get_current_user
from auctionhouse.middleware.rate_limit import limiter
from auctionhouse.models.user import User
from auctionhouse.schemas.auth import LoginRequest, TokenResponse
from auctionhouse.schemas.user import UserResponse
from auctionhouse.services import user_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user = user_service.authenticate(db, req.username, req.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    if user.blocked:
        raise HTTPException(status_code=403, detail="User is blocked")

    token = create_access_token({"sub": str(user.id), "admin": bool(user.is_admin)})
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info."""
    return UserResponse.model_validate(current_user)
