"""Auction House — FastAPI Application Entry Point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from auctionhouse.config import settings
from auctionhouse.database import Base, SessionLocal, engine
from auctionhouse.domain.registry import AuctionRegistry
from auctionhouse.errors import AuctionHouseError
from auctionhouse.middleware.rate_limit import limiter
from auctionhouse.routers import auctions, auth, users
from auctionhouse.services import user_service
from auctionhouse.services.auction_service import AuctionService

logger = logging.getLogger(__name__)

# Create all tables on startup
Base.metadata.create_all(bind=engine)

# ── CORS origins from env ──────────────────────────────────────────────────
_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app = FastAPI(
    title="Auction House",
    description="Sealed-bid single-lot auctions.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# One registry per process; lots live only in memory
app.state.auction_service = AuctionService(
    registry=AuctionRegistry(),
    users=user_service.SqlUserDirectory(SessionLocal),
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuctionHouseError)
async def auction_house_error_handler(request: Request, exc: AuctionHouseError):
    """Translate domain failures into problem responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": exc.status_code, "title": exc.title, "detail": exc.message},
    )


# Routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(auctions.router)


@app.on_event("startup")
def on_startup():
    """Configure logging and make sure the admin account exists."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )
    db = SessionLocal()
    try:
        admin = user_service.ensure_admin(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
        logger.info("Admin account ready: %s", admin.username)
    finally:
        db.close()


@app.get("/")
def root():
    return {
        "name": "Auction House API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "ok", "auction_lots": len(app.state.auction_service.registry)}
