# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Sonic Invest API.
# It configures the FastAPI application with middleware, routers, handlers
# and the static web client.
#
# Usage:
#   uvicorn app.main:app --reload --port 3000
# =============================================================================

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from app import __version__
from app.config import settings
from app.exceptions import (
    SonicInvestException,
    sonic_invest_exception_handler,
    validation_exception_handler,
)
from app.routers import health, market, investments, users

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Single-page web client
PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs configuration on startup and shutdown. Outbound clients are opened
    per request, so there is nothing to tear down.
    """
    logger.info(f"Starting Sonic Invest API in {settings.ENVIRONMENT} mode")
    logger.info(f"Quoting {settings.TOKEN_ID} in {settings.currency_label}")
    logger.info(f"Access the app at http://localhost:{settings.API_PORT}")
    if not settings.WALLET_PRIVATE_KEY:
        logger.warning("WALLET_PRIVATE_KEY is not set; investments will fail")

    yield

    logger.info("Shutting down Sonic Invest API")


# Create FastAPI application
app = FastAPI(
    title="Sonic Invest API",
    description="""
## Sonic Token Investment API

Quotes the Sonic token, recommends a risk-tiered investment from recent
price history and sends investments on-chain.

| Endpoint | Purpose |
|----------|---------|
| `GET /api/fetchsonicprice` | Current token price |
| `GET /api/analyze` | Moving average, risk level, suggested investment |
| `POST /api/invest` | Send an investment transfer |
| `POST /api/user` | Create/refresh a wallet user |
| `POST /api/user/investment` | Append to a user's investment history |
| `GET /api/user/{walletAddress}` | User with investment history |
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Market", "description": "Token price and risk analysis"},
        {"name": "Invest", "description": "On-chain investment transfers"},
        {"name": "Users", "description": "Wallet users and investment history"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SonicInvestException)
async def handle_sonic_invest_exception(request: Request, exc: SonicInvestException):
    """Handle custom API exceptions."""
    return await sonic_invest_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and parameters."""
    logger.warning(f"Invalid request to {request.url.path}: {exc}")
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
            "error": str(exc) or type(exc).__name__,
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(market.router, prefix="/api", tags=["Market"])
app.include_router(investments.router, prefix="/api", tags=["Invest"])
app.include_router(users.router, prefix="/api/user", tags=["Users"])
app.include_router(health.router, prefix="/api", tags=["Health"])


# =============================================================================
# Web Client
# =============================================================================

app.mount("/static", StaticFiles(directory=PUBLIC_DIR), name="static")


@app.get("/", include_in_schema=False)
async def root():
    """Serve the single-page web client."""
    return FileResponse(PUBLIC_DIR / "index.html")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
