# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings
from app.dependencies import PriceFeedDep, UserStoreDep
from lib.utils import utc_timestamp

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str
    token_id: str


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    database: str
    price_feed: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        environment=settings.ENVIRONMENT,
        version=__version__,
        token_id=settings.TOKEN_ID,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(store: UserStoreDep, feed: PriceFeedDep):
    """
    Readiness check endpoint.

    Checks the user store and the price provider.
    """
    checks = ChecksResponse(database="unknown", price_feed="unknown")

    try:
        store.ping()
        checks.database = "healthy"
    except Exception as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    try:
        await feed.ping()
        checks.price_feed = "healthy"
    except Exception as e:
        checks.price_feed = f"unhealthy: {str(e)[:50]}"

    all_healthy = checks.database == "healthy" and checks.price_feed == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=utc_timestamp(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=utc_timestamp(),
    )
