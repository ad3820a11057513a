# =============================================================================
# app/routers/market.py - Price & Analysis Endpoints
# =============================================================================
# Quotes the configured token and serves the moving-average risk analysis.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import PriceFeedDep
from app.exceptions import OperationFailedError
from core.models.analysis import AnalysisResponse, PriceResponse
from core.services.price_service import PriceService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/fetchsonicprice", response_model=PriceResponse)
async def fetch_sonic_price(feed: PriceFeedDep):
    """
    Get the current token price.

    Returns the price in the configured fiat currency with the token id.
    """
    try:
        return await PriceService.get_quote(feed)
    except Exception as e:
        logger.error(f"Error fetching Sonic price: {e}")
        raise OperationFailedError("Failed to fetch Sonic token price", e)


@router.get("/analyze", response_model=AnalysisResponse)
async def analyze_token(feed: PriceFeedDep):
    """
    Get an investment recommendation.

    Computes the moving average of recent daily closes, classifies risk by
    the current price's distance from it and suggests an amount to invest.
    """
    try:
        return await PriceService.analyze(feed)
    except Exception as e:
        logger.error(f"Error analyzing token: {e}")
        raise OperationFailedError("Failed to analyze token", e)
