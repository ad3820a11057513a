# =============================================================================
# core/services/price_service.py - Price Quote & Analysis Logic
# =============================================================================
# Combines the price feed with the pure analysis in lib/price_analysis.py.
# =============================================================================

import logging

from app.config import settings
from core.models.analysis import AnalysisResponse, PriceResponse
from lib.coingecko_client import CoinGeckoClient
from lib.price_analysis import analyze_price_series, daily_closes
from lib.utils import utc_timestamp

logger = logging.getLogger(__name__)


class PriceService:
    """
    Service for market data operations on the configured token.
    """

    @staticmethod
    async def get_quote(feed: CoinGeckoClient) -> PriceResponse:
        """
        Fetch the current token price.

        Raises:
            PriceFeedError: If the provider fails
        """
        price = await feed.fetch_price(settings.TOKEN_ID, settings.VS_CURRENCY)

        return PriceResponse(
            price=price,
            currency=settings.currency_label,
            token_id=settings.TOKEN_ID,
            timestamp=utc_timestamp(),
        )

    @staticmethod
    async def get_current_price(feed: CoinGeckoClient) -> float:
        """Current token price as a bare number."""
        return await feed.fetch_price(settings.TOKEN_ID, settings.VS_CURRENCY)

    @staticmethod
    async def analyze(feed: CoinGeckoClient) -> AnalysisResponse:
        """
        Analyze recent price history of the token.

        Fetches PRICE_HISTORY_DAYS of history, reduces it to daily closes
        and runs the moving-average risk analysis.

        Raises:
            PriceFeedError: If the provider fails
            PriceAnalysisError: If the history cannot be analyzed
        """
        points = await feed.fetch_price_history(
            settings.TOKEN_ID,
            settings.VS_CURRENCY,
            days=settings.PRICE_HISTORY_DAYS,
        )
        closes = daily_closes(points)

        analysis = analyze_price_series(
            closes,
            window=settings.MOVING_AVERAGE_WINDOW,
            low_threshold=settings.RISK_LOW_THRESHOLD,
            high_threshold=settings.RISK_HIGH_THRESHOLD,
        )
        logger.info(
            f"Analysis for {settings.TOKEN_ID}: {analysis.risk_level.value} risk, "
            f"ma={analysis.moving_average:.6f}"
        )

        return AnalysisResponse(
            token_id=settings.TOKEN_ID,
            analysis=analysis,
            timestamp=utc_timestamp(),
        )
