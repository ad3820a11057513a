# =============================================================================
# lib/coingecko_client.py - CoinGecko Price Feed
# =============================================================================
# Async wrapper around the two CoinGecko endpoints the service needs:
# - /simple/price            -> current price of one token
# - /coins/{id}/market_chart -> recent price history
#
# Every call opens a short-lived httpx.AsyncClient with the configured timeout.
# Failures of any kind surface as PriceFeedError with the provider's response
# attached to the details for debugging.
#
# Usage:
#   from lib.coingecko_client import CoinGeckoClient
#   feed = CoinGeckoClient()
#   price = await feed.fetch_price("sonic-3")
# =============================================================================

from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class PriceFeedError(ApplicationError):
    """Raised when the price provider cannot deliver a usable answer."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="PRICE_FEED_ERROR", **kwargs)


class CoinGeckoClient:
    """
    Price quotes and history from the CoinGecko REST API.

    Example:
        feed = CoinGeckoClient()
        price = await feed.fetch_price("sonic-3", "usd")
        points = await feed.fetch_price_history("sonic-3", "usd", days=7)
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.COINGECKO_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.COINGECKO_API_KEY
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                resp = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Network error calling CoinGecko {path}: {e}")
            raise PriceFeedError(
                f"Failed to reach price provider: {e}",
                suggestion="Check network access to COINGECKO_API_URL",
                details={"url": url},
            )

        if resp.status_code != 200:
            body = resp.text[:500] if resp.text else "No response data"
            logger.error(f"CoinGecko {path} error: status={resp.status_code} body={body}")
            raise PriceFeedError(
                f"Price provider returned HTTP {resp.status_code}",
                suggestion="Retry later; status 429 means the rate limit was hit",
                details={"url": url, "status": resp.status_code, "body": body},
            )

        try:
            return resp.json()
        except ValueError:
            raise PriceFeedError(
                "Price provider returned a non-JSON body",
                details={"url": url, "body": resp.text[:500]},
            )

    # -------------------------------------------------------------------------
    # Current Price
    # -------------------------------------------------------------------------

    async def fetch_price(self, token_id: str, vs_currency: str = "usd") -> float:
        """
        Fetch the current price of a token.

        Returns:
            Positive price in `vs_currency`

        Raises:
            PriceFeedError: On transport errors, non-200 responses, or a
                payload without a positive price for the token
        """
        data = await self._get_json(
            "/simple/price",
            {"ids": token_id, "vs_currencies": vs_currency},
        )
        logger.debug(f"CoinGecko simple/price response: {data}")

        try:
            price = float(data[token_id][vs_currency])
        except (KeyError, TypeError, ValueError):
            raise PriceFeedError(
                f"No {vs_currency} price for token '{token_id}' in provider response",
                suggestion="Check that TOKEN_ID is a valid CoinGecko coin id",
                details={"response": data},
            )

        if not math.isfinite(price) or price <= 0:
            raise PriceFeedError(
                f"Provider returned a non-positive price for '{token_id}': {price}",
                details={"response": data},
            )
        return price

    # -------------------------------------------------------------------------
    # Price History
    # -------------------------------------------------------------------------

    async def fetch_price_history(
        self,
        token_id: str,
        vs_currency: str = "usd",
        days: int = 7,
    ) -> list[tuple[int, float]]:
        """
        Fetch recent price history.

        Returns:
            List of (timestamp_ms, price) pairs, oldest first

        Raises:
            PriceFeedError: On transport errors or when no prices come back
        """
        data = await self._get_json(
            f"/coins/{token_id}/market_chart",
            {"vs_currency": vs_currency, "days": str(days)},
        )

        raw = data.get("prices") if isinstance(data, dict) else None
        if not raw:
            raise PriceFeedError(
                f"No price history for token '{token_id}'",
                suggestion="Check TOKEN_ID and PRICE_HISTORY_DAYS",
                details={"days": days},
            )

        points: list[tuple[int, float]] = []
        for item in raw:
            try:
                ts, price = item[0], item[1]
                points.append((int(ts), float(price)))
            except (IndexError, TypeError, ValueError):
                logger.warning(f"Skipping malformed price point: {item!r}")

        if not points:
            raise PriceFeedError(
                f"Price history for '{token_id}' contained no usable points",
                details={"days": days},
            )

        logger.debug(f"Fetched {len(points)} price points for {token_id} ({days}d)")
        return points

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    async def ping(self) -> bool:
        """Return True when the provider answers its ping endpoint."""
        data = await self._get_json("/ping", {})
        return isinstance(data, dict)
