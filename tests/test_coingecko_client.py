# =============================================================================
# tests/test_coingecko_client.py - Price Feed Tests
# =============================================================================
# Tests for the CoinGecko wrapper against an httpx.MockTransport, so the
# request shape and the error mapping are checked without network access.
#
# Run with: pytest tests/test_coingecko_client.py -v
# =============================================================================

import asyncio

import httpx
import pytest

from lib.coingecko_client import CoinGeckoClient, PriceFeedError

BASE_URL = "https://api.test.coingecko.local/api/v3"


def make_client(handler, api_key: str = "") -> CoinGeckoClient:
    return CoinGeckoClient(
        base_url=BASE_URL,
        api_key=api_key,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


# =============================================================================
# Current Price
# =============================================================================

class TestFetchPrice:
    """Tests for CoinGeckoClient.fetch_price."""

    def test_parses_price(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"sonic-3": {"usd": 0.4821}})

        price = asyncio.run(make_client(handler).fetch_price("sonic-3", "usd"))

        assert price == 0.4821
        assert seen["path"].endswith("/simple/price")
        assert seen["params"] == {"ids": "sonic-3", "vs_currencies": "usd"}

    def test_sends_api_key_header(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers.get("x-cg-demo-api-key")
            return httpx.Response(200, json={"sonic-3": {"usd": 1.0}})

        asyncio.run(make_client(handler, api_key="demo-key").fetch_price("sonic-3"))

        assert seen["key"] == "demo-key"

    def test_omits_api_key_header_when_unset(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["has_key"] = "x-cg-demo-api-key" in request.headers
            return httpx.Response(200, json={"sonic-3": {"usd": 1.0}})

        asyncio.run(make_client(handler).fetch_price("sonic-3"))

        assert seen["has_key"] is False

    def test_rate_limit_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, text="Too Many Requests")

        with pytest.raises(PriceFeedError) as exc_info:
            asyncio.run(make_client(handler).fetch_price("sonic-3"))

        assert "429" in exc_info.value.message
        assert exc_info.value.details["status"] == 429

    def test_missing_token_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        with pytest.raises(PriceFeedError):
            asyncio.run(make_client(handler).fetch_price("sonic-3"))

    @pytest.mark.parametrize("price", [0, -0.5])
    def test_non_positive_price_raises(self, price):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"sonic-3": {"usd": price}})

        with pytest.raises(PriceFeedError):
            asyncio.run(make_client(handler).fetch_price("sonic-3"))

    def test_network_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PriceFeedError) as exc_info:
            asyncio.run(make_client(handler).fetch_price("sonic-3"))

        assert exc_info.value.code == "PRICE_FEED_ERROR"

    def test_non_json_body_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(PriceFeedError):
            asyncio.run(make_client(handler).fetch_price("sonic-3"))


# =============================================================================
# Price History
# =============================================================================

class TestFetchPriceHistory:
    """Tests for CoinGeckoClient.fetch_price_history."""

    def test_parses_points(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={
                "prices": [[1700000000000, 0.41], [1700086400000, 0.44]],
                "market_caps": [],
                "total_volumes": [],
            })

        points = asyncio.run(
            make_client(handler).fetch_price_history("sonic-3", "usd", days=7)
        )

        assert points == [(1700000000000, 0.41), (1700086400000, 0.44)]
        assert seen["path"].endswith("/coins/sonic-3/market_chart")
        assert seen["params"] == {"vs_currency": "usd", "days": "7"}

    def test_skips_malformed_points(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={
                "prices": [[1700000000000, 0.41], ["bad"], [1700086400000, None]],
            })

        points = asyncio.run(make_client(handler).fetch_price_history("sonic-3"))

        assert points == [(1700000000000, 0.41)]

    def test_empty_history_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"prices": []})

        with pytest.raises(PriceFeedError):
            asyncio.run(make_client(handler).fetch_price_history("sonic-3"))


class TestPing:
    """Tests for CoinGeckoClient.ping."""

    def test_ping(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith("/ping")
            return httpx.Response(200, json={"gecko_says": "(V3) To the Moon!"})

        assert asyncio.run(make_client(handler).ping()) is True
