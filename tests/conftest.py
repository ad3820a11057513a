# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-ins for the user store, price feed and wallet service
# - A TestClient wired to those stand-ins via dependency_overrides
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_price_feed, get_user_store, get_wallet_service
from app.main import app
from lib.coingecko_client import PriceFeedError
from lib.supabase_client import SupabaseClientError
from lib.wallet_service import WalletServiceError

DAY_MS = 86_400_000
START_MS = 1_700_000_000_000
FAKE_TX_HASH = "0x" + "ab" * 32


# =============================================================================
# Fakes
# =============================================================================

class FakeUserStore:
    """In-memory replacement for lib.supabase_client.SupabaseClient."""

    def __init__(self):
        self.users: dict[str, dict[str, Any]] = {}
        self.investments: list[dict[str, Any]] = []
        self.fail_writes = False

    def _check_writable(self):
        if self.fail_writes:
            raise SupabaseClientError("database unavailable", code="TEST_FAILURE")

    def upsert_user(self, wallet_address, last_seen, chain_id=None):
        self._check_writable()
        user = self.users.get(wallet_address)
        if user is None:
            user = {
                "wallet_address": wallet_address,
                "first_seen": datetime.now(timezone.utc),
            }
            self.users[wallet_address] = user
        user["last_seen"] = last_seen
        user["chain_id"] = chain_id
        return dict(user)

    def fetch_user(self, wallet_address):
        user = self.users.get(wallet_address)
        return dict(user) if user else None

    def update_last_seen(self, wallet_address, last_seen):
        self._check_writable()
        user = self.users.get(wallet_address)
        if user is None:
            return None
        user["last_seen"] = last_seen
        return dict(user)

    def insert_investment(self, wallet_address, record):
        self._check_writable()
        row = {"id": len(self.investments) + 1, "wallet_address": wallet_address, **record}
        self.investments.append(row)
        return row

    def fetch_investments(self, wallet_address):
        return [
            {k: v for k, v in row.items() if k not in ("id", "wallet_address")}
            for row in self.investments
            if row["wallet_address"] == wallet_address
        ]

    def ping(self):
        return True


class StubPriceFeed:
    """Price feed returning fixed data and counting calls."""

    def __init__(self, price: float = 0.5, history: list[float] | None = None):
        self.price = price
        self.history = history if history is not None else [0.5] * 7
        self.error: Exception | None = None
        self.calls = 0

    async def fetch_price(self, token_id, vs_currency="usd"):
        self.calls += 1
        if self.error:
            raise self.error
        return self.price

    async def fetch_price_history(self, token_id, vs_currency="usd", days=7):
        self.calls += 1
        if self.error:
            raise self.error
        return [(START_MS + i * DAY_MS, p) for i, p in enumerate(self.history)]

    async def ping(self):
        return True


class StubWalletService:
    """Wallet service that records transfers instead of sending them."""

    def __init__(self):
        self.sent: list[dict[str, Any]] = []
        self.error: Exception | None = None

    async def send_transaction(self, amount, token_price, recipient, risk_level):
        if self.error:
            raise self.error
        self.sent.append({
            "amount": amount,
            "token_price": token_price,
            "recipient": recipient,
            "risk_level": risk_level,
        })
        return FAKE_TX_HASH


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def user_store():
    return FakeUserStore()


@pytest.fixture
def price_feed():
    return StubPriceFeed()


@pytest.fixture
def wallet_service():
    return StubWalletService()


@pytest.fixture
def client(user_store, price_feed, wallet_service):
    """TestClient with every external collaborator replaced."""
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_price_feed] = lambda: price_feed
    app.dependency_overrides[get_wallet_service] = lambda: wallet_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def price_feed_error():
    return PriceFeedError("Price provider returned HTTP 429")


@pytest.fixture
def wallet_error():
    return WalletServiceError("No sending wallet configured")
