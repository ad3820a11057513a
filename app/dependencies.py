# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the external collaborators:
# - the user store (Supabase)
# - the price feed (CoinGecko)
# - the transfer dispatcher (web3)
#
# Tests swap these out with app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from lib.coingecko_client import CoinGeckoClient
from lib.supabase_client import SupabaseClient
from lib.wallet_service import WalletService


def get_user_store() -> type[SupabaseClient]:
    """
    Get the user store.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


@lru_cache
def get_price_feed() -> CoinGeckoClient:
    """Shared CoinGecko client configured from settings."""
    return CoinGeckoClient()


@lru_cache
def get_wallet_service() -> WalletService:
    """Shared transfer dispatcher configured from settings."""
    return WalletService()


# Type aliases for dependency injection
UserStoreDep = Annotated[type[SupabaseClient], Depends(get_user_store)]
PriceFeedDep = Annotated[CoinGeckoClient, Depends(get_price_feed)]
WalletServiceDep = Annotated[WalletService, Depends(get_wallet_service)]
