# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable building blocks:
# - price_analysis.py: Moving average / risk tier / suggested allocation
# - coingecko_client.py: Async price feed (current price and history)
# - wallet_service.py: Signs and broadcasts investment transfers
# - supabase_client.py: Typed Supabase wrapper for the user store
# - utils.py: Shared utilities (error base class, wallet normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.utils import (
    ApplicationError,
    normalize_wallet_address,
    utc_now,
    utc_timestamp,
)
from lib.price_analysis import (
    PriceAnalysisError,
    analyze_price_series,
    daily_closes,
)
from lib.coingecko_client import CoinGeckoClient, PriceFeedError
from lib.wallet_service import WalletService, WalletServiceError
from lib.supabase_client import SupabaseClient, SupabaseClientError

__all__ = [
    # Utils
    "ApplicationError",
    "normalize_wallet_address",
    "utc_now",
    "utc_timestamp",
    # Analysis
    "PriceAnalysisError",
    "analyze_price_series",
    "daily_closes",
    # Price feed
    "CoinGeckoClient",
    "PriceFeedError",
    # Wallet
    "WalletService",
    "WalletServiceError",
    # Store
    "SupabaseClient",
    "SupabaseClientError",
]
