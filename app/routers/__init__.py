# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - market.py: Token price and risk analysis
# - investments.py: Investment dispatch
# - users.py: Wallet users and investment history
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import market
from . import investments
from . import users

__all__ = [
    "health",
    "market",
    "investments",
    "users",
]
