# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .price_service import PriceService
from .user_service import UserService
from .investment_service import InvestmentService

__all__ = [
    "PriceService",
    "UserService",
    "InvestmentService",
]
