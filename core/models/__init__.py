# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - analysis.py: Price quotes, risk levels and risk analysis
# - investment.py: Investment requests and history records
# - user.py: Wallet user schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .analysis import (
    AnalysisResponse,
    PriceResponse,
    RiskAnalysis,
    RiskLevel,
)

from .investment import (
    CamelModel,
    InvestmentRecord,
    InvestmentRequest,
    InvestResponse,
    UserInvestmentRequest,
)

from .user import (
    MessageResponse,
    UserDetail,
    UserDetailResponse,
    UserRequest,
    UserResponse,
    UserSummary,
)

__all__ = [
    # Analysis
    "AnalysisResponse",
    "PriceResponse",
    "RiskAnalysis",
    "RiskLevel",
    # Investment
    "CamelModel",
    "InvestmentRecord",
    "InvestmentRequest",
    "InvestResponse",
    "UserInvestmentRequest",
    # User
    "MessageResponse",
    "UserDetail",
    "UserDetailResponse",
    "UserRequest",
    "UserResponse",
    "UserSummary",
]
