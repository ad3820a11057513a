# =============================================================================
# core/models/analysis.py - Price & Risk Analysis Schemas
# =============================================================================
# These models define the API contract for market data:
# - RiskLevel: The fixed low/medium/high enumeration
# - PriceResponse: Current token quote (GET /api/fetchsonicprice)
# - RiskAnalysis: Moving average, risk tier and suggested allocation
# - AnalysisResponse: Envelope for GET /api/analyze
#
# Note: the analysis body uses camelCase keys (riskLevel, movingAverage, ...)
# while the envelopes keep snake_case token_id, matching what the web client reads.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    """
    Risk tier chosen by the client or produced by the analysis.

    - low: price close to its moving average
    - medium: moderate distance from the average
    - high: price far from the average in either direction
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PriceResponse(BaseModel):
    """
    Current token price.

    Example:
        {
            "success": true,
            "price": 0.4821,
            "currency": "USD",
            "token_id": "sonic-3",
            "timestamp": "2025-01-15T10:30:00+00:00"
        }
    """

    success: bool = True
    price: float = Field(..., gt=0, description="Current price in fiat units")
    currency: str = Field(..., description="Fiat currency code")
    token_id: str = Field(..., description="Price provider token identifier")
    timestamp: str = Field(..., description="ISO 8601 time of the quote")


class RiskAnalysis(BaseModel):
    """
    Output of the price-risk analysis.

    Deterministic for a given price series and parameters.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    risk_level: RiskLevel = Field(..., description="Risk classification")
    recommendation: str = Field(..., description="Human readable advice")
    suggested_investment: float = Field(
        ...,
        gt=0,
        description="Suggested amount in fiat units for the risk tier"
    )
    moving_average: float = Field(..., gt=0, description="Trailing mean price")
    current_price: float = Field(..., gt=0, description="Latest price in the series")


class AnalysisResponse(BaseModel):
    """Envelope for GET /api/analyze."""

    success: bool = True
    token_id: str
    analysis: RiskAnalysis
    timestamp: str
