# =============================================================================
# core/models/investment.py - Investment Schemas
# =============================================================================
# These models define the API contract for investing:
# - InvestmentRequest: POST /api/invest body
# - InvestmentRecord: One entry of a user's append-only investment history
# - InvestResponse: Result of a dispatched transfer
# - UserInvestmentRequest: POST /api/user/investment body
#
# All bodies use camelCase keys on the wire (walletAddress, riskLevel, ...).
# Required-field checks that must answer 400 with a specific message are
# done in the service layer, so those fields are optional here.
# =============================================================================

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .analysis import RiskLevel


def as_utc(value: datetime | None) -> datetime | None:
    """Read naive datetimes as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InvestmentRequest(CamelModel):
    """
    Schema for requesting an investment.

    Example:
        {"amount": 100, "riskLevel": "low", "walletAddress": "0xabc..."}
    """

    amount: float | None = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Amount to invest in fiat units"
    )
    risk_level: RiskLevel | None = Field(
        default=None,
        description="Requested risk level"
    )
    wallet_address: str | None = Field(
        default=None,
        description="Investor wallet; when set the investment is recorded"
    )


class InvestmentRecord(CamelModel):
    """
    A single investment in a user's history.

    Records are appended once and never edited afterwards.
    """

    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Invested amount in fiat units"
    )
    risk_level: RiskLevel = Field(..., description="Risk level chosen")
    token_price: float | None = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        description="Token price at the time of the investment"
    )
    transaction_hash: str = Field(
        ...,
        min_length=1,
        description="On-chain transaction identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the investment happened"
    )

    @field_validator("timestamp")
    @classmethod
    def timestamp_as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class InvestResponse(CamelModel):
    """Result of POST /api/invest."""

    success: bool = True
    message: str
    transaction_hash: str
    timestamp: str


class UserInvestmentRequest(CamelModel):
    """
    Schema for appending to a user's investment history.

    Example:
        {
            "walletAddress": "0xabc...",
            "investment": {
                "amount": 100,
                "riskLevel": "low",
                "transactionHash": "0x5f...",
                "tokenPrice": 0.48,
                "timestamp": "2025-01-15T10:30:00Z"
            }
        }
    """

    wallet_address: str | None = None
    investment: InvestmentRecord | None = None
