# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# A user is identified by its (lowercase) wallet address and carries
# first/last seen timestamps plus an ordered investment history.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from .investment import CamelModel, InvestmentRecord, as_utc


class UserRequest(CamelModel):
    """
    Schema for creating or refreshing a user on wallet connect.

    Example:
        {"walletAddress": "0xABC...", "lastSeen": "2025-01-15T10:30:00Z", "chainId": "0xdede"}
    """

    wallet_address: str | None = None
    last_seen: datetime | None = None
    chain_id: str | int | None = None

    @field_validator("last_seen")
    @classmethod
    def last_seen_as_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class UserSummary(CamelModel):
    """Basic user fields returned after an upsert."""

    wallet_address: str
    first_seen: datetime
    last_seen: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "UserSummary":
        """Create from a `users` table row."""
        return cls(
            wallet_address=row["wallet_address"],
            first_seen=row["first_seen"],
            last_seen=row["last_seen"],
        )


class UserDetail(UserSummary):
    """User with chain and investment history."""

    chain_id: str | None = None
    investments: list[InvestmentRecord] = Field(default_factory=list)


class UserResponse(CamelModel):
    """Envelope for POST /api/user."""

    success: bool = True
    user: UserSummary


class UserDetailResponse(CamelModel):
    """Envelope for GET /api/user/{walletAddress}."""

    success: bool = True
    user: UserDetail


class MessageResponse(CamelModel):
    """Plain success envelope."""

    success: bool = True
    message: str
