# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.TOKEN_ID)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Required - user records and investment history live here

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Price Feed (CoinGecko)
    # -------------------------------------------------------------------------

    COINGECKO_API_URL: str = Field(
        default="https://api.coingecko.com/api/v3",
        description="Base URL of the CoinGecko REST API"
    )

    COINGECKO_API_KEY: str | None = Field(
        default=None,
        description="Optional CoinGecko demo API key"
    )

    TOKEN_ID: str = Field(
        default="sonic-3",
        description="CoinGecko identifier of the quoted token"
    )

    VS_CURRENCY: str = Field(
        default="usd",
        description="Fiat currency prices are quoted in"
    )

    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout for outbound HTTP calls"
    )

    # -------------------------------------------------------------------------
    # Risk Analysis
    # -------------------------------------------------------------------------

    PRICE_HISTORY_DAYS: int = Field(
        default=7,
        ge=1,
        le=365,
        description="Days of price history used for the analysis"
    )

    MOVING_AVERAGE_WINDOW: int = Field(
        default=7,
        ge=1,
        le=365,
        description="Trailing window (in daily closes) for the moving average"
    )

    RISK_LOW_THRESHOLD: float = Field(
        default=0.02,
        ge=0.0,
        description="Max relative distance from the average still rated low risk"
    )

    RISK_HIGH_THRESHOLD: float = Field(
        default=0.05,
        ge=0.0,
        description="Distance from the average above which risk is rated high"
    )

    # -------------------------------------------------------------------------
    # Sonic Chain / Transfers
    # -------------------------------------------------------------------------

    SONIC_RPC_URL: str = Field(
        default="https://rpc.blaze.soniclabs.com",
        description="JSON-RPC endpoint used to broadcast transfers"
    )

    SONIC_CHAIN_ID: int = Field(
        default=57054,
        ge=1,
        description="Chain ID used when signing transfers"
    )

    SONIC_EXPLORER_URL: str = Field(
        default="https://explorer.blaze.soniclabs.com",
        description="Block explorer base URL (shown by the web client)"
    )

    RECIPIENT_WALLET: str = Field(
        default="0x486BEa6B90243d2Ff3EE2723a47605C3361c3d95",
        description="Address every investment is transferred to"
    )

    WALLET_PRIVATE_KEY: str | None = Field(
        default=None,
        description="Private key of the sending account (hex)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins in production (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    @model_validator(mode="after")
    def check_risk_thresholds(self) -> "Settings":
        """Low band must sit strictly inside the high band."""
        if self.RISK_LOW_THRESHOLD >= self.RISK_HIGH_THRESHOLD:
            raise ValueError(
                "RISK_LOW_THRESHOLD must be smaller than RISK_HIGH_THRESHOLD"
            )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def currency_label(self) -> str:
        return self.VS_CURRENCY.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
