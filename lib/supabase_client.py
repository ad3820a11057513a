# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the user store.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Upserting users keyed by lowercase wallet address
# - Refreshing a user's last-seen timestamp
# - Appending to and reading a user's investment history
#
# Tables (see sql/schema.sql):
#   users(wallet_address PK, first_seen, last_seen, chain_id)
#   investments(id identity PK, wallet_address FK, amount, risk_level,
#               token_price, transaction_hash, timestamp)
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   user = SupabaseClient.fetch_user("0xabc...")
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from supabase import create_client, Client

from app.config import settings

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
INVESTMENTS_TABLE = "investments"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for user store operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Wallet addresses passed in are expected to be normalized already
    (see lib.utils.normalize_wallet_address).

    Example:
        user = SupabaseClient.upsert_user("0xabc...", last_seen=utc_now())
        SupabaseClient.insert_investment("0xabc...", {"amount": 100, ...})
        history = SupabaseClient.fetch_investments("0xabc...")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @staticmethod
    def _iso(value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def upsert_user(
        cls,
        wallet_address: str,
        last_seen: datetime,
        chain_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a user or refresh an existing one.

        first_seen is not part of the payload, so the column default fills it
        on insert and an existing value is left untouched on conflict.

        Returns:
            The stored user row

        Raises:
            SupabaseClientError: If the upsert fails
        """
        client = cls.get_client()
        data = {
            "wallet_address": wallet_address,
            "last_seen": cls._iso(last_seen),
            "chain_id": chain_id,
        }

        try:
            response = (
                client.table(USERS_TABLE)
                .upsert(data, on_conflict="wallet_address")
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert user: {e}",
                code="UPSERT_USER_FAILED",
                suggestion="Check that the users table exists with a unique wallet_address",
                details={"wallet_address": wallet_address}
            )

        if not response.data:
            raise SupabaseClientError(
                message="Upsert returned no data",
                code="UPSERT_USER_FAILED",
                details={"wallet_address": wallet_address}
            )

        logger.debug(f"Upserted user {wallet_address}")
        return response.data[0]

    @classmethod
    def fetch_user(cls, wallet_address: str) -> dict[str, Any] | None:
        """
        Fetch a user by wallet address.

        Returns:
            User row, or None if not found
        """
        client = cls.get_client()

        try:
            response = (
                client.table(USERS_TABLE)
                .select("wallet_address, first_seen, last_seen, chain_id")
                .eq("wallet_address", wallet_address)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                details={"wallet_address": wallet_address}
            )

        return response.data[0] if response.data else None

    @classmethod
    def update_last_seen(
        cls,
        wallet_address: str,
        last_seen: datetime,
    ) -> dict[str, Any] | None:
        """
        Set last_seen on an existing user. Never creates a user.

        Returns:
            Updated user row, or None if the wallet is unknown
        """
        client = cls.get_client()

        try:
            response = (
                client.table(USERS_TABLE)
                .update({"last_seen": cls._iso(last_seen)})
                .eq("wallet_address", wallet_address)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update user: {e}",
                code="UPDATE_USER_FAILED",
                details={"wallet_address": wallet_address}
            )

        return response.data[0] if response.data else None

    # -------------------------------------------------------------------------
    # Investments
    # -------------------------------------------------------------------------

    @classmethod
    def insert_investment(
        cls,
        wallet_address: str,
        record: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Append one investment to a user's history.

        Args:
            wallet_address: Owner of the investment (must exist)
            record: amount, risk_level, token_price, transaction_hash, timestamp

        Returns:
            Inserted investment row
        """
        client = cls.get_client()
        data = {"wallet_address": wallet_address, **record}
        if isinstance(data.get("timestamp"), datetime):
            data["timestamp"] = cls._iso(data["timestamp"])

        try:
            response = (
                client.table(INVESTMENTS_TABLE)
                .insert(data)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert investment: {e}",
                code="INSERT_INVESTMENT_FAILED",
                suggestion="Check that the user exists and the investments table is accessible",
                details={"wallet_address": wallet_address}
            )

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_INVESTMENT_FAILED",
                details={"wallet_address": wallet_address}
            )

        return response.data[0]

    @classmethod
    def fetch_investments(cls, wallet_address: str) -> list[dict[str, Any]]:
        """
        Fetch a user's investment history in insertion order.
        """
        client = cls.get_client()

        try:
            response = (
                client.table(INVESTMENTS_TABLE)
                .select("amount, risk_level, token_price, transaction_hash, timestamp")
                .eq("wallet_address", wallet_address)
                .order("id")
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch investments: {e}",
                code="FETCH_INVESTMENTS_FAILED",
                details={"wallet_address": wallet_address}
            )

        return response.data or []

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls) -> bool:
        """Run a trivial query to check connectivity."""
        client = cls.get_client()
        client.table(USERS_TABLE).select("wallet_address").limit(1).execute()
        return True
