# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles wallet users and their investment history.
# Separates HTTP concerns from database/business logic.
#
# Every wallet address is normalized to lowercase before it reaches the
# store, so "0xABC" and "0xabc" always resolve to the same user.
# =============================================================================

import logging
from typing import Any

from app.exceptions import MissingFieldsError, UserNotFoundError
from core.models.investment import InvestmentRecord
from core.models.user import UserDetail, UserRequest
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_wallet_address, utc_now

logger = logging.getLogger(__name__)


def _require_wallet(wallet_address: str | None) -> str:
    if not wallet_address or not wallet_address.strip():
        raise MissingFieldsError("Wallet address is required", ["walletAddress"])
    return normalize_wallet_address(wallet_address)


def _record_row(record: InvestmentRecord) -> dict[str, Any]:
    return {
        "amount": record.amount,
        "risk_level": record.risk_level.value,
        "token_price": record.token_price,
        "transaction_hash": record.transaction_hash,
        "timestamp": record.timestamp,
    }


class UserService:
    """
    Service for wallet user operations.

    The store is passed in so routes can inject it (and tests can fake it).
    """

    @staticmethod
    def save_user(
        store: type[SupabaseClient],
        request: UserRequest,
    ) -> dict[str, Any]:
        """
        Create a user or refresh an existing one.

        first_seen is set once on creation; last_seen takes the supplied
        timestamp or now; chain_id is replaced (cleared when absent).

        Raises:
            MissingFieldsError: If walletAddress is missing
        """
        wallet = _require_wallet(request.wallet_address)
        last_seen = request.last_seen or utc_now()
        chain_id = str(request.chain_id) if request.chain_id is not None else None

        user = store.upsert_user(wallet, last_seen=last_seen, chain_id=chain_id)
        logger.info(f"Saved user: {wallet}")
        return user

    @staticmethod
    def add_investment(
        store: type[SupabaseClient],
        wallet_address: str | None,
        record: InvestmentRecord | None,
        create_missing: bool = False,
    ) -> dict[str, Any]:
        """
        Append an investment to a user's history and refresh last_seen.

        Args:
            store: User store
            wallet_address: Investor wallet (any case)
            record: Investment to append
            create_missing: Create the user first when it doesn't exist

        Returns:
            Inserted investment row

        Raises:
            MissingFieldsError: If wallet or investment is missing
            UserNotFoundError: If the wallet is unknown and create_missing is False
        """
        if not wallet_address or record is None:
            raise MissingFieldsError(
                "Wallet address and investment details are required",
                ["walletAddress", "investment"],
            )
        wallet = normalize_wallet_address(wallet_address)
        now = utc_now()

        user = store.update_last_seen(wallet, last_seen=now)
        if user is None:
            if not create_missing:
                raise UserNotFoundError(wallet)
            store.upsert_user(wallet, last_seen=now)
            logger.info(f"Created user on first investment: {wallet}")

        row = store.insert_investment(wallet, _record_row(record))
        logger.info(f"Investment recorded for user: {wallet}")
        return row

    @staticmethod
    def get_user(
        store: type[SupabaseClient],
        wallet_address: str | None,
    ) -> UserDetail:
        """
        Get a user with investment history.

        Raises:
            MissingFieldsError: If walletAddress is empty
            UserNotFoundError: If the wallet is unknown
        """
        wallet = _require_wallet(wallet_address)

        user = store.fetch_user(wallet)
        if not user:
            raise UserNotFoundError(wallet)

        investments = store.fetch_investments(wallet)
        return UserDetail(
            wallet_address=user["wallet_address"],
            first_seen=user["first_seen"],
            last_seen=user["last_seen"],
            chain_id=user.get("chain_id"),
            investments=[InvestmentRecord(**row) for row in investments],
        )

