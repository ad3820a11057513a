# =============================================================================
# core/services/investment_service.py - Investment Business Logic
# =============================================================================
# Runs one investment end to end:
#   validate -> current price -> on-chain transfer -> record in user history
#
# Recording is best effort: once the transfer went out, a store failure is
# logged and the investment is still reported as successful.
# =============================================================================

import logging

from app.config import settings
from app.exceptions import MissingFieldsError
from core.models.investment import InvestmentRecord, InvestmentRequest, InvestResponse
from core.services.price_service import PriceService
from core.services.user_service import UserService
from lib.coingecko_client import CoinGeckoClient
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now
from lib.wallet_service import WalletService

logger = logging.getLogger(__name__)


def _format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


class InvestmentService:
    """
    Service for processing investments.
    """

    @staticmethod
    async def invest(
        request: InvestmentRequest,
        feed: CoinGeckoClient,
        wallet: WalletService,
        store: type[SupabaseClient],
    ) -> InvestResponse:
        """
        Process an investment.

        Args:
            request: Amount, risk level and optional investor wallet
            feed: Price feed for the current token price
            wallet: Transfer dispatcher
            store: User store for the investment history

        Returns:
            InvestResponse with the transaction hash

        Raises:
            MissingFieldsError: If amount or riskLevel is missing (checked
                before any external call)
            PriceFeedError: If the current price cannot be fetched
            WalletServiceError: If the transfer fails
        """
        if not request.amount or request.risk_level is None:
            raise MissingFieldsError(
                "Missing required fields: amount and riskLevel",
                ["amount", "riskLevel"],
            )

        amount = request.amount
        risk_level = request.risk_level

        token_price = await PriceService.get_current_price(feed)

        tx_hash = await wallet.send_transaction(
            amount=amount,
            token_price=token_price,
            recipient=settings.RECIPIENT_WALLET,
            risk_level=risk_level.value,
        )

        if request.wallet_address and request.wallet_address.strip():
            record = InvestmentRecord(
                amount=amount,
                risk_level=risk_level,
                token_price=token_price,
                transaction_hash=tx_hash,
                timestamp=utc_now(),
            )
            try:
                UserService.add_investment(
                    store,
                    request.wallet_address,
                    record,
                    create_missing=True,
                )
            except Exception as e:
                # Transfer already happened; report success regardless
                logger.error(f"Error recording investment in database: {e}")

        return InvestResponse(
            message=f"Successfully invested ${_format_amount(amount)} at {risk_level.value} risk level",
            transaction_hash=tx_hash,
            timestamp=utc_now().isoformat(),
        )
