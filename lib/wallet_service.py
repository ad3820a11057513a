# =============================================================================
# lib/wallet_service.py - On-chain Transfer Dispatcher
# =============================================================================
# Sends the native-token transfer behind every investment.
#
# The fiat amount is converted to token units using the current token price,
# then a plain value transfer is signed locally with the service account key
# and broadcast over JSON-RPC with web3.py.
#
# Usage:
#   from lib.wallet_service import WalletService
#   wallet = WalletService()
#   tx_hash = await wallet.send_transaction(
#       amount=100, token_price=0.48, recipient="0x486B...", risk_level="low"
#   )
# =============================================================================

from __future__ import annotations

import logging
import math
from decimal import Decimal, ROUND_DOWN

from web3 import AsyncWeb3, Web3

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Gas limit of a plain value transfer
TRANSFER_GAS = 21_000
WEI_PER_TOKEN = Decimal(10) ** 18


class WalletServiceError(ApplicationError):
    """Raised when a transfer cannot be built, signed or broadcast."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="WALLET_SERVICE_ERROR", **kwargs)


def fiat_to_wei(amount: float, token_price: float) -> int:
    """
    Convert a fiat amount into wei of the native token.

    Rounds down so the service never sends more than requested.

    Example:
        fiat_to_wei(100, 0.5)  # 200 tokens -> 200 * 10**18
    """
    if not math.isfinite(amount) or amount <= 0:
        raise WalletServiceError(f"Amount must be positive, got {amount}")
    if not math.isfinite(token_price) or token_price <= 0:
        raise WalletServiceError(f"Token price must be positive, got {token_price}")

    tokens = Decimal(str(amount)) / Decimal(str(token_price))
    wei = int((tokens * WEI_PER_TOKEN).to_integral_value(rounding=ROUND_DOWN))
    if wei <= 0:
        raise WalletServiceError(
            f"Amount {amount} at price {token_price} is below one wei",
            suggestion="Invest a larger amount",
        )
    return wei


class WalletService:
    """
    Signs and broadcasts investment transfers from the service account.
    """

    def __init__(
        self,
        rpc_url: str | None = None,
        private_key: str | None = None,
        chain_id: int | None = None,
        web3: AsyncWeb3 | None = None,
    ):
        self.rpc_url = rpc_url or settings.SONIC_RPC_URL
        self.private_key = private_key if private_key is not None else settings.WALLET_PRIVATE_KEY
        self.chain_id = chain_id or settings.SONIC_CHAIN_ID
        self._web3 = web3

    @property
    def web3(self) -> AsyncWeb3:
        if self._web3 is None:
            self._web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(self.rpc_url))
        return self._web3

    def _sender(self) -> str:
        if not self.private_key:
            raise WalletServiceError(
                "No sending wallet configured",
                suggestion="Set WALLET_PRIVATE_KEY in your .env file",
            )
        try:
            return self.web3.eth.account.from_key(self.private_key).address
        except ValueError as e:
            raise WalletServiceError(
                f"Invalid WALLET_PRIVATE_KEY: {e}",
                suggestion="Use a 32-byte hex private key",
            )

    async def send_transaction(
        self,
        amount: float,
        token_price: float,
        recipient: str,
        risk_level: str,
    ) -> str:
        """
        Transfer `amount` worth of the native token to `recipient`.

        Args:
            amount: Fiat amount to invest
            token_price: Current token price used for conversion
            recipient: Destination address
            risk_level: Risk level of the investment (logged with the transfer)

        Returns:
            Transaction hash as a 0x-prefixed hex string

        Raises:
            WalletServiceError: If the key is missing, inputs are invalid,
                or the node rejects the transaction
        """
        value = fiat_to_wei(amount, token_price)
        sender = self._sender()

        # Mixed-case input is re-checksummed below, so only the hex form is checked
        if not Web3.is_address(recipient.lower()):
            raise WalletServiceError(
                f"Invalid recipient address: {recipient}",
                suggestion="Check RECIPIENT_WALLET",
            )

        try:
            nonce = await self.web3.eth.get_transaction_count(sender, "pending")
            gas_price = await self.web3.eth.gas_price
            tx = {
                "to": Web3.to_checksum_address(recipient),
                "value": value,
                "gas": TRANSFER_GAS,
                "gasPrice": gas_price,
                "nonce": nonce,
                "chainId": self.chain_id,
            }
            signed = self.web3.eth.account.sign_transaction(tx, self.private_key)
            tx_hash = await self.web3.eth.send_raw_transaction(signed.raw_transaction)
        except WalletServiceError:
            raise
        except Exception as e:
            logger.error(f"Transfer of {value} wei to {recipient} failed: {e}")
            raise WalletServiceError(
                f"Failed to send transaction: {e}",
                suggestion="Check SONIC_RPC_URL and the sender balance",
                details={"recipient": recipient, "value_wei": value},
            )

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(
            f"Sent {value} wei (${amount} at {risk_level} risk, price {token_price}) "
            f"to {recipient}: {tx_hash_hex}"
        )
        return tx_hash_hex
