# =============================================================================
# app/routers/investments.py - Investment Endpoint
# =============================================================================
# Accepts an investment and dispatches the on-chain transfer.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import PriceFeedDep, UserStoreDep, WalletServiceDep
from app.exceptions import OperationFailedError, SonicInvestException
from core.models.investment import InvestmentRequest, InvestResponse
from core.services.investment_service import InvestmentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/invest", response_model=InvestResponse)
async def invest(
    request: InvestmentRequest,
    feed: PriceFeedDep,
    wallet: WalletServiceDep,
    store: UserStoreDep,
):
    """
    Invest an amount at a risk level.

    Sends the equivalent amount of the native token to the fixed recipient
    address. When walletAddress is given the investment is also appended
    to that user's history (created on first investment).
    """
    try:
        return await InvestmentService.invest(request, feed, wallet, store)
    except SonicInvestException:
        raise
    except Exception as e:
        logger.error(f"Error processing investment: {e}")
        raise OperationFailedError("Failed to process investment", e)
