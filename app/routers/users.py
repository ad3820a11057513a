# =============================================================================
# app/routers/users.py - Wallet User Endpoints
# =============================================================================
# Creates/refreshes users on wallet connect and manages investment history.
# Wallet addresses are case-insensitive on every endpoint.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Path

from app.dependencies import UserStoreDep
from app.exceptions import OperationFailedError, SonicInvestException
from core.models.user import (
    MessageResponse,
    UserDetailResponse,
    UserRequest,
    UserResponse,
    UserSummary,
)
from core.models.investment import UserInvestmentRequest
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserResponse)
async def save_user(request: UserRequest, store: UserStoreDep):
    """
    Create or update a user.

    Called by the web client after the wallet connects. The first call for a
    wallet creates the user; later calls refresh lastSeen and chainId.
    """
    try:
        user = UserService.save_user(store, request)
    except SonicInvestException:
        raise
    except Exception as e:
        logger.error(f"Error saving user data: {e}")
        raise OperationFailedError("Error saving user data", e)

    return UserResponse(user=UserSummary.from_row(user))


@router.post("/investment", response_model=MessageResponse)
async def add_user_investment(request: UserInvestmentRequest, store: UserStoreDep):
    """
    Append an investment to a user's history.

    The user must already exist; unknown wallets get 404 and nothing is created.
    """
    try:
        UserService.add_investment(store, request.wallet_address, request.investment)
    except SonicInvestException:
        raise
    except Exception as e:
        logger.error(f"Error updating investment history: {e}")
        raise OperationFailedError("Error updating investment history", e)

    return MessageResponse(message="Investment history updated")


@router.get("/{wallet_address}", response_model=UserDetailResponse)
async def get_user(
    wallet_address: Annotated[str, Path(description="Wallet address (any case)")],
    store: UserStoreDep,
):
    """
    Get a user and its investment history.
    """
    try:
        user = UserService.get_user(store, wallet_address)
    except SonicInvestException:
        raise
    except Exception as e:
        logger.error(f"Error fetching user data: {e}")
        raise OperationFailedError("Error fetching user data", e)

    return UserDetailResponse(user=user)
