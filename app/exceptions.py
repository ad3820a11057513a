# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API as {"success": false, "message": ..., ...}
# so the web client can branch on `success` alone.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.utils import ApplicationError


class SonicInvestException(Exception):
    """
    Base exception for the Sonic Invest API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "SONIC_INVEST_ERROR",
        status_code: int = 500,
        error: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.error = error
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingFieldsError(SonicInvestException):
    """Raised when a request lacks fields the operation needs."""

    def __init__(self, message: str, fields: list[str]):
        super().__init__(
            message=message,
            code="MISSING_FIELDS",
            status_code=400,
            details={"fields": fields}
        )


class UserNotFoundError(SonicInvestException):
    """Raised when a wallet address has no user record."""

    def __init__(self, wallet_address: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"wallet_address": wallet_address}
        )


# =============================================================================
# Operation Exceptions
# =============================================================================

def describe_error(exc: BaseException) -> str:
    """Underlying error text for the `error` field of a 500 response."""
    if isinstance(exc, ApplicationError):
        return exc.message
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or "Unknown error occurred"


class OperationFailedError(SonicInvestException):
    """
    Raised when an endpoint's work fails for any unexpected reason.

    Carries a generic, endpoint-specific message plus the underlying error text.
    """

    def __init__(self, message: str, cause: BaseException):
        super().__init__(
            message=message,
            code="OPERATION_FAILED",
            status_code=500,
            error=describe_error(cause),
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def sonic_invest_exception_handler(
    request: Request,
    exc: SonicInvestException
) -> JSONResponse:
    """Convert SonicInvestException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed bodies are client errors, so they answer 400 like missing fields.
    """
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Invalid request body",
            "code": "VALIDATION_ERROR",
            "error": str(exc),
        }
    )
