# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure a handler can hit is one of these exceptions. The handlers at
# the bottom of this module turn them into exactly one JSON response:
#   - ValidationError      -> 400 {"errors": [...]}
#   - everything else      -> status_code {"message": "..."}
# Store failures never reach the client with internal detail.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


class MarketplaceException(Exception):
    """
    Base exception for the marketplace API.

    All custom exceptions inherit from this class. ``code`` is machine
    readable and only used in server-side logs; clients get ``message``.
    """

    def __init__(
        self,
        message: str,
        code: str = "MARKETPLACE_ERROR",
        status_code: int = 500,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"message": self.message}


# =============================================================================
# Validation
# =============================================================================

class ValidationError(MarketplaceException):
    """
    Raised when caller-supplied fields fail their constraints.

    Carries every offending field, not just the first one found.
    """

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_ERROR",
            status_code=400,
        )
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        return {"errors": self.errors}


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(MarketplaceException):
    """Raised when the bearer credential is missing or fails verification."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="AUTHENTICATION_FAILED",
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(MarketplaceException):
    """Raised when a valid subject tries to mutate a record it does not own."""

    def __init__(self, message: str = "User not authorized"):
        super().__init__(
            message=message,
            code="NOT_AUTHORIZED",
            status_code=403,
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================

class ProductNotFoundError(MarketplaceException):
    """
    Raised when a product ID doesn't resolve to a record.

    Malformed IDs raise this too, so callers can't tell the two apart.
    """

    def __init__(self, product_id: str):
        super().__init__(
            message="Product not found",
            code="PRODUCT_NOT_FOUND",
            status_code=404,
        )
        self.product_id = product_id


class UserNotFoundError(MarketplaceException):
    """Raised when a user ID doesn't resolve to an account."""

    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
        )
        self.user_id = user_id


# =============================================================================
# Exception Handlers
# =============================================================================

async def marketplace_exception_handler(
    request: Request,
    exc: MarketplaceException
) -> JSONResponse:
    """Convert MarketplaceException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"[{exc.code}] {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"[{exc.code}] {request.method} {request.url.path} -> {exc.status_code}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    Malformed bodies (bad JSON, wrong types) get the same 400 envelope as
    field-level failures raised by the services.
    """
    errors = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            # loc holds a character offset here, not a field name
            errors.append({"field": "body", "message": error.get("msg", "Invalid JSON")})
            continue
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return JSONResponse(status_code=400, content={"errors": errors})


async def store_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """
    Handle persistence failures.

    Full detail goes to the server log; the client gets a generic 500.
    """
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": SERVER_ERROR_MESSAGE},
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle anything nobody anticipated."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": SERVER_ERROR_MESSAGE},
    )
