# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication for private endpoints.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.delete("/products/{product_id}")
#   def delete(product_id: str, user: AuthUser = Depends(get_current_user)):
#       ...
# =============================================================================

from app.auth.dependencies import BearerAuth, get_current_user, token_verifier
from app.auth.models import AuthUser
from app.auth.tokens import InvalidTokenError, TokenVerifier

__all__ = [
    "AuthUser",
    "BearerAuth",
    "InvalidTokenError",
    "TokenVerifier",
    "get_current_user",
    "token_verifier",
]
