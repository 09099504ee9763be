# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides the bearer-token gate for private endpoints.
#
# The gate is an instance of BearerAuth built around a TokenVerifier, which in
# turn is built once from settings at import time. Tests and alternative apps
# can build their own gate around a different verifier.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.post("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.auth.tokens import InvalidTokenError, TokenVerifier
from app.config import settings
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

NO_CREDENTIAL_MESSAGE = "No token, authorization denied"
INVALID_CREDENTIAL_MESSAGE = "Token is not valid"

# Returns None (instead of raising) when the header is absent, isn't a
# Bearer scheme, or has nothing after "Bearer".
security = HTTPBearer(auto_error=False)


class BearerAuth:
    """
    Dependency that turns an ``Authorization: Bearer <token>`` header into
    an AuthUser, or rejects the request with a 401.
    """

    def __init__(self, verifier: TokenVerifier):
        self.verifier = verifier

    async def __call__(
        self,
        credentials: HTTPAuthorizationCredentials | None = Depends(security),
    ) -> AuthUser:
        if credentials is None or not credentials.credentials.strip():
            raise AuthenticationError(NO_CREDENTIAL_MESSAGE)

        try:
            subject = self.verifier.verify(credentials.credentials.strip())
        except InvalidTokenError:
            raise AuthenticationError(INVALID_CREDENTIAL_MESSAGE)

        logger.debug(f"Authenticated user: {subject}")
        return AuthUser(id=subject)


token_verifier = TokenVerifier(
    secret=settings.JWT_SECRET,
    algorithm=settings.JWT_ALGORITHM,
    expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
)

get_current_user = BearerAuth(token_verifier)
