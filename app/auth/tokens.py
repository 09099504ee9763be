# =============================================================================
# app/auth/tokens.py - Access Token Issuing and Verification
# =============================================================================
# Wraps python-jose behind a small contract:
#   verify(token) -> subject id   (or raises InvalidTokenError)
#   issue(subject) -> token
#
# The secret and algorithm are passed in at construction so nothing here reads
# global configuration.
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Raised when a token is expired, malformed, badly signed or has no subject."""


class TokenVerifier:
    """
    Issues and verifies HMAC-signed JWT access tokens.

    Example:
        verifier = TokenVerifier(secret="...", algorithm="HS256")
        token = verifier.issue("550e8400-...")
        verifier.verify(token)  # "550e8400-..."
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, subject: str, expires_delta: timedelta | None = None) -> str:
        """Create a signed token whose ``sub`` claim is ``subject``."""
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))
        claims = {"sub": str(subject), "iat": now, "exp": expire}
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return its subject.

        Raises:
            InvalidTokenError: On any verification failure
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise InvalidTokenError("Token has expired")
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise InvalidTokenError(str(e))

        subject = payload.get("sub")
        if not subject:
            logger.warning("JWT token missing 'sub' claim")
            raise InvalidTokenError("Token has no subject")
        return str(subject)
