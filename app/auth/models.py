# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated subject extracted from a verified access token.

    This is the minimal identity available from the token itself,
    without querying the database. ``id`` is kept as the canonical
    string form so ownership checks are plain string comparisons.
    """

    model_config = ConfigDict(frozen=True)

    id: str
