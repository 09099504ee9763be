# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for account operations:
# - UserRegister: Body of POST /auth/register
# - UserLogin: Body of POST /auth/login
# - UserResponse: Public view of a user (never includes the password hash)
# - AuthResponse: Token + user returned after register/login
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserRegister(BaseModel):
    """
    Schema for registering a new account.

    Example:
        {
            "username": "alice",
            "email": "Alice@Example.com",
            "password": "hunter22",
            "profilePicture": ""
        }
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: Any = Field(default=None, description="Unique display name")
    email: Any = Field(default=None, description="Unique email, stored lowercased")
    password: Any = Field(default=None, description="At least 6 characters")
    profile_picture: Any = Field(default=None, description="Optional avatar URL")


class UserLogin(BaseModel):
    """Schema for logging in with email and password."""
    email: Any = Field(default=None)
    password: Any = Field(default=None)


class UserResponse(BaseModel):
    """Public user profile."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    username: str
    email: str
    profile_picture: str = ""
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Returned by register and login."""
    token: str
    user: UserResponse
