# =============================================================================
# core/services/user_service.py - Account Business Logic
# =============================================================================
# Handles registration, credential checks and profile lookups.
# Returned dicts still hold the password hash; routes must shape them through
# UserResponse, which has no password field.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.auth.passwords import hash_password, verify_password
from app.exceptions import UserNotFoundError, ValidationError
from core.validation import validate_login, validate_registration
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = {"field": "credentials", "message": "Invalid credentials"}
DUPLICATE_ERRORS = {
    "username": {"field": "username", "message": "Username already exists"},
    "email": {"field": "email", "message": "Email already exists"},
}


class UserService:
    """Service for user account operations."""

    @staticmethod
    def _duplicate_errors(fields: dict[str, Any]) -> list[dict[str, str]]:
        errors = []
        if SupabaseClient.fetch_user_by_username(fields["username"]):
            errors.append(DUPLICATE_ERRORS["username"])
        if SupabaseClient.fetch_user_by_email(fields["email"]):
            errors.append(DUPLICATE_ERRORS["email"])
        return errors

    @staticmethod
    def register(data: dict[str, Any]) -> dict[str, Any]:
        """
        Register a new account.

        A concurrent registration can still take the name between the
        duplicate check and the insert; the store's unique constraint then
        turns into the same 400.

        Args:
            data: Raw request fields (username, email, password, profile_picture)

        Returns:
            Created user dict

        Raises:
            ValidationError: If a field is invalid or username/email is taken
        """
        fields = validate_registration(data)

        errors = UserService._duplicate_errors(fields)
        if errors:
            raise ValidationError(errors)

        try:
            user = SupabaseClient.insert_user({
                "username": fields["username"],
                "email": fields["email"],
                "password": hash_password(fields["password"]),
                "profile_picture": fields["profile_picture"],
                "created_at": datetime.now(timezone.utc).isoformat(),
            })
        except SupabaseClientError as e:
            if e.code != "DUPLICATE_USER":
                raise
            logger.info(f"Lost registration race for {fields['username']}")
            errors = UserService._duplicate_errors(fields)
            if not errors:
                field = "email" if "email" in e.message else "username"
                errors = [DUPLICATE_ERRORS[field]]
            raise ValidationError(errors)

        logger.info(f"Registered user: {user.get('id')} ({fields['username']})")
        return user

    @staticmethod
    def authenticate(data: dict[str, Any]) -> dict[str, Any]:
        """
        Check an email/password pair.

        Unknown email and wrong password fail identically.

        Raises:
            ValidationError: If credentials are missing or don't match
        """
        credentials = validate_login(data)

        user = SupabaseClient.fetch_user_by_email(credentials["email"])
        if not user or not verify_password(credentials["password"], user.get("password", "")):
            logger.warning(f"Failed login for {credentials['email']}")
            raise ValidationError([INVALID_CREDENTIALS])

        return user

    @staticmethod
    def get_user(user_id: str) -> dict[str, Any]:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If the account doesn't exist
        """
        user = SupabaseClient.fetch_user(str(user_id))
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
