# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account registration, login and the current profile.
# Register and login return a signed access token for use as
# "Authorization: Bearer <token>".
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user, token_verifier
from app.auth.models import AuthUser
from core.models.user import AuthResponse, UserLogin, UserRegister, UserResponse
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(user: dict) -> AuthResponse:
    return AuthResponse(
        token=token_verifier.issue(str(user["id"])),
        user=UserResponse(**user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: UserRegister | None = None) -> AuthResponse:
    """
    Register a new account.

    Returns:
        AuthResponse: Access token and the new user's profile

    Raises:
        400: If a field is invalid or the username/email is taken
    """
    data = request.model_dump(exclude_unset=True) if request else {}
    user = UserService.register(data)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(request: UserLogin | None = None) -> AuthResponse:
    """
    Log in with email and password.

    Raises:
        400: If the credentials are missing or don't match an account
    """
    data = request.model_dump(exclude_unset=True) if request else {}
    user = UserService.authenticate(data)
    logger.info(f"User logged in: {user['id']}")
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the token's user no longer exists
    """
    return UserResponse(**UserService.get_user(user.id))
