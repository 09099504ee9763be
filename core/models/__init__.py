# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for the API contract:
# - product.py: Product create/update/response schemas
# - user.py: Account register/login/response schemas
# =============================================================================

# -----------------------------------------------------------------------------
# Product Models
# -----------------------------------------------------------------------------
from .product import (
    ProductCreate,
    ProductDeleted,
    ProductResponse,
    ProductUpdate,
)

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    AuthResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)

__all__ = [
    # Product
    "ProductCreate",
    "ProductDeleted",
    "ProductResponse",
    "ProductUpdate",
    # User
    "AuthResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
