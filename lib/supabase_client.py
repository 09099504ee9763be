# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Products (fetch, search, insert, update, delete)
# - Users (lookup by id / email / username, insert)
# - Seller username lookups used to enrich product listings
#
# Every failure is raised as SupabaseClientError so the API layer can map it
# to a single generic 500 response.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   product = SupabaseClient.fetch_product(product_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import contains_pattern, parse_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for ".single()" matching no rows
NO_ROWS_CODE = "PGRST116"
# Postgres code for invalid text representation (e.g. a malformed uuid)
INVALID_TEXT_CODE = "22P02"
# Postgres code for a unique constraint violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries enough context for the server log; never shown to API clients.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def _is_missing_row(error: Exception) -> bool:
    """True when the error means "no such row" rather than a real failure."""
    text = str(error)
    return NO_ROWS_CODE in text or INVALID_TEXT_CODE in text


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        products = SupabaseClient.list_products(search="bike", category="sports")
        names = SupabaseClient.fetch_usernames({p["seller_id"] for p in products})
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership is enforced by the service layer instead.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_product(cls, product_id: str) -> dict[str, Any] | None:
        """
        Fetch a single product by ID.

        Returns:
            Product dict, or None if no row matches (or the ID is malformed)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.PRODUCTS_TABLE)
                .select("*")
                .eq("id", product_id)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if _is_missing_row(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch product: {e}",
                code="FETCH_PRODUCT_FAILED",
                details={"product_id": product_id}
            )

    @classmethod
    def list_products(
        cls,
        search: str | None = None,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List products, optionally filtered.

        Args:
            search: Case-insensitive substring to look for in the title
            category: Exact category to match

        Returns:
            List of product dicts in store order

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        query = client.table(settings.PRODUCTS_TABLE).select("*")
        if search:
            query = query.ilike("title", contains_pattern(search))
        if category:
            query = query.eq("category", category)

        try:
            response = query.execute()
            products = response.data or []
            if search and "*" in search:
                needle = search.lower()
                products = [
                    p for p in products
                    if needle in str(p.get("title") or "").lower()
                ]
            logger.debug(f"Fetched {len(products)} products (search={search!r}, category={category!r})")
            return products

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list products: {e}",
                code="LIST_PRODUCTS_FAILED",
                details={"search": search, "category": category}
            )

    @classmethod
    def insert_product(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new product row.

        Returns:
            Inserted product dict with generated id

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.PRODUCTS_TABLE)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert product: {e}",
                code="INSERT_PRODUCT_FAILED",
                details={"seller_id": data.get("seller_id")}
            )

    @classmethod
    def update_product(
        cls,
        product_id: str,
        fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Apply a partial update to a product.

        Only the keys in ``fields`` are written.

        Returns:
            Updated product dict, or None if the row vanished

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.PRODUCTS_TABLE)
                .update(fields)
                .eq("id", product_id)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update product: {e}",
                code="UPDATE_PRODUCT_FAILED",
                details={"product_id": product_id, "fields": sorted(fields)}
            )

    @classmethod
    def delete_product(cls, product_id: str) -> bool:
        """
        Delete a product.

        Returns:
            True if a row was removed

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.PRODUCTS_TABLE)
                .delete()
                .eq("id", product_id)
                .execute()
            )
            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete product: {e}",
                code="DELETE_PRODUCT_FAILED",
                details={"product_id": product_id}
            )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_usernames(cls, user_ids: set[str] | list[str]) -> dict[str, str]:
        """
        Resolve user IDs to usernames in one query.

        Returns:
            Mapping of user id -> username. Unknown IDs and IDs that aren't
            UUIDs (and so can't be in the users table) are simply absent.

        Raises:
            SupabaseClientError: If query fails
        """
        ids = sorted({parse_uuid(user_id) for user_id in user_ids if user_id} - {None})
        if not ids:
            return {}

        client = cls.get_client()

        try:
            response = (
                client.table(settings.USERS_TABLE)
                .select("id, username")
                .in_("id", ids)
                .execute()
            )
            return {str(row["id"]): row["username"] for row in response.data or []}

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch usernames: {e}",
                code="FETCH_USERNAMES_FAILED",
                details={"user_ids": ids}
            )

    @classmethod
    def _fetch_user_by(cls, column: str, value: str) -> dict[str, Any] | None:
        client = cls.get_client()

        try:
            response = (
                client.table(settings.USERS_TABLE)
                .select("*")
                .eq(column, value)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if _is_missing_row(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                details={column: value}
            )

    @classmethod
    def fetch_user(cls, user_id: str) -> dict[str, Any] | None:
        """Fetch a user by ID, or None if not found."""
        return cls._fetch_user_by("id", user_id)

    @classmethod
    def fetch_user_by_email(cls, email: str) -> dict[str, Any] | None:
        """Fetch a user by (already lowercased) email, or None if not found."""
        return cls._fetch_user_by("email", email)

    @classmethod
    def fetch_user_by_username(cls, username: str) -> dict[str, Any] | None:
        """Fetch a user by username, or None if not found."""
        return cls._fetch_user_by("username", username)

    @classmethod
    def insert_user(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new user row.

        Returns:
            Inserted user dict with generated id

        Raises:
            SupabaseClientError: If insert fails; code DUPLICATE_USER when the
            username or email is already taken
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.USERS_TABLE)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            if UNIQUE_VIOLATION_CODE in str(e):
                raise SupabaseClientError(
                    message=f"User already exists: {e}",
                    code="DUPLICATE_USER",
                    details={"username": data.get("username"), "email": data.get("email")}
                )
            raise SupabaseClientError(
                message=f"Failed to insert user: {e}",
                code="INSERT_USER_FAILED",
                details={"username": data.get("username")}
            )
