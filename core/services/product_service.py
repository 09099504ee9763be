# =============================================================================
# core/services/product_service.py - Product Business Logic
# =============================================================================
# Handles product CRUD, search and ownership enforcement.
# Separates HTTP concerns from database/business logic.
#
# Every mutating operation follows the same order:
#   1. validate the payload          -> ValidationError (400)
#   2. load the product              -> ProductNotFoundError (404)
#   3. compare owner with the caller -> AuthorizationError (403)
#   4. write
# Nothing is written unless all checks pass.
#
# The load-check-write sequence is not atomic: two concurrent requests on the
# same product can interleave between steps 2 and 4. There is no version
# column or lock to prevent that.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import AuthorizationError, ProductNotFoundError
from core.validation import validate_product_create, validate_product_update
from lib.supabase_client import SupabaseClient
from lib.utils import parse_uuid

logger = logging.getLogger(__name__)


class ProductService:
    """
    Service for marketplace product operations.

    Provides a clean interface between API routes and database.
    Reads are public; create/update/delete take the authenticated
    user's ID and enforce ownership.
    """

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _load(product_id: str) -> tuple[str, dict[str, Any]]:
        """
        Resolve a product ID to its canonical form and stored record.

        Raises:
            ProductNotFoundError: If the ID is malformed or matches nothing
        """
        canonical_id = parse_uuid(product_id)
        if canonical_id is None:
            raise ProductNotFoundError(str(product_id))

        product = SupabaseClient.fetch_product(canonical_id)
        if not product:
            raise ProductNotFoundError(canonical_id)

        return canonical_id, product

    @staticmethod
    def _load_owned(product_id: str, user_id: str) -> tuple[str, dict[str, Any]]:
        """
        Load a product and check that ``user_id`` owns it.

        Existence is checked first, so a non-owner asking for a missing
        product gets a 404, not a 403.

        Raises:
            ProductNotFoundError: If the product doesn't exist
            AuthorizationError: If the product belongs to someone else
        """
        canonical_id, product = ProductService._load(product_id)

        if str(product.get("seller_id")) != str(user_id):
            logger.warning(f"User {user_id} tried to modify product {canonical_id} owned by {product.get('seller_id')}")
            raise AuthorizationError()

        return canonical_id, product

    @staticmethod
    def _with_seller_usernames(products: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Attach ``seller_username`` to each product (None if the seller is gone)."""
        usernames = SupabaseClient.fetch_usernames(
            {str(p["seller_id"]) for p in products if p.get("seller_id")}
        )
        return [
            {**p, "seller_username": usernames.get(str(p.get("seller_id")))}
            for p in products
        ]

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def create_product(user_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Create a product owned by ``user_id``.

        Args:
            user_id: Authenticated user; becomes the seller
            data: Raw request fields (title, description, price, category, images)

        Returns:
            Created product dict

        Raises:
            ValidationError: If any field is invalid (nothing is written)
            SupabaseClientError: If the insert fails
        """
        fields = validate_product_create(data)

        record = {
            **fields,
            "seller_id": str(user_id),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }

        product = SupabaseClient.insert_product(record)
        logger.info(f"Created product: {product.get('id')} for seller: {user_id}")
        return product

    @staticmethod
    def list_products(
        search: str | None = None,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List products, optionally filtered.

        Args:
            search: Case-insensitive substring matched anywhere in the title
            category: Exact category match

        Both filters are ANDed. No particular order is guaranteed.

        Returns:
            Product dicts with ``seller_username`` attached
        """
        products = SupabaseClient.list_products(
            search=search or None,
            category=category or None,
        )
        return ProductService._with_seller_usernames(products)

    @staticmethod
    def get_product(product_id: str) -> dict[str, Any]:
        """
        Get a product by ID with its seller's username.

        Raises:
            ProductNotFoundError: If the ID is malformed or matches nothing
        """
        _, product = ProductService._load(product_id)
        return ProductService._with_seller_usernames([product])[0]

    @staticmethod
    def update_product(
        product_id: str,
        user_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Merge the present, non-empty fields of ``data`` into a product.

        Args:
            product_id: Product to update
            user_id: Authenticated user; must be the seller
            data: Raw request fields, any subset of the product fields

        Returns:
            Updated product dict with ``seller_username`` attached

        Raises:
            ValidationError: If a present field is invalid
            ProductNotFoundError: If the product doesn't exist
            AuthorizationError: If ``user_id`` isn't the seller
        """
        fields = validate_product_update(data)
        canonical_id, product = ProductService._load_owned(product_id, user_id)

        if fields:
            updated = SupabaseClient.update_product(canonical_id, fields)
            if updated is None:
                # Deleted between the ownership check and the write
                raise ProductNotFoundError(canonical_id)
            logger.info(f"Updated product: {canonical_id} fields: {sorted(fields)}")
            product = updated

        return ProductService._with_seller_usernames([product])[0]

    @staticmethod
    def delete_product(product_id: str, user_id: str) -> None:
        """
        Delete a product.

        Raises:
            ProductNotFoundError: If the product doesn't exist
            AuthorizationError: If ``user_id`` isn't the seller
        """
        canonical_id, _ = ProductService._load_owned(product_id, user_id)

        SupabaseClient.delete_product(canonical_id)
        logger.info(f"Deleted product: {canonical_id} by seller: {user_id}")
