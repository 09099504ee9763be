# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for SupabaseClient so API tests run without a database
# - A TestClient wired to that stand-in, plus helpers to mint bearer tokens
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import copy
import uuid
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# In-memory store
# =============================================================================

class InMemorySupabase:
    """
    Dict-backed replacement for the SupabaseClient class methods.

    Mirrors the wrapper's contract: lookups return None for missing rows,
    search is a case-insensitive title substring, category is exact.
    ``writes`` records every mutating call so tests can assert that
    rejected requests never touched the store.
    """

    def __init__(self):
        self.products: dict[str, dict] = {}
        self.users: dict[str, dict] = {}
        self.writes: list[tuple[str, str]] = []

    # -- products -------------------------------------------------------------

    def fetch_product(self, product_id):
        product = self.products.get(product_id)
        return copy.deepcopy(product) if product else None

    def list_products(self, search=None, category=None):
        results = []
        for product in self.products.values():
            if search and search.lower() not in product["title"].lower():
                continue
            if category and product["category"] != category:
                continue
            results.append(copy.deepcopy(product))
        return results

    def insert_product(self, data):
        product = {"id": str(uuid.uuid4()), **copy.deepcopy(data)}
        self.products[product["id"]] = product
        self.writes.append(("insert_product", product["id"]))
        return copy.deepcopy(product)

    def update_product(self, product_id, fields):
        self.writes.append(("update_product", product_id))
        if product_id not in self.products:
            return None
        self.products[product_id].update(copy.deepcopy(fields))
        return copy.deepcopy(self.products[product_id])

    def delete_product(self, product_id):
        self.writes.append(("delete_product", product_id))
        return self.products.pop(product_id, None) is not None

    # -- users ----------------------------------------------------------------

    def add_user(self, user_id, username, email=None, password=""):
        self.users[user_id] = {
            "id": user_id,
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
            "profile_picture": "",
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        return self.users[user_id]

    def fetch_usernames(self, user_ids):
        return {
            str(uid): self.users[str(uid)]["username"]
            for uid in user_ids
            if str(uid) in self.users
        }

    def fetch_user(self, user_id):
        user = self.users.get(user_id)
        return copy.deepcopy(user) if user else None

    def fetch_user_by_email(self, email):
        for user in self.users.values():
            if user["email"] == email:
                return copy.deepcopy(user)
        return None

    def fetch_user_by_username(self, username):
        for user in self.users.values():
            if user["username"] == username:
                return copy.deepcopy(user)
        return None

    def insert_user(self, data):
        user = {"id": str(uuid.uuid4()), **copy.deepcopy(data)}
        self.users[user["id"]] = user
        self.writes.append(("insert_user", user["id"]))
        return copy.deepcopy(user)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """In-memory store patched in for both services, seeded with users u1 and u2."""
    fake = InMemorySupabase()
    fake.add_user("u1", "alice")
    fake.add_user("u2", "bob")
    with patch("core.services.product_service.SupabaseClient", fake), \
            patch("core.services.user_service.SupabaseClient", fake):
        yield fake


@pytest.fixture
def client(store):
    """TestClient for the full app, backed by the in-memory store."""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_header():
    """Build an Authorization header for a user id."""
    from app.auth import token_verifier

    def _header(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_verifier.issue(user_id)}"}

    return _header


@pytest.fixture
def sample_product():
    """Valid creation payload."""
    return {
        "title": "Desk",
        "description": "Oak desk",
        "price": 120,
        "category": "furniture",
    }
