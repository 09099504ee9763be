# =============================================================================
# tests/test_validation.py - Field Validation Tests
# =============================================================================
# Unit tests for core.validation:
# - Product create: required fields, numeric price, all errors reported together
# - Product update: only present fields checked, merge semantics
# - Registration and login payloads
# =============================================================================

import pytest

from app.exceptions import ValidationError
from core.validation import (
    validate_login,
    validate_product_create,
    validate_product_update,
    validate_registration,
)


def _fields(exc_info) -> list[str]:
    return [error["field"] for error in exc_info.value.errors]


# =============================================================================
# Product Create
# =============================================================================

class TestValidateProductCreate:
    """Tests for validate_product_create."""

    def test_valid_payload_is_trimmed(self):
        fields = validate_product_create({
            "title": "  Desk ",
            "description": "Oak desk\n",
            "price": 120,
            "category": " furniture",
        })

        assert fields == {
            "title": "Desk",
            "description": "Oak desk",
            "price": 120,
            "category": "furniture",
            "images": [],
        }

    def test_images_are_kept_in_order(self):
        fields = validate_product_create({
            "title": "Desk",
            "description": "Oak desk",
            "price": 1,
            "category": "furniture",
            "images": ["b.jpg", "a.jpg"],
        })

        assert fields["images"] == ["b.jpg", "a.jpg"]

    def test_reports_every_missing_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_create({})

        assert _fields(exc_info) == ["title", "description", "category", "price"]
        assert exc_info.value.status_code == 400

    def test_blank_strings_count_as_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_create({
                "title": "   ",
                "description": "Oak desk",
                "price": 5,
                "category": "",
            })

        assert _fields(exc_info) == ["title", "category"]
        assert exc_info.value.errors[0]["message"] == "Title is required"

    @pytest.mark.parametrize("price", ["abc", None, True, [], float("nan")])
    def test_rejects_non_numeric_price(self, price):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_create({
                "title": "Desk",
                "description": "Oak desk",
                "price": price,
                "category": "furniture",
            })

        assert exc_info.value.errors == [
            {"field": "price", "message": "Price must be a number"}
        ]

    def test_accepts_numeric_string_price(self):
        fields = validate_product_create({
            "title": "Desk",
            "description": "Oak desk",
            "price": "19.99",
            "category": "furniture",
        })

        assert fields["price"] == 19.99

    def test_integral_string_price_stays_integer(self):
        fields = validate_product_create({
            "title": "Desk",
            "description": "Oak desk",
            "price": " 250 ",
            "category": "furniture",
        })

        assert fields["price"] == 250
        assert isinstance(fields["price"], int)

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_create({
                "title": "Desk",
                "description": "Oak desk",
                "price": -1,
                "category": "furniture",
            })

        assert exc_info.value.errors[0]["message"] == "Price cannot be negative"

    def test_zero_price_is_valid(self):
        fields = validate_product_create({
            "title": "Free chair",
            "description": "Curbside",
            "price": 0,
            "category": "furniture",
        })

        assert fields["price"] == 0

    def test_rejects_images_that_are_not_a_list_of_strings(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_create({
                "title": "Desk",
                "description": "Oak desk",
                "price": 1,
                "category": "furniture",
                "images": "a.jpg",
            })

        assert _fields(exc_info) == ["images"]


# =============================================================================
# Product Update
# =============================================================================

class TestValidateProductUpdate:
    """Tests for validate_product_update."""

    def test_empty_payload_is_valid_and_changes_nothing(self):
        assert validate_product_update({}) == {}

    def test_only_present_fields_are_returned(self):
        assert validate_product_update({"price": 100}) == {"price": 100}

    def test_none_values_are_ignored(self):
        assert validate_product_update({"title": None, "price": None}) == {}

    def test_empty_text_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_update({"title": "", "category": "  "})

        assert exc_info.value.errors == [
            {"field": "title", "message": "Title cannot be empty"},
            {"field": "category", "message": "Category cannot be empty"},
        ]

    def test_bad_price_and_bad_text_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_product_update({"description": "", "price": "cheap"})

        assert _fields(exc_info) == ["description", "price"]

    def test_empty_image_list_does_not_overwrite(self):
        assert validate_product_update({"images": []}) == {}

    def test_zero_price_is_applied(self):
        assert validate_product_update({"price": 0}) == {"price": 0}


# =============================================================================
# Accounts
# =============================================================================

class TestValidateRegistration:
    """Tests for validate_registration."""

    def test_email_is_trimmed_and_lowercased(self):
        fields = validate_registration({
            "username": " alice ",
            "email": "  Alice@Example.COM ",
            "password": "secret1",
        })

        assert fields == {
            "username": "alice",
            "email": "alice@example.com",
            "password": "secret1",
            "profile_picture": "",
        }

    def test_short_password_and_bad_email_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration({
                "username": "alice",
                "email": "not-an-email",
                "password": "12345",
            })

        assert _fields(exc_info) == ["email", "password"]

    def test_missing_everything(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration({})

        assert _fields(exc_info) == ["username", "email", "password"]


class TestValidateLogin:
    """Tests for validate_login."""

    def test_requires_email_and_password(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_login({"email": " "})

        assert _fields(exc_info) == ["email", "password"]

    def test_lowercases_email(self):
        assert validate_login({"email": "Bob@Example.com", "password": "x"}) == {
            "email": "bob@example.com",
            "password": "x",
        }
