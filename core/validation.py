# =============================================================================
# core/validation.py - Request Field Validation
# =============================================================================
# Explicit validators for product and account payloads.
#
# These run before any store call and never rely on database constraints.
# Each validator walks every field, collects all failures, and raises a single
# ValidationError listing them; on success it returns the cleaned values that
# the service should write.
#
# Error entries look like: {"field": "price", "message": "Price must be a number"}
# =============================================================================

import math
from typing import Any

from email_validator import EmailNotValidError, validate_email

from app.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6

# Field name -> label used in messages, in the order errors are reported
PRODUCT_TEXT_FIELDS = (
    ("title", "Title"),
    ("description", "Description"),
    ("category", "Category"),
)


def _error(field: str, message: str) -> dict[str, str]:
    return {"field": field, "message": message}


def _parse_price(value: Any) -> int | float | None:
    """
    Interpret a value as a price.

    Accepts ints, floats and numeric strings. Integral strings become ints so
    the value is kept exactly. Booleans, NaN and infinity are not numbers
    here. Returns None when the value isn't numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def _check_price(value: Any, errors: list[dict[str, str]]) -> int | float | None:
    price = _parse_price(value)
    if price is None:
        errors.append(_error("price", "Price must be a number"))
        return None
    if price < 0:
        errors.append(_error("price", "Price cannot be negative"))
        return None
    return price


def _check_images(value: Any, errors: list[dict[str, str]]) -> list[str] | None:
    if not isinstance(value, list) or not all(isinstance(url, str) for url in value):
        errors.append(_error("images", "Images must be a list of URLs"))
        return None
    return [url.strip() for url in value]


# =============================================================================
# Products
# =============================================================================

def validate_product_create(data: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a product creation payload.

    Required: title, description, category (non-empty after trimming) and a
    numeric, non-negative price. ``images`` defaults to an empty list.

    Returns:
        Cleaned fields ready to insert (without seller_id / created_at)

    Raises:
        ValidationError: Listing every offending field
    """
    errors: list[dict[str, str]] = []
    fields: dict[str, Any] = {}

    for field, label in PRODUCT_TEXT_FIELDS:
        value = data.get(field)
        text = value.strip() if isinstance(value, str) else ""
        if text:
            fields[field] = text
        elif value is not None and not isinstance(value, str):
            errors.append(_error(field, f"{label} must be a string"))
        else:
            errors.append(_error(field, f"{label} is required"))

    price = _check_price(data.get("price"), errors)
    if price is not None:
        fields["price"] = price

    images = data.get("images")
    if images is None:
        fields["images"] = []
    else:
        cleaned = _check_images(images, errors)
        if cleaned is not None:
            fields["images"] = cleaned

    if errors:
        raise ValidationError(errors)
    return fields


def validate_product_update(data: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a partial product update.

    Only fields present in ``data`` are checked. ``None`` counts as absent.
    Text fields that are present must be non-empty after trimming.

    Returns:
        The subset of fields to write. Empty image lists are dropped so a
        partial update never blanks out stored images.

    Raises:
        ValidationError: Listing every offending field
    """
    errors: list[dict[str, str]] = []
    fields: dict[str, Any] = {}

    for field, label in PRODUCT_TEXT_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        text = value.strip() if isinstance(value, str) else ""
        if text:
            fields[field] = text
        elif not isinstance(value, str):
            errors.append(_error(field, f"{label} must be a string"))
        else:
            errors.append(_error(field, f"{label} cannot be empty"))

    if data.get("price") is not None:
        price = _check_price(data["price"], errors)
        if price is not None:
            fields["price"] = price

    if data.get("images") is not None:
        images = _check_images(data["images"], errors)
        if images:
            fields["images"] = images

    if errors:
        raise ValidationError(errors)
    return fields


# =============================================================================
# Accounts
# =============================================================================

def validate_registration(data: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a registration payload.

    Returns:
        Cleaned fields: trimmed username, trimmed lowercased email, raw
        password (for hashing) and profile_picture ("" when not given)

    Raises:
        ValidationError: Listing every offending field
    """
    errors: list[dict[str, str]] = []
    fields: dict[str, Any] = {}

    username = data.get("username")
    username = username.strip() if isinstance(username, str) else ""
    if username:
        fields["username"] = username
    else:
        errors.append(_error("username", "Username is required"))

    email = data.get("email")
    email = email.strip().lower() if isinstance(email, str) else ""
    if not email:
        errors.append(_error("email", "Email is required"))
    else:
        try:
            validate_email(email, check_deliverability=False)
            fields["email"] = email
        except EmailNotValidError:
            errors.append(_error("email", "Please include a valid email"))

    password = data.get("password")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(_error(
            "password",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        ))
    else:
        fields["password"] = password

    picture = data.get("profile_picture")
    if picture is None:
        fields["profile_picture"] = ""
    elif isinstance(picture, str):
        fields["profile_picture"] = picture.strip()
    else:
        errors.append(_error("profilePicture", "Profile picture must be a URL string"))

    if errors:
        raise ValidationError(errors)
    return fields


def validate_login(data: dict[str, Any]) -> dict[str, str]:
    """Check that email and password are present; returns them cleaned."""
    errors: list[dict[str, str]] = []

    email = data.get("email")
    email = email.strip().lower() if isinstance(email, str) else ""
    if not email:
        errors.append(_error("email", "Email is required"))

    password = data.get("password")
    if not isinstance(password, str) or not password:
        errors.append(_error("password", "Password is required"))

    if errors:
        raise ValidationError(errors)
    return {"email": email, "password": password}
