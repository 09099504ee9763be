# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the API contract for product operations:
# - ProductCreate: Body of POST /products
# - ProductUpdate: Body of PUT /products/{id} (any subset of fields)
# - ProductResponse: Output when returning product data to clients
#
# Request models are deliberately loose: field constraints (non-empty, numeric
# price, ...) are checked by core.validation so that every offending field is
# reported in one response.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt
from pydantic.alias_generators import to_camel


class ProductCreate(BaseModel):
    """
    Schema for creating a product.

    Example:
        {
            "title": "Desk",
            "description": "Oak desk",
            "price": 120,
            "category": "furniture",
            "images": ["https://cdn.example.com/desk.jpg"]
        }
    """

    title: Any = Field(default=None, description="Product title")
    description: Any = Field(default=None, description="Product description")
    price: Any = Field(default=None, description="Price, a non-negative number")
    category: Any = Field(default=None, description="Category name (exact-match filter)")
    images: Any = Field(default=None, description="Image URLs, in display order")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Desk",
                "description": "Oak desk",
                "price": 120,
                "category": "furniture",
                "images": [],
            }
        }
    )


class ProductUpdate(ProductCreate):
    """
    Schema for updating a product.

    Same fields as ProductCreate, all optional. Only fields that are present
    and non-empty are written; everything else keeps its stored value.

    Example:
        {"price": 100}
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"price": 100}}
    )


class ProductResponse(BaseModel):
    """
    Schema for returning product data to clients.

    Serialized with camelCase keys (sellerId, sellerUsername, createdAt).
    ``seller_username`` is filled in on reads; it is None on the create
    response. Integer prices stay integers on the way out.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    title: str
    description: str
    price: NonNegativeInt | NonNegativeFloat
    category: str
    images: list[str] = Field(default_factory=list)
    seller_id: str
    seller_username: str | None = None
    created_at: datetime


class ProductDeleted(BaseModel):
    """Confirmation returned by DELETE /products/{id}."""
    message: str = "Product removed"
