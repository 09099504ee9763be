# =============================================================================
# app/routers/products.py - Product CRUD Endpoints
# =============================================================================
# Reads (list, search, get) are public.
# Create, update and delete require a bearer token; update and delete also
# require that the caller is the product's seller.
#
# Write bodies are read by product_payload, which sits behind the bearer gate:
# a request without a valid token gets its 401 before the body is parsed.
#
# Handlers are plain ``def`` so the blocking Supabase calls run in FastAPI's
# threadpool.
# =============================================================================

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Request, status

from app.auth import AuthUser, get_current_user
from app.exceptions import ValidationError
from core.models.product import (
    ProductCreate,
    ProductDeleted,
    ProductResponse,
    ProductUpdate,
)
from core.services.product_service import ProductService

router = APIRouter()


def _body_schema(model: type[ProductCreate]) -> dict[str, Any]:
    """OpenAPI request body for endpoints that read the body themselves."""
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


async def product_payload(
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, Any]:
    """
    Read the JSON body of a product write.

    An empty body (or ``null``) reads as ``{}`` so the field validators can
    report every missing field.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except ValueError:
        raise ValidationError([{"field": "body", "message": "Body must be valid JSON"}])

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError([{"field": "body", "message": "Body must be a JSON object"}])
    return payload


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_body_schema(ProductCreate),
)
def create_product(
    user: AuthUser = Depends(get_current_user),
    payload: dict[str, Any] = Depends(product_payload),
):
    """
    Create a new product.

    The authenticated user becomes the seller. All invalid fields are
    reported together in a 400 response.
    """
    data = ProductCreate.model_validate(payload).model_dump(exclude_unset=True)
    product = ProductService.create_product(user_id=user.id, data=data)
    return ProductResponse(**product)


@router.get("", response_model=list[ProductResponse])
def list_products(
    search: Annotated[str | None, Query(description="Case-insensitive title substring")] = None,
    category: Annotated[str | None, Query(description="Exact category")] = None,
):
    """
    List products with optional search and category filters.

    Each product includes its seller's username. Order is not guaranteed.
    """
    products = ProductService.list_products(search=search, category=category)
    return [ProductResponse(**p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: Annotated[str, Path(description="Product ID")],
):
    """Get a product by ID."""
    product = ProductService.get_product(product_id)
    return ProductResponse(**product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    openapi_extra=_body_schema(ProductUpdate),
)
def update_product(
    product_id: Annotated[str, Path(description="Product ID")],
    user: AuthUser = Depends(get_current_user),
    payload: dict[str, Any] = Depends(product_payload),
):
    """
    Update a product.

    Only fields present and non-empty in the body are changed; the seller
    never changes. User must be the product's seller.
    """
    data = ProductUpdate.model_validate(payload).model_dump(exclude_unset=True)
    product = ProductService.update_product(product_id, user_id=user.id, data=data)
    return ProductResponse(**product)


@router.delete("/{product_id}", response_model=ProductDeleted)
def delete_product(
    product_id: Annotated[str, Path(description="Product ID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a product.

    User must be the product's seller.
    """
    ProductService.delete_product(product_id, user_id=user.id)
    return ProductDeleted()
