"""Product and variant API endpoints (admin).

Provides endpoints for creating products together with their variants,
attributes and images, and for managing variants individually.
"""

from fastapi import APIRouter, Query, status

from storefront.api.converters import product_to_response, variant_to_response
from storefront.api.dependencies import AuthSession, CatalogServiceDep
from storefront.api.schemas import (
    DeleteResponse,
    ErrorResponse,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
    ProductVariantCreateRequest,
    VariantResponse,
    VariantUpdateRequest,
)

router = APIRouter(prefix="/products", tags=["Products"])
variants_router = APIRouter(prefix="/variants", tags=["Products"])


# ============================================================================
# Products
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create a product",
    description="Create a product with its images, variants and variant attributes in one write.",
)
async def create_product(
    request: ProductCreateRequest,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> ProductResponse:
    """Create a product.

    Args:
        request: Product fields, images and variants.
        auth: Admin session.
        service: Catalog service.

    Returns:
        Created product.
    """
    product = await service.create_product(request.model_dump())
    return product_to_response(product)


@router.get("", response_model=list[ProductResponse], summary="List products")
async def list_products(
    service: CatalogServiceDep,
    store_id: str | None = Query(default=None, description="Restrict to one store"),
) -> list[ProductResponse]:
    return [product_to_response(p) for p in await service.list_products(store_id)]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a product",
)
async def get_product(product_id: str, service: CatalogServiceDep) -> ProductResponse:
    return product_to_response(await service.get_product(product_id))


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Update a product",
    description=(
        "Only fields present in the body change. An empty string clears an "
        "association; images and variants are appended."
    ),
)
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> ProductResponse:
    product = await service.update_product(product_id, request.model_dump(exclude_unset=True))
    return product_to_response(product)


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> DeleteResponse:
    await service.delete_product(product_id)
    return DeleteResponse(id=product_id)


# ============================================================================
# Variants
# ============================================================================


@variants_router.post(
    "",
    response_model=VariantResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Add a variant to a product",
)
async def create_variant(
    request: ProductVariantCreateRequest,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> VariantResponse:
    variant = await service.create_variant(request.model_dump())
    return variant_to_response(variant)


@variants_router.patch(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update a variant",
)
async def update_variant(
    variant_id: str,
    request: VariantUpdateRequest,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> VariantResponse:
    variant = await service.update_variant(variant_id, request.model_dump(exclude_unset=True))
    return variant_to_response(variant)


@variants_router.delete(
    "/{variant_id}",
    response_model=DeleteResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a variant",
)
async def delete_variant(
    variant_id: str,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> DeleteResponse:
    await service.delete_variant(variant_id)
    return DeleteResponse(id=variant_id)
