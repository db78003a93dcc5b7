"""Brand, banner and image API endpoints (admin)."""

from fastapi import APIRouter, Query, status

from storefront.api.converters import banner_to_response, brand_to_response
from storefront.api.dependencies import (
    AuthSession,
    CatalogServiceDep,
    ImageServiceDep,
    PromotionServiceDep,
)
from storefront.api.schemas import (
    BannerCreateRequest,
    BannerResponse,
    BrandCreateRequest,
    BrandResponse,
    DeleteResponse,
    ErrorResponse,
)

brands_router = APIRouter(prefix="/brands", tags=["Brands"])
banners_router = APIRouter(prefix="/banners", tags=["Banners"])
images_router = APIRouter(prefix="/images", tags=["Images"])

_OWNER_ERRORS = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


# ============================================================================
# Brands
# ============================================================================


@brands_router.post(
    "",
    response_model=BrandResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_OWNER_ERRORS,
    summary="Create a brand",
)
async def create_brand(
    request: BrandCreateRequest,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> BrandResponse:
    brand = await service.create_brand(auth.user_id, request.model_dump())
    return brand_to_response(brand)


@brands_router.get("", response_model=list[BrandResponse], summary="List brands")
async def list_brands(
    service: CatalogServiceDep,
    store_id: str | None = Query(default=None),
) -> list[BrandResponse]:
    return [brand_to_response(b) for b in await service.list_brands(store_id)]


@brands_router.delete(
    "/{brand_id}",
    response_model=DeleteResponse,
    responses=_OWNER_ERRORS,
    summary="Delete a brand",
)
async def delete_brand(
    brand_id: str,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> DeleteResponse:
    await service.delete_brand(brand_id, auth.user_id)
    return DeleteResponse(id=brand_id)


# ============================================================================
# Banners
# ============================================================================


@banners_router.post(
    "",
    response_model=BannerResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_OWNER_ERRORS,
    summary="Create a banner",
)
async def create_banner(
    request: BannerCreateRequest,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> BannerResponse:
    banner = await service.create_banner(auth.user_id, request.model_dump())
    return banner_to_response(banner)


@banners_router.get("", response_model=list[BannerResponse], summary="List banners")
async def list_banners(
    service: PromotionServiceDep,
    store_id: str | None = Query(default=None),
) -> list[BannerResponse]:
    return [banner_to_response(b) for b in await service.list_banners(store_id)]


@banners_router.delete(
    "/{banner_id}",
    response_model=DeleteResponse,
    responses=_OWNER_ERRORS,
    summary="Delete a banner",
)
async def delete_banner(
    banner_id: str,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> DeleteResponse:
    await service.delete_banner(banner_id, auth.user_id)
    return DeleteResponse(id=banner_id)


# ============================================================================
# Images
# ============================================================================


@images_router.delete(
    "/{image_id}",
    response_model=DeleteResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete an uploaded image",
    description="Removes the file from storage, then the image reference.",
)
async def delete_image(
    image_id: str,
    auth: AuthSession,
    service: ImageServiceDep,
) -> DeleteResponse:
    await service.delete_image(image_id)
    return DeleteResponse(id=image_id)
