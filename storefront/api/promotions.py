"""Promotion API endpoints (admin).

Collections, discounts and sales share one lifecycle: submitted dates
are corrected for the chosen status, validated, then stored. The
status preview endpoint shows an editor the outcome up front.
"""

from fastapi import APIRouter, Query, status

from storefront.api.converters import (
    collection_to_response,
    discount_to_response,
    preview_to_response,
    sale_to_response,
)
from storefront.api.dependencies import AuthSession, PromotionServiceDep
from storefront.api.schemas import (
    CollectionCreateRequest,
    CollectionResponse,
    CollectionUpdateRequest,
    DeleteResponse,
    DiscountCreateRequest,
    DiscountResponse,
    DiscountUpdateRequest,
    ErrorResponse,
    SaleCreateRequest,
    SaleResponse,
    SaleUpdateRequest,
    StatusPreviewRequest,
    StatusPreviewResponse,
)
from storefront.promotions.status import PromotionStatus

router = APIRouter(prefix="/promotions", tags=["Promotions"])
collections_router = APIRouter(prefix="/collections", tags=["Promotions"])
discounts_router = APIRouter(prefix="/discounts", tags=["Promotions"])
sales_router = APIRouter(prefix="/sales", tags=["Promotions"])

_WRITE_ERRORS = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


@router.post(
    "/status-preview",
    response_model=StatusPreviewResponse,
    summary="Preview date correction for a status",
    description="Returns corrected dates and the selectable start/end date bounds.",
)
async def preview_status(
    request: StatusPreviewRequest,
    service: PromotionServiceDep,
) -> StatusPreviewResponse:
    preview = service.preview_status(
        request.kind, request.status, request.start_date, request.end_date
    )
    return preview_to_response(preview)


# ============================================================================
# Collections
# ============================================================================


@collections_router.post(
    "",
    response_model=CollectionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    summary="Create a collection",
)
async def create_collection(
    request: CollectionCreateRequest,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> CollectionResponse:
    collection = await service.create_collection(auth.user_id, request.model_dump())
    return collection_to_response(collection)


@collections_router.get("", response_model=list[CollectionResponse], summary="List collections")
async def list_collections(
    service: PromotionServiceDep,
    store_id: str | None = Query(default=None),
    status: PromotionStatus | None = Query(default=None),
) -> list[CollectionResponse]:
    return [
        collection_to_response(c)
        for c in await service.list_collections(store_id=store_id, status=status)
    ]


@collections_router.get(
    "/{collection_id}",
    response_model=CollectionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a collection",
)
async def get_collection(collection_id: str, service: PromotionServiceDep) -> CollectionResponse:
    return collection_to_response(await service.get_collection(collection_id))


@collections_router.patch(
    "/{collection_id}",
    response_model=CollectionResponse,
    responses=_WRITE_ERRORS,
    summary="Update a collection",
)
async def update_collection(
    collection_id: str,
    request: CollectionUpdateRequest,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> CollectionResponse:
    collection = await service.update_collection(
        collection_id, auth.user_id, request.model_dump(exclude_unset=True)
    )
    return collection_to_response(collection)


@collections_router.delete(
    "/{collection_id}",
    response_model=DeleteResponse,
    responses=_WRITE_ERRORS,
    summary="Delete a collection",
)
async def delete_collection(
    collection_id: str,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> DeleteResponse:
    await service.delete_collection(collection_id, auth.user_id)
    return DeleteResponse(id=collection_id)


# ============================================================================
# Discounts
# ============================================================================


@discounts_router.post(
    "",
    response_model=DiscountResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    summary="Create a discount",
)
async def create_discount(
    request: DiscountCreateRequest,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> DiscountResponse:
    """Create a discount.

    PERCENTAGE values above 100 and windows that end before they start
    are rejected with 422 and nothing is written.

    Args:
        request: Discount fields.
        auth: Admin session.
        service: Promotion service.

    Returns:
        Created discount with corrected dates.
    """
    discount = await service.create_discount(auth.user_id, request.model_dump())
    return discount_to_response(discount)


@discounts_router.get("", response_model=list[DiscountResponse], summary="List discounts")
async def list_discounts(
    service: PromotionServiceDep,
    store_id: str | None = Query(default=None),
    status: PromotionStatus | None = Query(default=None),
) -> list[DiscountResponse]:
    return [
        discount_to_response(d)
        for d in await service.list_discounts(store_id=store_id, status=status)
    ]


@discounts_router.get(
    "/{discount_id}",
    response_model=DiscountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a discount",
)
async def get_discount(discount_id: str, service: PromotionServiceDep) -> DiscountResponse:
    return discount_to_response(await service.get_discount(discount_id))


@discounts_router.patch(
    "/{discount_id}",
    response_model=DiscountResponse,
    responses=_WRITE_ERRORS,
    summary="Update a discount",
)
async def update_discount(
    discount_id: str,
    request: DiscountUpdateRequest,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> DiscountResponse:
    discount = await service.update_discount(
        discount_id, auth.user_id, request.model_dump(exclude_unset=True)
    )
    return discount_to_response(discount)


@discounts_router.delete(
    "/{discount_id}",
    response_model=DeleteResponse,
    responses=_WRITE_ERRORS,
    summary="Delete a discount",
)
async def delete_discount(
    discount_id: str,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> DeleteResponse:
    await service.delete_discount(discount_id, auth.user_id)
    return DeleteResponse(id=discount_id)


# ============================================================================
# Sales
# ============================================================================


@sales_router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    summary="Create a sale",
)
async def create_sale(
    request: SaleCreateRequest,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> SaleResponse:
    sale = await service.create_sale(auth.user_id, request.model_dump())
    return sale_to_response(sale)


@sales_router.get("", response_model=list[SaleResponse], summary="List sales")
async def list_sales(
    service: PromotionServiceDep,
    store_id: str | None = Query(default=None),
    status: PromotionStatus | None = Query(default=None),
) -> list[SaleResponse]:
    return [sale_to_response(s) for s in await service.list_sales(store_id=store_id, status=status)]


@sales_router.get(
    "/{sale_id}",
    response_model=SaleResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a sale",
)
async def get_sale(sale_id: str, service: PromotionServiceDep) -> SaleResponse:
    return sale_to_response(await service.get_sale(sale_id))


@sales_router.patch(
    "/{sale_id}",
    response_model=SaleResponse,
    responses=_WRITE_ERRORS,
    summary="Update a sale",
)
async def update_sale(
    sale_id: str,
    request: SaleUpdateRequest,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> SaleResponse:
    sale = await service.update_sale(sale_id, auth.user_id, request.model_dump(exclude_unset=True))
    return sale_to_response(sale)


@sales_router.delete(
    "/{sale_id}",
    response_model=DeleteResponse,
    responses=_WRITE_ERRORS,
    summary="Delete a sale",
)
async def delete_sale(
    sale_id: str,
    auth: AuthSession,
    service: PromotionServiceDep,
) -> DeleteResponse:
    await service.delete_sale(sale_id, auth.user_id)
    return DeleteResponse(id=sale_id)
