"""Category API endpoints (admin)."""

from fastapi import APIRouter, Query, status

from storefront.api.converters import category_to_response
from storefront.api.dependencies import AuthSession, CatalogServiceDep
from storefront.api.schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    DeleteResponse,
    ErrorResponse,
)

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create a category",
    description="Create a root category or, with is_subcategory, a child of an existing one.",
)
async def create_category(
    request: CategoryCreateRequest,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> CategoryResponse:
    """Create a category in a store owned by the session user.

    Args:
        request: Category fields.
        auth: Admin session.
        service: Catalog service.

    Returns:
        Created category.
    """
    category = await service.create_category(auth.user_id, request.model_dump())
    return category_to_response(category)


@router.get("", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(
    service: CatalogServiceDep,
    store_id: str | None = Query(default=None, description="Restrict to one store"),
) -> list[CategoryResponse]:
    return [category_to_response(c) for c in await service.list_categories(store_id)]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a category",
)
async def get_category(category_id: str, service: CatalogServiceDep) -> CategoryResponse:
    return category_to_response(await service.get_category(category_id))


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Update a category",
)
async def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> CategoryResponse:
    category = await service.update_category(
        category_id, auth.user_id, request.model_dump(exclude_unset=True)
    )
    return category_to_response(category)


@router.delete(
    "/{category_id}",
    response_model=DeleteResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete a category",
    description="Products in the category are detached and subcategories become roots.",
)
async def delete_category(
    category_id: str,
    auth: AuthSession,
    service: CatalogServiceDep,
) -> DeleteResponse:
    await service.delete_category(category_id, auth.user_id)
    return DeleteResponse(id=category_id)
