"""Store API endpoints.

Stores belong to the session user; only the owner may change them.
"""

from fastapi import APIRouter, status

from storefront.api.converters import store_to_response
from storefront.api.dependencies import AuthSession, StoreServiceDep
from storefront.api.schemas import (
    DeleteResponse,
    ErrorResponse,
    StoreCreateRequest,
    StoreResponse,
    StoreUpdateRequest,
)

router = APIRouter(prefix="/stores", tags=["Stores"])


@router.post(
    "",
    response_model=StoreResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}},
    summary="Create a store",
)
async def create_store(
    request: StoreCreateRequest,
    auth: AuthSession,
    service: StoreServiceDep,
) -> StoreResponse:
    store = await service.create_store(auth.user_id, request.model_dump())
    return store_to_response(store)


@router.get(
    "",
    response_model=list[StoreResponse],
    responses={401: {"model": ErrorResponse}},
    summary="List my stores",
)
async def list_stores(auth: AuthSession, service: StoreServiceDep) -> list[StoreResponse]:
    return [store_to_response(s) for s in await service.list_stores(auth.user_id)]


@router.patch(
    "/{store_id}",
    response_model=StoreResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Update a store",
)
async def update_store(
    store_id: str,
    request: StoreUpdateRequest,
    auth: AuthSession,
    service: StoreServiceDep,
) -> StoreResponse:
    store = await service.update_store(
        store_id, auth.user_id, request.model_dump(exclude_unset=True)
    )
    return store_to_response(store)


@router.delete(
    "/{store_id}",
    response_model=DeleteResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete a store",
)
async def delete_store(
    store_id: str,
    auth: AuthSession,
    service: StoreServiceDep,
) -> DeleteResponse:
    await service.delete_store(store_id, auth.user_id)
    return DeleteResponse(id=store_id)
