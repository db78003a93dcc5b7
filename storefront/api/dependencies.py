"""FastAPI dependencies shared by the routers."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.catalog_service import CatalogService
from storefront.application.image_service import ImageService
from storefront.application.promotion_service import PromotionService
from storefront.application.store_service import StoreService
from storefront.domain.exceptions import UnauthorizedError
from storefront.infrastructure.auth import Session
from storefront.infrastructure.database import get_session
from storefront.infrastructure.file_storage import FileStorageClient


def get_file_storage(request: Request) -> FileStorageClient:
    """Get the file storage client created at startup."""
    return request.app.state.file_storage


def require_session(request: Request) -> Session:
    """Get the admin session resolved by the session middleware.

    Raises:
        UnauthorizedError: If the request carries no valid session.
    """
    session = getattr(request.state, "session", None)
    if session is None:
        raise UnauthorizedError()
    return session


DbSession = Annotated[AsyncSession, Depends(get_session)]
FileStorage = Annotated[FileStorageClient, Depends(get_file_storage)]
AuthSession = Annotated[Session, Depends(require_session)]


def get_catalog_service(session: DbSession, file_storage: FileStorage) -> CatalogService:
    return CatalogService(session, file_storage)


def get_promotion_service(session: DbSession, file_storage: FileStorage) -> PromotionService:
    return PromotionService(session, file_storage)


def get_store_service(session: DbSession, file_storage: FileStorage) -> StoreService:
    return StoreService(session, file_storage)


def get_image_service(session: DbSession, file_storage: FileStorage) -> ImageService:
    return ImageService(session, file_storage)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
PromotionServiceDep = Annotated[PromotionService, Depends(get_promotion_service)]
StoreServiceDep = Annotated[StoreService, Depends(get_store_service)]
ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
