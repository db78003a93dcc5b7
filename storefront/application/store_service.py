"""Store application service.

Stores are the tenant boundary. Every store-scoped write first checks
that the session user owns the store.
"""

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import Image
from storefront.domain.exceptions import ForbiddenError, NotFoundError
from storefront.infrastructure.file_storage import FileStorageClient
from storefront.infrastructure.models import Store
from storefront.infrastructure.store_repository import StoreRepository

logger = structlog.get_logger()


async def ensure_store_owner(session: AsyncSession, store_id: str, user_id: str) -> Store:
    """Load a store and check that ``user_id`` owns it.

    Args:
        session: Database session.
        store_id: Store to check.
        user_id: Session user.

    Returns:
        The store.

    Raises:
        NotFoundError: If the store does not exist.
        ForbiddenError: If the user does not own it.
    """
    store = await StoreRepository(session).get_by_id(store_id)
    if store is None:
        raise NotFoundError("Store", store_id)
    if store.user_id != user_id:
        logger.warning("Store ownership check failed", store_id=store_id, user_id=user_id)
        raise ForbiddenError(store_id, user_id)
    return store


def build_images(images: list[dict[str, Any]] | None) -> list[Image]:
    """Turn submitted ``{url, key}`` pairs into Image rows."""
    return [Image(url=image["url"], key=image["key"]) for image in images or []]


class StoreService:
    """Service for store management."""

    def __init__(self, session: AsyncSession, file_storage: FileStorageClient) -> None:
        """Initialize store service.

        Args:
            session: Database session.
            file_storage: File storage client for image cleanup.
        """
        self.session = session
        self.file_storage = file_storage
        self.stores = StoreRepository(session)

    async def create_store(self, user_id: str, data: dict[str, Any]) -> Store:
        """Create a store owned by ``user_id``."""
        store = Store(
            name=data["name"],
            description=data.get("description"),
            user_id=user_id,
            images=build_images(data.get("images")),
        )
        store = await self.stores.save(store)
        logger.info("Store created", store_id=store.id, user_id=user_id)
        return store

    async def list_stores(self, user_id: str) -> Sequence[Store]:
        return await self.stores.list_for_user(user_id)

    async def update_store(self, store_id: str, user_id: str, fields: dict[str, Any]) -> Store:
        """Update a store owned by ``user_id``.

        Args:
            store_id: Store to update.
            user_id: Session user.
            fields: Fields present in the request; images are appended.

        Returns:
            Updated store.
        """
        store = await ensure_store_owner(self.session, store_id, user_id)

        fields = dict(fields)
        images = fields.pop("images", None)
        for name, value in fields.items():
            if name == "name" and value is None:
                continue
            setattr(store, name, value)
        store.images.extend(build_images(images))

        store = await self.stores.save(store)
        logger.info("Store updated", store_id=store_id, fields=sorted(fields))
        return store

    async def delete_store(self, store_id: str, user_id: str) -> None:
        """Delete a store and forward its image keys to file storage."""
        store = await ensure_store_owner(self.session, store_id, user_id)
        await self.file_storage.delete_files([image.key for image in store.images])
        await self.stores.delete(store)
        logger.info("Store deleted", store_id=store_id)
