"""Image application service."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.repository import ImageRepository
from storefront.domain.exceptions import NotFoundError
from storefront.infrastructure.file_storage import FileStorageClient

logger = structlog.get_logger()


class ImageService:
    """Service for removing single uploaded images."""

    def __init__(self, session: AsyncSession, file_storage: FileStorageClient) -> None:
        self.images = ImageRepository(session)
        self.file_storage = file_storage

    async def delete_image(self, image_id: str) -> None:
        """Delete an image from file storage, then its row.

        Raises:
            NotFoundError: If the image does not exist.
        """
        image = await self.images.get_by_id(image_id)
        if image is None:
            raise NotFoundError("Image", image_id)

        await self.file_storage.delete_files([image.key])
        await self.images.delete_by_id(image_id)
        logger.info("Image deleted", image_id=image_id, key=image.key)
