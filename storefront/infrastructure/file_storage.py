"""File storage HTTP client.

Uploaded images live in an external storage service. Uploads happen
directly from the browser; this service only keeps the returned
``{url, key}`` pairs and forwards keys for deletion when the owning
record goes away.
"""

from typing import Any

import httpx
import structlog

from storefront.infrastructure.config import Settings

logger = structlog.get_logger()


class FileStorageError(Exception):
    """Error from the file storage API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class FileStorageClient:
    """HTTP client for the file storage service.

    Example usage:
        client = FileStorageClient.from_settings(settings)
        await client.delete_files(["abc-123.png"])
        await client.close()
    """

    API_KEY_HEADER = "x-uploadthing-api-key"
    DELETE_PATH = "/v6/deleteFiles"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize file storage client.

        Args:
            base_url: Storage API base URL.
            api_key: Secret API key.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileStorageClient":
        """Build a client from application settings."""
        return cls(
            base_url=settings.file_storage_url,
            api_key=settings.file_storage_api_key,
            timeout=settings.file_storage_timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={self.API_KEY_HEADER: self.api_key},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def delete_files(self, keys: list[str]) -> None:
        """Delete stored files by key.

        Args:
            keys: Storage keys to delete. Duplicates are sent once and an
                empty list makes no request.

        Raises:
            FileStorageError: On transport failure or non-2xx response.
        """
        unique_keys = list(dict.fromkeys(k for k in keys if k))
        if not unique_keys:
            return

        payload: dict[str, Any] = {"fileKeys": unique_keys}

        try:
            client = await self._get_client()
            response = await client.post(self.DELETE_PATH, json=payload)
        except httpx.RequestError as e:
            logger.error(
                "File storage request failed",
                key_count=len(unique_keys),
                error=str(e),
            )
            raise FileStorageError(f"Request failed: {str(e)}") from e

        if response.status_code >= 300:
            logger.error(
                "File storage rejected delete",
                status_code=response.status_code,
                key_count=len(unique_keys),
            )
            raise FileStorageError(
                f"Failed to delete files: {response.text}",
                response.status_code,
            )

        logger.info("Deleted stored files", key_count=len(unique_keys))
