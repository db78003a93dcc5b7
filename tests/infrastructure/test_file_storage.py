"""Tests for the file storage client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from storefront.infrastructure.config import Settings
from storefront.infrastructure.file_storage import FileStorageClient, FileStorageError


class TestFileStorageClient:
    """Tests for FileStorageClient."""

    @pytest.fixture
    def client(self):
        """Create a test client."""
        return FileStorageClient(
            base_url="http://storage.local",
            api_key="test-key",
        )

    @pytest.mark.asyncio
    async def test_client_initialization(self, client):
        assert client.base_url == "http://storage.local"
        assert client.api_key == "test-key"
        assert client._client is None

    def test_from_settings(self):
        settings = Settings(
            file_storage_url="http://files.local",
            file_storage_api_key="secret",
            file_storage_timeout=3.0,
        )
        client = FileStorageClient.from_settings(settings)
        assert client.base_url == "http://files.local"
        assert client.api_key == "secret"
        assert client.timeout == 3.0

    @pytest.mark.asyncio
    async def test_delete_sends_unique_keys(self, client):
        """Duplicate and empty keys are dropped before sending."""
        mock_response = MagicMock()
        mock_response.status_code = 200

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(return_value=mock_response)
            mock_get_client.return_value = mock_http_client

            await client.delete_files(["a.png", "", "b.png", "a.png"])

            mock_http_client.post.assert_awaited_once_with(
                "/v6/deleteFiles",
                json={"fileKeys": ["a.png", "b.png"]},
            )

    @pytest.mark.asyncio
    async def test_delete_nothing_makes_no_request(self, client):
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            await client.delete_files([])
            mock_get_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_rejected(self, client):
        """Non-2xx responses raise with the status code."""
        mock_response = MagicMock()
        mock_response.status_code = 403
        mock_response.text = "Invalid API key"

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(return_value=mock_response)
            mock_get_client.return_value = mock_http_client

            with pytest.raises(FileStorageError) as exc_info:
                await client.delete_files(["a.png"])

            assert exc_info.value.status_code == 403
            assert "Invalid API key" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_delete_transport_error(self, client):
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(FileStorageError) as exc_info:
                await client.delete_files(["a.png"])

            assert exc_info.value.status_code is None
            assert "Request failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_get_client_sets_api_key_header(self, client):
        http_client = await client._get_client()
        try:
            assert http_client.headers["x-uploadthing-api-key"] == "test-key"
            assert await client._get_client() is http_client
        finally:
            await client.close()
        assert client._client is None
