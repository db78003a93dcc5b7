"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://storefront:storefront_dev_password@db:5432/storefront"

    # Authentication
    auth_api_key: str = "dev-api-key-change-in-production"

    # File storage
    file_storage_url: str = "https://api.uploadthing.com"
    file_storage_api_key: str = "dev-file-storage-key"
    file_storage_timeout: float = 10.0

    # Catalog
    new_product_days: int = 3

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
