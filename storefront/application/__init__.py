"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and infrastructure.
"""

from storefront.application.catalog_service import CatalogService
from storefront.application.image_service import ImageService
from storefront.application.promotion_service import PromotionService, StatusPreview
from storefront.application.store_service import StoreService, ensure_store_owner

__all__ = [
    "CatalogService",
    "ImageService",
    "PromotionService",
    "StatusPreview",
    "StoreService",
    "ensure_store_owner",
]
