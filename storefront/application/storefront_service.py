"""Public storefront read models."""

from collections.abc import Sequence
from dataclasses import dataclass

from storefront.application.catalog_service import CatalogService
from storefront.application.promotion_service import PromotionService
from storefront.catalog.hierarchy import CategoryNode
from storefront.promotions.models import Banner, Collection, Discount, Sale
from storefront.promotions.status import PromotionStatus


@dataclass
class HomePage:
    """Content of the storefront home page."""

    banners: Sequence[Banner]
    collections: Sequence[Collection]
    discounts: Sequence[Discount]
    sales: Sequence[Sale]
    categories: list[CategoryNode]


async def load_home_page(
    catalog: CatalogService,
    promotions: PromotionService,
    store_id: str | None = None,
) -> HomePage:
    """Collect banners, active promotions and the category tree.

    Args:
        catalog: Catalog service for the request.
        promotions: Promotion service for the request.
        store_id: Restrict to one store.

    Returns:
        HomePage with only ACTIVE collections, discounts and sales.
    """
    active = PromotionStatus.ACTIVE
    return HomePage(
        banners=await promotions.list_banners(store_id=store_id),
        collections=await promotions.list_collections(store_id=store_id, status=active),
        discounts=await promotions.list_discounts(store_id=store_id, status=active),
        sales=await promotions.list_sales(store_id=store_id, status=active),
        categories=await catalog.category_tree(store_id=store_id),
    )
