"""Converters from ORM models to API response schemas."""

from datetime import datetime, timezone

from storefront.api.schemas import (
    BannerResponse,
    BrandResponse,
    CategoryResponse,
    CategoryTreeNode,
    CollectionResponse,
    DateBoundsSchema,
    DiscountResponse,
    ImageResponse,
    ProductResponse,
    PromotionSummary,
    SaleResponse,
    StatusPreviewResponse,
    StoreResponse,
    VariantAttributeSchema,
    VariantResponse,
)
from storefront.application.promotion_service import StatusPreview
from storefront.catalog.hierarchy import CategoryNode
from storefront.catalog.models import Brand, Category, Image, Product, ProductVariant
from storefront.infrastructure.config import settings
from storefront.infrastructure.models import Store
from storefront.promotions.models import Banner, Collection, Discount, Sale
from storefront.promotions.status import DateBounds, PromotionStatus


def images_to_response(images: list[Image]) -> list[ImageResponse]:
    return [ImageResponse(id=i.id, url=i.url, key=i.key) for i in images]


def store_to_response(store: Store) -> StoreResponse:
    return StoreResponse(
        id=store.id,
        name=store.name,
        description=store.description,
        user_id=store.user_id,
        images=images_to_response(store.images),
        created_at=store.created_at,
        updated_at=store.updated_at,
    )


def category_to_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        store_id=category.store_id,
        parent_category_id=category.parent_category_id,
        sale_id=category.sale_id,
        discount_id=category.discount_id,
        collection_id=category.collection_id,
        images=images_to_response(category.images),
        created_at=category.created_at,
    )


def node_to_response(node: CategoryNode) -> CategoryTreeNode:
    """Convert a category node and its subtree."""
    return CategoryTreeNode(
        id=node.id,
        name=node.name,
        parent_category_id=node.parent_category_id,
        children=[node_to_response(child) for child in node.children],
    )


def brand_to_response(brand: Brand) -> BrandResponse:
    return BrandResponse(
        id=brand.id,
        name=brand.name,
        description=brand.description,
        store_id=brand.store_id,
        images=images_to_response(brand.images),
    )


def banner_to_response(banner: Banner) -> BannerResponse:
    return BannerResponse(
        id=banner.id,
        name=banner.name,
        description=banner.description,
        button_text=banner.button_text,
        button_link=banner.button_link,
        store_id=banner.store_id,
        collection_id=banner.collection_id,
        discount_id=banner.discount_id,
        sale_id=banner.sale_id,
        category_id=banner.category_id,
        images=images_to_response(banner.images),
    )


def variant_to_response(variant: ProductVariant) -> VariantResponse:
    return VariantResponse(
        id=variant.id,
        product_id=variant.product_id,
        name=variant.name,
        sku=variant.sku,
        price=variant.price,
        stock=variant.stock,
        description=variant.description,
        value=variant.value,
        attributes=[
            VariantAttributeSchema(name=a.name, value=a.value) for a in variant.attributes
        ],
        images=images_to_response(variant.images),
        sale_id=variant.sale_id,
        discount_id=variant.discount_id,
        collection_id=variant.collection_id,
    )


def _promotion_summary(entity: Sale | Discount | None) -> PromotionSummary | None:
    if entity is None:
        return None
    return PromotionSummary(
        id=entity.id,
        name=entity.name,
        status=PromotionStatus(entity.status),
    )


def product_to_response(product: Product, now: datetime | None = None) -> ProductResponse:
    """Convert a product with its loaded relationships.

    Args:
        product: Product with images, variants, category, sale and
            discount loaded.
        now: Reference time for ``is_new``.

    Returns:
        ProductResponse.
    """
    now = now or datetime.now(timezone.utc)
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        sku=product.sku,
        manufacturer=product.manufacturer,
        base_price=product.base_price,
        category_id=product.category_id,
        category_name=product.category.name if product.category else None,
        brand_id=product.brand_id,
        sale_id=product.sale_id,
        discount_id=product.discount_id,
        collection_id=product.collection_id,
        sale=_promotion_summary(product.sale),
        discount=_promotion_summary(product.discount),
        images=images_to_response(product.images),
        variants=[variant_to_response(v) for v in product.variants],
        is_new=product.is_new(now, settings.new_product_days),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def collection_to_response(collection: Collection) -> CollectionResponse:
    return CollectionResponse(
        id=collection.id,
        name=collection.name,
        description=collection.description,
        status=PromotionStatus(collection.status),
        start_date=collection.start_date,
        end_date=collection.end_date,
        store_id=collection.store_id,
        images=images_to_response(collection.images),
    )


def discount_to_response(discount: Discount) -> DiscountResponse:
    return DiscountResponse(
        id=discount.id,
        name=discount.name,
        description=discount.description,
        status=PromotionStatus(discount.status),
        start_date=discount.start_date,
        end_date=discount.end_date,
        store_id=discount.store_id,
        code=discount.code,
        type=discount.type,
        value=discount.value,
        min_purchase=discount.min_purchase,
        max_uses=discount.max_uses,
    )


def sale_to_response(sale: Sale) -> SaleResponse:
    return SaleResponse(
        id=sale.id,
        name=sale.name,
        description=sale.description,
        status=PromotionStatus(sale.status),
        start_date=sale.start_date,
        end_date=sale.end_date,
        store_id=sale.store_id,
        discount_type=sale.discount_type,
        discount_value=sale.discount_value,
    )


def bounds_to_response(bounds: DateBounds) -> DateBoundsSchema:
    return DateBoundsSchema(
        earliest=bounds.earliest,
        latest=bounds.latest,
        earliest_inclusive=bounds.earliest_inclusive,
        latest_inclusive=bounds.latest_inclusive,
    )


def preview_to_response(preview: StatusPreview) -> StatusPreviewResponse:
    return StatusPreviewResponse(
        status=preview.status,
        start_date=preview.start_date,
        end_date=preview.end_date,
        start_date_bounds=bounds_to_response(preview.start_date_bounds),
        end_date_bounds=bounds_to_response(preview.end_date_bounds),
    )
