"""API schemas for the storefront service.

Pydantic models for request/response validation and serialization.
Money is always an integer amount in cents.
"""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from storefront.catalog.filters import MAX_PRICE
from storefront.promotions.status import PromotionKind, PromotionStatus
from storefront.promotions.validation import DiscountType


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class ImageSchema(BaseModel):
    """Uploaded image as returned by the file storage service."""

    url: str = Field(..., min_length=1, description="Public URL")
    key: str = Field(..., min_length=1, description="Storage key")


class ImageResponse(ImageSchema):
    """Stored image reference."""

    id: str = Field(..., description="Image ID")


class DeleteResponse(BaseModel):
    """Confirmation of a deletion."""

    id: str = Field(..., description="ID of the deleted record")
    deleted: bool = Field(default=True)


# ============================================================================
# Store Schemas
# ============================================================================


class StoreCreateRequest(BaseModel):
    """Request to create a store."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None)
    images: list[ImageSchema] = Field(default_factory=list)


class StoreUpdateRequest(BaseModel):
    """Partial store update; images are appended."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    images: list[ImageSchema] = Field(default_factory=list)


class StoreResponse(BaseModel):
    """Store details."""

    id: str
    name: str
    description: str | None = None
    user_id: str
    images: list[ImageResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(..., min_length=3, max_length=255, description="Category name")
    description: str = Field(..., min_length=10, description="Category description")
    store_id: str = Field(..., description="Owning store")
    is_subcategory: bool = Field(default=False)
    parent_category_id: str | None = Field(default=None)
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None
    images: list[ImageSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_parent(self) -> Self:
        if self.is_subcategory and not self.parent_category_id:
            raise ValueError("parent_category_id is required for a subcategory")
        if not self.is_subcategory:
            self.parent_category_id = None
        return self


class CategoryUpdateRequest(BaseModel):
    """Partial category update; empty strings clear references."""

    name: str | None = Field(default=None, min_length=3, max_length=255)
    description: str | None = Field(default=None, min_length=10)
    parent_category_id: str | None = None
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None
    images: list[ImageSchema] = Field(default_factory=list)


class CategoryResponse(BaseModel):
    """Category details."""

    id: str
    name: str
    description: str | None = None
    store_id: str
    parent_category_id: str | None = None
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None
    images: list[ImageResponse] = Field(default_factory=list)
    created_at: datetime


class CategoryTreeNode(BaseModel):
    """Category with nested subcategories."""

    id: str
    name: str
    parent_category_id: str | None = None
    children: list["CategoryTreeNode"] = Field(default_factory=list)


# ============================================================================
# Brand & Banner Schemas
# ============================================================================


class BrandCreateRequest(BaseModel):
    """Request to create a brand."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    store_id: str
    images: list[ImageSchema] = Field(default_factory=list)


class BrandResponse(BaseModel):
    """Brand details."""

    id: str
    name: str
    description: str | None = None
    store_id: str
    images: list[ImageResponse] = Field(default_factory=list)


class BannerCreateRequest(BaseModel):
    """Request to create a home page banner."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    button_text: str | None = Field(default=None, max_length=100)
    button_link: str | None = Field(default=None, max_length=1000)
    store_id: str
    collection_id: str | None = None
    discount_id: str | None = None
    sale_id: str | None = None
    category_id: str | None = None
    images: list[ImageSchema] = Field(default_factory=list)


class BannerResponse(BaseModel):
    """Banner details."""

    id: str
    name: str
    description: str | None = None
    button_text: str | None = None
    button_link: str | None = None
    store_id: str
    collection_id: str | None = None
    discount_id: str | None = None
    sale_id: str | None = None
    category_id: str | None = None
    images: list[ImageResponse] = Field(default_factory=list)


# ============================================================================
# Product Schemas
# ============================================================================


class VariantAttributeSchema(BaseModel):
    """Variant option such as Color: Red."""

    name: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=255)


class VariantCreateRequest(BaseModel):
    """Variant submitted together with a product."""

    name: str = Field(..., min_length=1, max_length=255)
    sku: str | None = Field(default=None, max_length=100)
    price: int = Field(default=0, ge=0, le=MAX_PRICE, description="Price in cents")
    stock: int = Field(default=0, ge=0)
    description: str | None = None
    attributes: list[VariantAttributeSchema] = Field(default_factory=list)
    images: list[ImageSchema] = Field(default_factory=list)
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None


class ProductVariantCreateRequest(VariantCreateRequest):
    """Variant added to an existing product."""

    product_id: str


class VariantUpdateRequest(BaseModel):
    """Partial variant update.

    Attributes replace the existing ones when given; images are appended.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    sku: str | None = Field(default=None, max_length=100)
    price: int | None = Field(default=None, ge=0, le=MAX_PRICE)
    stock: int | None = Field(default=None, ge=0)
    description: str | None = None
    attributes: list[VariantAttributeSchema] | None = None
    images: list[ImageSchema] = Field(default_factory=list)
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None


class VariantResponse(BaseModel):
    """Variant details."""

    id: str
    product_id: str
    name: str
    sku: str | None = None
    price: int
    stock: int
    description: str | None = None
    value: str = Field(..., description="Attribute values joined for display")
    attributes: list[VariantAttributeSchema] = Field(default_factory=list)
    images: list[ImageResponse] = Field(default_factory=list)
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None


class ProductCreateRequest(BaseModel):
    """Request to create a product with its variants and images."""

    name: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    sku: str = Field(..., min_length=1, max_length=100, description="Unique SKU")
    manufacturer: str | None = Field(default=None, max_length=255)
    base_price: int = Field(..., ge=0, le=MAX_PRICE, description="Base price in cents")
    category_id: str | None = None
    brand_id: str | None = None
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None
    images: list[ImageSchema] = Field(default_factory=list)
    variants: list[VariantCreateRequest] = Field(default_factory=list)


class ProductUpdateRequest(BaseModel):
    """Partial product update.

    Only fields present in the body change. An empty string clears an
    association; images and variants are appended.
    """

    name: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    sku: str | None = Field(default=None, min_length=1, max_length=100)
    manufacturer: str | None = Field(default=None, max_length=255)
    base_price: int | None = Field(default=None, ge=0, le=MAX_PRICE)
    category_id: str | None = None
    brand_id: str | None = None
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None
    images: list[ImageSchema] = Field(default_factory=list)
    variants: list[VariantCreateRequest] = Field(default_factory=list)


class PromotionSummary(BaseModel):
    """Promotion attached to a product."""

    id: str
    name: str
    status: PromotionStatus


class ProductResponse(BaseModel):
    """Product details."""

    id: str
    name: str
    description: str | None = None
    sku: str
    manufacturer: str | None = None
    base_price: int = Field(..., description="Base price in cents")
    category_id: str | None = None
    category_name: str | None = None
    brand_id: str | None = None
    sale_id: str | None = None
    discount_id: str | None = None
    collection_id: str | None = None
    sale: PromotionSummary | None = None
    discount: PromotionSummary | None = None
    images: list[ImageResponse] = Field(default_factory=list)
    variants: list[VariantResponse] = Field(default_factory=list)
    is_new: bool = Field(..., description="Created within the last few days")
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """List of products."""

    items: list[ProductResponse]
    total: int


# ============================================================================
# Promotion Schemas
# ============================================================================


class PromotionCreateFields(BaseModel):
    """Fields shared by collection, discount and sale submissions."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: PromotionStatus = Field(default=PromotionStatus.INACTIVE)
    start_date: datetime
    end_date: datetime
    store_id: str


class PromotionUpdateFields(BaseModel):
    """Partial update fields shared by promotional entities."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: PromotionStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class CollectionCreateRequest(PromotionCreateFields):
    """Request to create a collection."""

    images: list[ImageSchema] = Field(default_factory=list)


class CollectionUpdateRequest(PromotionUpdateFields):
    """Partial collection update; images are appended."""

    images: list[ImageSchema] = Field(default_factory=list)


class DiscountCreateRequest(PromotionCreateFields):
    """Request to create a discount."""

    code: str | None = Field(default=None, description="Redemption code, e.g. SUMMER_24")
    type: DiscountType
    value: int = Field(..., description="Percentage, or amount in cents for FIXED")
    min_purchase: int | None = Field(default=None, description="Minimum order in cents")
    max_uses: int | None = None


class DiscountUpdateRequest(PromotionUpdateFields):
    """Partial discount update."""

    code: str | None = None
    type: DiscountType | None = None
    value: int | None = None
    min_purchase: int | None = None
    max_uses: int | None = None


class SaleCreateRequest(PromotionCreateFields):
    """Request to create a sale."""

    discount_type: DiscountType
    discount_value: int


class SaleUpdateRequest(PromotionUpdateFields):
    """Partial sale update."""

    discount_type: DiscountType | None = None
    discount_value: int | None = None


class PromotionResponseFields(BaseModel):
    id: str
    name: str
    description: str | None = None
    status: PromotionStatus
    start_date: datetime
    end_date: datetime
    store_id: str


class CollectionResponse(PromotionResponseFields):
    """Collection details."""

    images: list[ImageResponse] = Field(default_factory=list)


class DiscountResponse(PromotionResponseFields):
    """Discount details."""

    code: str | None = None
    type: DiscountType
    value: int
    min_purchase: int | None = None
    max_uses: int | None = None


class SaleResponse(PromotionResponseFields):
    """Sale details."""

    discount_type: DiscountType
    discount_value: int


class StatusPreviewRequest(BaseModel):
    """Dates an editor is about to submit for a status."""

    kind: PromotionKind
    status: PromotionStatus
    start_date: datetime
    end_date: datetime


class DateBoundsSchema(BaseModel):
    """Selectable date interval; null means unbounded."""

    earliest: datetime | None = None
    latest: datetime | None = None
    earliest_inclusive: bool = True
    latest_inclusive: bool = True


class StatusPreviewResponse(BaseModel):
    """Corrected dates and selectable bounds for a status."""

    status: PromotionStatus
    start_date: datetime
    end_date: datetime
    start_date_bounds: DateBoundsSchema
    end_date_bounds: DateBoundsSchema


# ============================================================================
# Storefront Schemas
# ============================================================================


class HomeResponse(BaseModel):
    """Everything the storefront home page shows."""

    banners: list[BannerResponse]
    collections: list[CollectionResponse]
    discounts: list[DiscountResponse]
    sales: list[SaleResponse]
    categories: list[CategoryTreeNode]
