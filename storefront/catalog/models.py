"""SQLAlchemy models for the product catalog.

Defines Category, Brand, Product, ProductVariant, VariantAttribute and
Image tables. Promotional tables (Sale, Discount, Collection) live in
``storefront.promotions.models`` and are referenced here by name.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base


def _uuid() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Images
# ============================================================================


class Image(Base):
    """Uploaded image reference.

    The file itself lives in external storage; only its public URL and
    storage key are kept. Exactly one owner column is set.
    """

    __tablename__ = "images"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    key: Mapped[str] = mapped_column(String(255), nullable=False)

    store_id: Mapped[str | None] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"), nullable=True, index=True
    )
    category_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=True, index=True
    )
    brand_id: Mapped[str | None] = mapped_column(
        ForeignKey("brands.id", ondelete="CASCADE"), nullable=True, index=True
    )
    product_id: Mapped[str | None] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=True, index=True
    )
    variant_id: Mapped[str | None] = mapped_column(
        ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=True, index=True
    )
    collection_id: Mapped[str | None] = mapped_column(
        ForeignKey("collections.id", ondelete="CASCADE"), nullable=True, index=True
    )
    banner_id: Mapped[str | None] = mapped_column(
        ForeignKey("banners.id", ondelete="CASCADE"), nullable=True, index=True
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, key={self.key})>"


# ============================================================================
# Categories & Brands
# ============================================================================


class Category(Base):
    """Store category.

    Categories form a forest through ``parent_category_id``; a NULL parent
    marks a root.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    store_id: Mapped[str] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_category_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    sale_id: Mapped[str | None] = mapped_column(
        ForeignKey("sales.id", ondelete="SET NULL"), nullable=True
    )
    discount_id: Mapped[str | None] = mapped_column(
        ForeignKey("discounts.id", ondelete="SET NULL"), nullable=True
    )
    collection_id: Mapped[str | None] = mapped_column(
        ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    images: Mapped[list["Image"]] = relationship("Image", cascade="all")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"


class Brand(Base):
    """Product brand owned by a store."""

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    store_id: Mapped[str] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )

    images: Mapped[list["Image"]] = relationship("Image", cascade="all")


# ============================================================================
# Products
# ============================================================================


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        name: Product name.
        description: Product description.
        sku: Stock Keeping Unit (unique across the catalog).
        manufacturer: Manufacturer name.
        base_price: Base price in cents.
        category_id: Owning category, if any.
        brand_id: Brand, if any.
        sale_id: Attached sale, if any.
        discount_id: Attached discount, if any.
        collection_id: Collection the product is featured in, if any.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sku: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    base_price: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)  # in cents
    category_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    brand_id: Mapped[str | None] = mapped_column(
        ForeignKey("brands.id", ondelete="SET NULL"), nullable=True
    )
    sale_id: Mapped[str | None] = mapped_column(
        ForeignKey("sales.id", ondelete="SET NULL"), nullable=True
    )
    discount_id: Mapped[str | None] = mapped_column(
        ForeignKey("discounts.id", ondelete="SET NULL"), nullable=True
    )
    collection_id: Mapped[str | None] = mapped_column(
        ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    # Relationships
    images: Mapped[list["Image"]] = relationship("Image", cascade="all")
    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
    )
    category: Mapped["Category"] = relationship("Category")
    brand: Mapped["Brand"] = relationship("Brand")
    sale = relationship("Sale")
    discount = relationship("Discount")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, sku={self.sku}, name={self.name[:30]}...)>"

    def is_new(self, now: datetime, days: int = 3) -> bool:
        """Check whether the product was created within the last ``days``.

        Args:
            now: Reference time (timezone-aware).
            days: Window length in days.

        Returns:
            True if ``created_at`` falls inside the window.
        """
        created_at = self.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return now - created_at <= timedelta(days=days)

    def image_keys(self) -> list[str]:
        """Storage keys of the product's images and its variants' images."""
        keys = [image.key for image in self.images]
        for variant in self.variants:
            keys.extend(image.key for image in variant.images)
        return keys


class ProductVariant(Base):
    """Product variant (e.g., size, color combinations).

    Attributes:
        id: Unique variant identifier.
        product_id: Parent product ID.
        name: Variant name.
        sku: Variant-specific SKU.
        price: Variant price in cents.
        stock: Units in stock.
    """

    __tablename__ = "product_variants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str | None] = mapped_column(String(100), nullable=True)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)  # in cents
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sale_id: Mapped[str | None] = mapped_column(
        ForeignKey("sales.id", ondelete="SET NULL"), nullable=True
    )
    discount_id: Mapped[str | None] = mapped_column(
        ForeignKey("discounts.id", ondelete="SET NULL"), nullable=True
    )
    collection_id: Mapped[str | None] = mapped_column(
        ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="variants")
    attributes: Mapped[list["VariantAttribute"]] = relationship(
        "VariantAttribute",
        back_populates="variant",
        cascade="all, delete-orphan",
        order_by="VariantAttribute.position",
    )
    images: Mapped[list["Image"]] = relationship("Image", cascade="all")

    def __repr__(self) -> str:
        return f"<ProductVariant(id={self.id}, name={self.name})>"

    @property
    def value(self) -> str:
        """Attribute values joined for display, e.g. "Red, XL"."""
        return ", ".join(a.value for a in self.attributes)


class VariantAttribute(Base):
    """A single name/value option of a variant (e.g., Color: Red)."""

    __tablename__ = "variant_attributes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    variant_id: Mapped[str] = mapped_column(
        ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    variant: Mapped["ProductVariant"] = relationship(
        "ProductVariant", back_populates="attributes"
    )
