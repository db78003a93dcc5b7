"""SQLAlchemy models for promotional entities.

Collections, discounts and sales share a status and a validity window;
banners point at any of them to feature it on the storefront home page.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base
from storefront.promotions.status import PromotionStatus


def _uuid() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PromotionalMixin:
    """Columns shared by Collection, Discount and Sale.

    Attributes:
        status: One of PromotionStatus values.
        start_date: Start of the validity window.
        end_date: End of the validity window (never before start_date).
        store_id: Owning store.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PromotionStatus.INACTIVE.value, index=True
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    store_id: Mapped[str] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )


class Collection(PromotionalMixin, Base):
    """Curated group of products featured together."""

    __tablename__ = "collections"

    images: Mapped[list["Image"]] = relationship("Image", cascade="all")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, status={self.status})>"


class Discount(PromotionalMixin, Base):
    """Discount, optionally redeemable by code.

    ``value`` is a percentage for PERCENTAGE discounts and an amount in
    cents for FIXED ones.
    """

    __tablename__ = "discounts"

    code: Mapped[str | None] = mapped_column(String(16), nullable=True, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    value: Mapped[int] = mapped_column(Integer, nullable=False)
    min_purchase: Mapped[int | None] = mapped_column(Integer, nullable=True)  # in cents
    max_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Discount(id={self.id}, type={self.type}, value={self.value})>"


class Sale(PromotionalMixin, Base):
    """Time-boxed sale applied to categories, products or variants."""

    __tablename__ = "sales"

    discount_type: Mapped[str] = mapped_column(String(20), nullable=False)
    discount_value: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Sale(id={self.id}, status={self.status})>"


class Banner(Base):
    """Home page banner linking to a promotion or category."""

    __tablename__ = "banners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    button_text: Mapped[str | None] = mapped_column(String(100), nullable=True)
    button_link: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    store_id: Mapped[str] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    collection_id: Mapped[str | None] = mapped_column(
        ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )
    discount_id: Mapped[str | None] = mapped_column(
        ForeignKey("discounts.id", ondelete="SET NULL"), nullable=True
    )
    sale_id: Mapped[str | None] = mapped_column(
        ForeignKey("sales.id", ondelete="SET NULL"), nullable=True
    )
    category_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    images: Mapped[list["Image"]] = relationship("Image", cascade="all")  # noqa: F821
