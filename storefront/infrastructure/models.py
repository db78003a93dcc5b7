"""SQLAlchemy models for tenancy.

A Store is the tenant boundary: every catalog and promotional row
belongs to exactly one store, and a store belongs to one user.

Importing this module registers every table on ``Base.metadata``.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.catalog.models import Image
from storefront.infrastructure.database import Base
from storefront.promotions import models as promotion_models  # noqa: F401


class Store(Base):
    """Store owned by a single user."""

    __tablename__ = "stores"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    images: Mapped[list[Image]] = relationship(Image, cascade="all")

    def __repr__(self) -> str:
        return f"<Store(id={self.id}, name={self.name})>"
