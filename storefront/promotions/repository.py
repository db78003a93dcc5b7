"""Repositories for promotional entities and banners."""

from collections.abc import Sequence
from typing import Generic, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.models import Category, Product, ProductVariant
from storefront.promotions.models import Banner, Collection, Discount, Sale
from storefront.promotions.status import PromotionStatus

P = TypeVar("P", Collection, Discount, Sale)

# Columns that point at a promotion, by promotion model
_REFERENCING_COLUMNS = {
    Collection: "collection_id",
    Discount: "discount_id",
    Sale: "sale_id",
}


class PromotionRepository(Generic[P]):
    """Repository for one promotional model (Collection, Discount or Sale).

    Example usage:
        repo = PromotionRepository(session, Discount)
        active = await repo.list_all(status=PromotionStatus.ACTIVE)
    """

    def __init__(self, session: AsyncSession, model: type[P]) -> None:
        """Initialize repository.

        Args:
            session: Async SQLAlchemy session.
            model: Promotional model class.
        """
        self.session = session
        self.model = model

    def _options(self) -> list:
        if self.model is Collection:
            return [selectinload(Collection.images)]
        return []

    async def save(self, entity: P) -> P:
        """Save a promotional entity."""
        self.session.add(entity)
        await self.session.flush()
        if self.model is Collection:
            await self.session.refresh(entity, attribute_names=["images"])
        return entity

    async def get_by_id(self, entity_id: str) -> P | None:
        """Get entity by ID, or None."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == entity_id).options(*self._options())
        )
        return result.scalar_one_or_none()

    async def list_all(
        self,
        store_id: str | None = None,
        status: PromotionStatus | None = None,
    ) -> Sequence[P]:
        """List entities, soonest start first.

        Args:
            store_id: Restrict to one store.
            status: Restrict to one status.

        Returns:
            Matching entities.
        """
        query = select(self.model).options(*self._options())
        if store_id is not None:
            query = query.where(self.model.store_id == store_id)
        if status is not None:
            query = query.where(self.model.status == status.value)
        query = query.order_by(self.model.start_date, self.model.name)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, entity: P) -> None:
        """Delete an entity, detaching every row that references it."""
        column = _REFERENCING_COLUMNS[self.model]
        for referencing in (Category, Product, ProductVariant, Banner):
            await self.session.execute(
                update(referencing)
                .where(getattr(referencing, column) == entity.id)
                .values({column: None})
            )
        await self.session.delete(entity)
        await self.session.flush()


class BannerRepository:
    """Repository for Banner database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, banner: Banner) -> Banner:
        self.session.add(banner)
        await self.session.flush()
        await self.session.refresh(banner, attribute_names=["images"])
        return banner

    async def get_by_id(self, banner_id: str) -> Banner | None:
        result = await self.session.execute(
            select(Banner).where(Banner.id == banner_id).options(selectinload(Banner.images))
        )
        return result.scalar_one_or_none()

    async def list_all(self, store_id: str | None = None) -> Sequence[Banner]:
        query = select(Banner).options(selectinload(Banner.images)).order_by(Banner.created_at)
        if store_id is not None:
            query = query.where(Banner.store_id == store_id)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, banner: Banner) -> None:
        await self.session.delete(banner)
        await self.session.flush()
