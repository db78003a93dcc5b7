"""Store repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.infrastructure.models import Store


class StoreRepository:
    """Repository for Store database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, store: Store) -> Store:
        """Save a store and load its images."""
        self.session.add(store)
        await self.session.flush()
        await self.session.refresh(store, attribute_names=["images"])
        return store

    async def get_by_id(self, store_id: str) -> Store | None:
        """Get store by ID, or None."""
        result = await self.session.execute(
            select(Store).where(Store.id == store_id).options(selectinload(Store.images))
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: str) -> Sequence[Store]:
        """List stores owned by a user, oldest first."""
        result = await self.session.execute(
            select(Store)
            .where(Store.user_id == user_id)
            .options(selectinload(Store.images))
            .order_by(Store.created_at)
        )
        return result.scalars().all()

    async def delete(self, store: Store) -> None:
        await self.session.delete(store)
        await self.session.flush()
