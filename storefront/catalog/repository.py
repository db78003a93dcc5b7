"""Catalog repositories for database operations.

Provides CRUD operations for categories, brands, products, variants and
images. Product queries always eager-load the relationships the API
renders, so no lazy load ever happens on an async session.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.filters import ProductFilterSpec, build_product_conditions
from storefront.catalog.models import (
    Brand,
    Category,
    Image,
    Product,
    ProductVariant,
)


def _product_load_options() -> list:
    return [
        selectinload(Product.images),
        selectinload(Product.variants).selectinload(ProductVariant.attributes),
        selectinload(Product.variants).selectinload(ProductVariant.images),
        selectinload(Product.category),
        selectinload(Product.brand),
        selectinload(Product.sale),
        selectinload(Product.discount),
    ]


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, category: Category) -> Category:
        """Save a category and load its images."""
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category, attribute_names=["images"])
        return category

    async def get_by_id(self, category_id: str) -> Category | None:
        """Get category by ID with images."""
        result = await self.session.execute(
            select(Category)
            .where(Category.id == category_id)
            .options(selectinload(Category.images))
        )
        return result.scalar_one_or_none()

    async def list_all(self, store_id: str | None = None) -> Sequence[Category]:
        """List categories in creation order.

        Args:
            store_id: Restrict to one store.

        Returns:
            Categories with images loaded.
        """
        query = select(Category).options(selectinload(Category.images))
        if store_id is not None:
            query = query.where(Category.store_id == store_id)
        query = query.order_by(Category.created_at, Category.name)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, category: Category) -> None:
        """Delete a category.

        Products in the category are detached and direct children become
        roots before the row is removed.
        """
        await self.session.execute(
            update(Product)
            .where(Product.category_id == category.id)
            .values(category_id=None)
        )
        await self.session.execute(
            update(Category)
            .where(Category.parent_category_id == category.id)
            .values(parent_category_id=None)
        )
        await self.session.delete(category)
        await self.session.flush()


class BrandRepository:
    """Repository for Brand database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, brand: Brand) -> Brand:
        self.session.add(brand)
        await self.session.flush()
        await self.session.refresh(brand, attribute_names=["images"])
        return brand

    async def get_by_id(self, brand_id: str) -> Brand | None:
        result = await self.session.execute(
            select(Brand).where(Brand.id == brand_id).options(selectinload(Brand.images))
        )
        return result.scalar_one_or_none()

    async def list_all(self, store_id: str | None = None) -> Sequence[Brand]:
        query = select(Brand).options(selectinload(Brand.images)).order_by(Brand.name)
        if store_id is not None:
            query = query.where(Brand.store_id == store_id)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, brand: Brand) -> None:
        await self.session.execute(
            update(Product).where(Product.brand_id == brand.id).values(brand_id=None)
        )
        await self.session.delete(brand)
        await self.session.flush()


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        repo = ProductRepository(session)
        products = await repo.filter(
            ProductFilterSpec(categories=("shoes",), max_price=10_000)
        )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Save a product with its variants and images.

        Args:
            product: Product to save.

        Returns:
            Saved product, reloaded with all relationships.
        """
        self.session.add(product)
        await self.session.flush()
        reloaded = await self.get_by_id(product.id, populate_existing=True)
        assert reloaded is not None
        return reloaded

    async def get_by_id(
        self,
        product_id: str,
        populate_existing: bool = False,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            populate_existing: Refresh an instance already in the session.

        Returns:
            Product if found, None otherwise.
        """
        query = (
            select(Product)
            .where(Product.id == product_id)
            .options(*_product_load_options())
        )
        if populate_existing:
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU (without relationships)."""
        result = await self.session.execute(select(Product).where(Product.sku == sku))
        return result.scalar_one_or_none()

    async def list_all(self, store_id: str | None = None) -> Sequence[Product]:
        """List products, newest first.

        Args:
            store_id: Restrict to products whose category belongs to the store.

        Returns:
            Products with relationships loaded.
        """
        query = select(Product).options(*_product_load_options())
        if store_id is not None:
            query = query.where(Product.category.has(Category.store_id == store_id))
        query = query.order_by(Product.created_at.desc(), Product.name)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def filter(self, spec: ProductFilterSpec) -> Sequence[Product]:
        """Find products matching every facet of a filter.

        Args:
            spec: Validated filter.

        Returns:
            Matching products with images, variants, category, sale and
            discount loaded.
        """
        query = (
            select(Product)
            .where(*build_product_conditions(spec))
            .options(*_product_load_options())
            .order_by(Product.created_at.desc(), Product.name)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def search(
        self,
        name: str,
        category_ids: Iterable[str] | None = None,
    ) -> Sequence[Product]:
        """Search products by name.

        Args:
            name: Case-insensitive substring of the product name.
            category_ids: Allowed category IDs; None means any category.

        Returns:
            Matching products with relationships loaded.
        """
        query = select(Product).where(Product.name.icontains(name, autoescape=True))
        if category_ids is not None:
            query = query.where(Product.category_id.in_(list(category_ids)))
        query = query.options(*_product_load_options()).order_by(Product.name)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, product: Product) -> None:
        """Delete a product with its variants, attributes and images."""
        await self.session.delete(product)
        await self.session.flush()


class VariantRepository:
    """Repository for ProductVariant database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, variant: ProductVariant) -> ProductVariant:
        self.session.add(variant)
        await self.session.flush()
        reloaded = await self.get_by_id(variant.id, populate_existing=True)
        assert reloaded is not None
        return reloaded

    async def get_by_id(
        self,
        variant_id: str,
        populate_existing: bool = False,
    ) -> ProductVariant | None:
        query = (
            select(ProductVariant)
            .where(ProductVariant.id == variant_id)
            .options(
                selectinload(ProductVariant.attributes),
                selectinload(ProductVariant.images),
            )
        )
        if populate_existing:
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def delete(self, variant: ProductVariant) -> None:
        await self.session.delete(variant)
        await self.session.flush()


class ImageRepository:
    """Repository for Image database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, image_id: str) -> Image | None:
        result = await self.session.execute(select(Image).where(Image.id == image_id))
        return result.scalar_one_or_none()

    async def delete_by_id(self, image_id: str) -> None:
        await self.session.execute(delete(Image).where(Image.id == image_id))
