"""Catalog application service.

Orchestrates catalog management and browsing:
- Categories (CRUD, tree view, subtree expansion for search)
- Products with their variants, attributes and images
- Brands
- Storefront product filtering and search
"""

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.store_service import build_images, ensure_store_owner
from storefront.catalog.filters import ProductFilterSpec
from storefront.catalog.hierarchy import (
    CategoryNode,
    CategoryRecord,
    CategoryTree,
    build_category_tree,
    expand_descendant_ids,
)
from storefront.catalog.models import (
    Brand,
    Category,
    Product,
    ProductVariant,
    VariantAttribute,
)
from storefront.catalog.repository import (
    BrandRepository,
    CategoryRepository,
    ProductRepository,
    VariantRepository,
)
from storefront.domain.exceptions import (
    DuplicateSkuError,
    NotFoundError,
    ProductRetrievalError,
    ValidationError,
)
from storefront.infrastructure.file_storage import FileStorageClient
from storefront.promotions.models import Collection, Discount, Sale

logger = structlog.get_logger()

# Search value meaning "no category restriction"
ALL_CATEGORIES = "all"

# Association columns: an empty string in an update clears them
_REFERENCES: dict[str, tuple[type, str]] = {
    "category_id": (Category, "Category"),
    "brand_id": (Brand, "Brand"),
    "sale_id": (Sale, "Sale"),
    "discount_id": (Discount, "Discount"),
    "collection_id": (Collection, "Collection"),
}

_PRODUCT_REQUIRED = {"name", "sku", "base_price"}
_VARIANT_REQUIRED = {"name", "price", "stock"}


def _blank_to_none(fields: dict[str, Any], names: Sequence[str]) -> None:
    for name in names:
        if fields.get(name) == "":
            fields[name] = None


def _build_attributes(attributes: list[dict[str, Any]] | None) -> list[VariantAttribute]:
    return [
        VariantAttribute(name=attr["name"], value=attr["value"], position=position)
        for position, attr in enumerate(attributes or [])
    ]


def _build_variant(data: dict[str, Any]) -> ProductVariant:
    return ProductVariant(
        name=data["name"],
        sku=data.get("sku"),
        price=data.get("price", 0),
        stock=data.get("stock", 0),
        description=data.get("description"),
        sale_id=data.get("sale_id") or None,
        discount_id=data.get("discount_id") or None,
        collection_id=data.get("collection_id") or None,
        attributes=_build_attributes(data.get("attributes")),
        images=build_images(data.get("images")),
    )


class CatalogService:
    """Service for catalog management and storefront browsing.

    The database session and the file storage client are passed in, so a
    service instance lives exactly as long as one request.
    """

    def __init__(self, session: AsyncSession, file_storage: FileStorageClient) -> None:
        """Initialize catalog service.

        Args:
            session: Database session.
            file_storage: File storage client for image cleanup.
        """
        self.session = session
        self.file_storage = file_storage
        self.categories = CategoryRepository(session)
        self.brands = BrandRepository(session)
        self.products = ProductRepository(session)
        self.variants = VariantRepository(session)

    async def _check_references(self, fields: dict[str, Any]) -> None:
        """Raise NotFoundError for any association ID that does not exist."""
        for name, (model, entity_type) in _REFERENCES.items():
            value = fields.get(name)
            if value and await self.session.get(model, value) is None:
                raise NotFoundError(entity_type, value)

    # ========================================================================
    # Categories
    # ========================================================================

    async def create_category(self, user_id: str, data: dict[str, Any]) -> Category:
        """Create a category in a store owned by ``user_id``.

        Args:
            user_id: Session user.
            data: Validated category fields.

        Returns:
            Created category.
        """
        await ensure_store_owner(self.session, data["store_id"], user_id)

        parent_id = data.get("parent_category_id") or None
        if parent_id and await self.categories.get_by_id(parent_id) is None:
            raise NotFoundError("Category", parent_id)
        await self._check_references(data)

        category = Category(
            name=data["name"],
            description=data.get("description"),
            store_id=data["store_id"],
            parent_category_id=parent_id,
            sale_id=data.get("sale_id") or None,
            discount_id=data.get("discount_id") or None,
            collection_id=data.get("collection_id") or None,
            images=build_images(data.get("images")),
        )
        category = await self.categories.save(category)
        logger.info(
            "Category created",
            category_id=category.id,
            store_id=category.store_id,
            parent_category_id=parent_id,
        )
        return category

    async def get_category(self, category_id: str) -> Category:
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def list_categories(self, store_id: str | None = None) -> Sequence[Category]:
        return await self.categories.list_all(store_id=store_id)

    async def category_tree(self, store_id: str | None = None) -> list[CategoryNode]:
        """Get the category forest of a store (or of the whole catalog)."""
        categories = await self.categories.list_all(store_id=store_id)
        return build_category_tree(CategoryRecord.from_model(c) for c in categories)

    async def update_category(
        self,
        category_id: str,
        user_id: str,
        fields: dict[str, Any],
    ) -> Category:
        """Update a category.

        Args:
            category_id: Category to update.
            user_id: Session user; must own the category's store.
            fields: Fields present in the request; images are appended.

        Returns:
            Updated category.

        Raises:
            ValidationError: If the new parent is the category itself or one
                of its descendants.
        """
        category = await self.get_category(category_id)
        await ensure_store_owner(self.session, category.store_id, user_id)

        fields = dict(fields)
        images = fields.pop("images", None)
        _blank_to_none(fields, ["parent_category_id", "sale_id", "discount_id", "collection_id"])

        parent_id = fields.get("parent_category_id")
        if parent_id:
            if await self.categories.get_by_id(parent_id) is None:
                raise NotFoundError("Category", parent_id)
            records = [CategoryRecord.from_model(c) for c in await self.categories.list_all()]
            if parent_id in CategoryTree(records).descendant_ids(category_id):
                raise ValidationError(
                    {"parent_category_id": "A category cannot be placed under itself"}
                )
        await self._check_references(fields)

        for name, value in fields.items():
            if name == "name" and value is None:
                continue
            setattr(category, name, value)
        category.images.extend(build_images(images))

        category = await self.categories.save(category)
        logger.info("Category updated", category_id=category_id, fields=sorted(fields))
        return category

    async def delete_category(self, category_id: str, user_id: str) -> None:
        """Delete a category.

        Image keys are forwarded to file storage first. Products in the
        category are detached and its children become roots.
        """
        category = await self.get_category(category_id)
        await ensure_store_owner(self.session, category.store_id, user_id)

        await self.file_storage.delete_files([image.key for image in category.images])
        await self.categories.delete(category)
        logger.info("Category deleted", category_id=category_id)

    # ========================================================================
    # Brands
    # ========================================================================

    async def create_brand(self, user_id: str, data: dict[str, Any]) -> Brand:
        await ensure_store_owner(self.session, data["store_id"], user_id)
        brand = Brand(
            name=data["name"],
            description=data.get("description"),
            store_id=data["store_id"],
            images=build_images(data.get("images")),
        )
        brand = await self.brands.save(brand)
        logger.info("Brand created", brand_id=brand.id, store_id=brand.store_id)
        return brand

    async def list_brands(self, store_id: str | None = None) -> Sequence[Brand]:
        return await self.brands.list_all(store_id=store_id)

    async def delete_brand(self, brand_id: str, user_id: str) -> None:
        brand = await self.brands.get_by_id(brand_id)
        if brand is None:
            raise NotFoundError("Brand", brand_id)
        await ensure_store_owner(self.session, brand.store_id, user_id)

        await self.file_storage.delete_files([image.key for image in brand.images])
        await self.brands.delete(brand)
        logger.info("Brand deleted", brand_id=brand_id)

    # ========================================================================
    # Products
    # ========================================================================

    async def create_product(self, data: dict[str, Any]) -> Product:
        """Create a product with its images, variants and variant attributes.

        Everything is flushed together; a failure leaves nothing behind.

        Args:
            data: Validated product fields.

        Returns:
            Created product with relationships loaded.

        Raises:
            DuplicateSkuError: If the SKU is already taken.
            NotFoundError: If an association ID does not exist.
        """
        sku = data["sku"]
        if await self.products.get_by_sku(sku) is not None:
            raise DuplicateSkuError(sku)
        await self._check_references(data)
        for variant in data.get("variants") or []:
            await self._check_references(variant)

        product = Product(
            name=data["name"],
            description=data.get("description"),
            sku=sku,
            manufacturer=data.get("manufacturer"),
            base_price=data["base_price"],
            category_id=data.get("category_id") or None,
            brand_id=data.get("brand_id") or None,
            sale_id=data.get("sale_id") or None,
            discount_id=data.get("discount_id") or None,
            collection_id=data.get("collection_id") or None,
            images=build_images(data.get("images")),
            variants=[_build_variant(v) for v in data.get("variants") or []],
        )

        try:
            product = await self.products.save(product)
        except IntegrityError as e:
            raise DuplicateSkuError(sku) from e

        logger.info(
            "Product created",
            product_id=product.id,
            sku=sku,
            variant_count=len(product.variants),
        )
        return product

    async def get_product(self, product_id: str) -> Product:
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def list_products(self, store_id: str | None = None) -> Sequence[Product]:
        return await self.products.list_all(store_id=store_id)

    async def update_product(self, product_id: str, fields: dict[str, Any]) -> Product:
        """Update a product.

        Args:
            product_id: Product to update.
            fields: Fields present in the request. Empty association IDs
                clear the association; images and variants are appended.

        Returns:
            Updated product.
        """
        product = await self.get_product(product_id)

        fields = dict(fields)
        images = fields.pop("images", None)
        variants = fields.pop("variants", None) or []
        _blank_to_none(fields, list(_REFERENCES))

        sku = fields.get("sku")
        if sku and sku != product.sku and await self.products.get_by_sku(sku) is not None:
            raise DuplicateSkuError(sku)
        await self._check_references(fields)
        for variant in variants:
            await self._check_references(variant)

        for name, value in fields.items():
            if name in _PRODUCT_REQUIRED and value is None:
                continue
            setattr(product, name, value)
        product.images.extend(build_images(images))
        product.variants.extend(_build_variant(v) for v in variants)

        try:
            product = await self.products.save(product)
        except IntegrityError as e:
            raise DuplicateSkuError(sku or product.sku) from e

        logger.info("Product updated", product_id=product_id, fields=sorted(fields))
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product with its variants, attributes and images.

        The image keys of the product and all its variants are forwarded
        to file storage before the rows are removed.
        """
        product = await self.get_product(product_id)
        keys = product.image_keys()
        await self.file_storage.delete_files(keys)
        await self.products.delete(product)
        logger.info("Product deleted", product_id=product_id, image_count=len(keys))

    # ========================================================================
    # Variants
    # ========================================================================

    async def create_variant(self, data: dict[str, Any]) -> ProductVariant:
        """Add a variant to an existing product."""
        product_id = data["product_id"]
        if await self.session.get(Product, product_id) is None:
            raise NotFoundError("Product", product_id)
        await self._check_references(data)

        variant = _build_variant(data)
        variant.product_id = product_id
        variant = await self.variants.save(variant)
        logger.info("Variant created", variant_id=variant.id, product_id=product_id)
        return variant

    async def get_variant(self, variant_id: str) -> ProductVariant:
        variant = await self.variants.get_by_id(variant_id)
        if variant is None:
            raise NotFoundError("Variant", variant_id)
        return variant

    async def update_variant(self, variant_id: str, fields: dict[str, Any]) -> ProductVariant:
        """Update a variant.

        Given attributes replace the existing ones; images are appended.
        """
        variant = await self.get_variant(variant_id)

        fields = dict(fields)
        images = fields.pop("images", None)
        attributes = fields.pop("attributes", None)
        _blank_to_none(fields, ["sale_id", "discount_id", "collection_id"])
        await self._check_references(fields)

        for name, value in fields.items():
            if name in _VARIANT_REQUIRED and value is None:
                continue
            setattr(variant, name, value)
        if attributes is not None:
            variant.attributes = _build_attributes(attributes)
        variant.images.extend(build_images(images))

        variant = await self.variants.save(variant)
        logger.info("Variant updated", variant_id=variant_id, fields=sorted(fields))
        return variant

    async def delete_variant(self, variant_id: str) -> None:
        variant = await self.get_variant(variant_id)
        await self.file_storage.delete_files([image.key for image in variant.images])
        await self.variants.delete(variant)
        logger.info("Variant deleted", variant_id=variant_id)

    # ========================================================================
    # Storefront Browsing
    # ========================================================================

    async def filter_products(self, spec: ProductFilterSpec) -> Sequence[Product]:
        """Find products matching a storefront filter.

        Args:
            spec: Validated filter.

        Returns:
            Matching products.

        Raises:
            ProductRetrievalError: If the query fails. No partial result.
        """
        try:
            return await self.products.filter(spec)
        except SQLAlchemyError as e:
            logger.error(
                "Product filter query failed",
                categories=list(spec.categories),
                variants=list(spec.variants),
                error=str(e),
            )
            raise ProductRetrievalError() from e

    async def search_products(
        self,
        name: str,
        category_id: str | None = None,
    ) -> Sequence[Product]:
        """Search products by name, optionally within a category subtree.

        Args:
            name: Case-insensitive name substring.
            category_id: Category whose whole subtree is searched; None or
                "all" searches every category.

        Returns:
            Matching products.
        """
        category_ids: set[str] | None = None
        if category_id and category_id != ALL_CATEGORIES:
            categories = await self.categories.list_all()
            category_ids = expand_descendant_ids(
                (CategoryRecord.from_model(c) for c in categories),
                category_id,
            )
        return await self.products.search(name, category_ids)
