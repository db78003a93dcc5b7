#!/usr/bin/env python3
"""Seed a demo store.

Creates a store for a user, a category tree from an embedded taxonomy,
and a few deterministic products in every leaf category.

Usage:
    python scripts/seed_catalog.py --user-id user-1
    python scripts/seed_catalog.py --user-id user-1 --products-per-leaf 5
"""

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront.catalog.hierarchy import CategoryTree, parse_taxonomy
from storefront.catalog.models import Category, Image, Product, ProductVariant, VariantAttribute
from storefront.infrastructure.database import Base, async_session_factory, engine
from storefront.infrastructure.models import Store

EMBEDDED_TAXONOMY = '''
222 - Apparel & Accessories
1604 - Apparel & Accessories > Clothing
5322 - Apparel & Accessories > Clothing > Shirts & Tops
1581 - Apparel & Accessories > Clothing > Pants
1594 - Apparel & Accessories > Clothing > Outerwear
167 - Apparel & Accessories > Shoes
537 - Electronics
264 - Electronics > Audio
3622 - Electronics > Audio > Headphones
505766 - Electronics > Audio > Speakers
543 - Electronics > Computers
328 - Electronics > Computers > Laptops
1928 - Electronics > Computers > Tablets
436 - Furniture
443 - Furniture > Chairs
442 - Furniture > Tables
783 - Sporting Goods
499844 - Sporting Goods > Exercise & Fitness
1011 - Sporting Goods > Outdoor Recreation
'''.strip()

SIZES = ["S", "M", "L", "XL"]
COLORS = ["Black", "White", "Navy", "Red"]


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_store(user_id: str, products_per_leaf: int, seed: int) -> dict:
    """Seed one store with categories and products.

    Args:
        user_id: Owner of the new store.
        products_per_leaf: Products created in every leaf category.
        seed: Random seed for prices and stock.

    Returns:
        Seeding result counts.
    """
    rng = random.Random(seed)
    records = parse_taxonomy(EMBEDDED_TAXONOMY.splitlines())
    tree = CategoryTree(records)

    async with async_session_factory() as session:
        store = Store(name="Demo Store", description="Seeded demo store", user_id=user_id)
        session.add(store)
        await session.flush()

        # Parents come before children in the taxonomy
        category_ids: dict[str, str] = {}
        categories: list[Category] = []
        for record in records:
            category = Category(
                name=record.name,
                description=f"Everything in {record.name}",
                store_id=store.id,
                parent_category_id=category_ids.get(record.parent_category_id or ""),
            )
            session.add(category)
            await session.flush()
            category_ids[record.id] = category.id
            categories.append(category)

        product_count = 0
        variant_count = 0
        for record in records:
            if tree.children_of(record.id):
                continue
            for n in range(products_per_leaf):
                sku = f"{record.id}-{n + 1:03d}"
                variants = [
                    ProductVariant(
                        name=f"{color} / {size}",
                        sku=f"{sku}-{color[:3].upper()}-{size}",
                        price=0,
                        stock=rng.randint(0, 50),
                        attributes=[
                            VariantAttribute(name="Color", value=color, position=0),
                            VariantAttribute(name="Size", value=size, position=1),
                        ],
                    )
                    for color in rng.sample(COLORS, 2)
                    for size in rng.sample(SIZES, 2)
                ]
                product = Product(
                    name=f"{record.name} #{n + 1}",
                    description=f"Demo product in {record.name}",
                    sku=sku,
                    manufacturer="Demo Manufacturing",
                    base_price=rng.randint(5, 500) * 100,
                    category_id=category_ids[record.id],
                    images=[Image(url=f"https://example.com/{sku}.png", key=f"{sku}.png")],
                    variants=variants,
                )
                session.add(product)
                product_count += 1
                variant_count += len(variants)

        await session.commit()

    return {
        "store_id": store.id,
        "categories_created": len(categories),
        "root_categories": len(tree.roots()),
        "products_created": product_count,
        "variants_created": variant_count,
    }


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed a demo storefront")
    parser.add_argument("--user-id", required=True, help="Owner of the seeded store")
    parser.add_argument(
        "--products-per-leaf",
        type=int,
        default=3,
        help="Products per leaf category (default: 3)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    print("=" * 60)
    print("Storefront Demo Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result = await seed_store(args.user_id, args.products_per_leaf, args.seed)

    print(f"  ✓ Store: {result['store_id']}")
    print(f"  ✓ Categories: {result['categories_created']} ({result['root_categories']} roots)")
    print(f"  ✓ Products: {result['products_created']}")
    print(f"  ✓ Variants: {result['variants_created']}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
