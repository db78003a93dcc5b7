"""Product filter engine.

Translates a storefront filter request into SQLAlchemy conditions over
the products table. Facets combine with AND:

    price      ── min_price <= base_price <= max_price (always applied)
    categories ── product in one of the categories, or in a direct
                  child of one of them
    variants   ── at least one of the product's variants is listed
    on_sale    ── product has a sale attached
    on_discount── product has a discount attached
"""

from dataclasses import dataclass

from sqlalchemy import ColumnElement, or_

from storefront.catalog.models import Category, Product, ProductVariant
from storefront.domain.exceptions import ValidationError

# Largest integer a JSON client can represent exactly
MAX_PRICE = 2**53 - 1


@dataclass(frozen=True)
class ProductFilterSpec:
    """Validated product filter.

    Attributes:
        categories: Category IDs; empty means no category restriction.
        variants: Variant IDs; empty means no variant restriction.
        min_price: Lower price bound in cents (inclusive).
        max_price: Upper price bound in cents (inclusive).
        on_sale: Only products with a sale attached.
        on_discount: Only products with a discount attached.
    """

    categories: tuple[str, ...] = ()
    variants: tuple[str, ...] = ()
    min_price: int = 0
    max_price: int = MAX_PRICE
    on_sale: bool = False
    on_discount: bool = False

    def __post_init__(self) -> None:
        # Accept any iterable of IDs, store tuples
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(self, "variants", tuple(self.variants))

        errors: dict[str, str] = {}
        if self.min_price < 0:
            errors["min_price"] = "Minimum price cannot be negative"
        if self.max_price < 0:
            errors["max_price"] = "Maximum price cannot be negative"
        if self.min_price > MAX_PRICE:
            errors["min_price"] = f"Minimum price cannot exceed {MAX_PRICE}"
        if self.max_price > MAX_PRICE:
            errors["max_price"] = f"Maximum price cannot exceed {MAX_PRICE}"
        if not errors and self.min_price > self.max_price:
            errors["min_price"] = "Minimum price cannot exceed maximum price"
        if errors:
            raise ValidationError(errors)


def build_product_conditions(spec: ProductFilterSpec) -> list[ColumnElement[bool]]:
    """Build WHERE conditions for a product filter.

    Args:
        spec: Validated filter.

    Returns:
        Conditions to AND together.
    """
    conditions: list[ColumnElement[bool]] = [
        Product.base_price >= spec.min_price,
        Product.base_price <= spec.max_price,
    ]

    if spec.categories:
        # One parent level only: grandchildren are not matched
        conditions.append(
            or_(
                Product.category_id.in_(spec.categories),
                Product.category.has(Category.parent_category_id.in_(spec.categories)),
            )
        )

    if spec.variants:
        conditions.append(Product.variants.any(ProductVariant.id.in_(spec.variants)))

    if spec.on_sale:
        conditions.append(Product.sale_id.is_not(None))

    if spec.on_discount:
        conditions.append(Product.discount_id.is_not(None))

    return conditions
