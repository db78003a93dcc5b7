"""Tests for product filter validation."""

import pytest
from sqlalchemy import BigInteger

from storefront.catalog.filters import MAX_PRICE, ProductFilterSpec, build_product_conditions
from storefront.catalog.models import Product, ProductVariant
from storefront.domain.exceptions import ValidationError


class TestProductFilterSpec:
    """Tests for ProductFilterSpec."""

    def test_defaults(self) -> None:
        """An empty filter covers every price."""
        spec = ProductFilterSpec()
        assert spec.min_price == 0
        assert spec.max_price == MAX_PRICE
        assert spec.categories == ()
        assert spec.variants == ()

    def test_lists_become_tuples(self) -> None:
        spec = ProductFilterSpec(categories=["a", "b"], variants=["v"])
        assert spec.categories == ("a", "b")
        assert spec.variants == ("v",)

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProductFilterSpec(min_price=-1)
        assert "min_price" in exc_info.value.field_errors

    def test_min_above_max_rejected(self) -> None:
        """An inverted price range is an error, not an empty result."""
        with pytest.raises(ValidationError) as exc_info:
            ProductFilterSpec(min_price=500, max_price=100)
        assert exc_info.value.field_errors == {
            "min_price": "Minimum price cannot exceed maximum price"
        }

    def test_price_above_max_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProductFilterSpec(max_price=MAX_PRICE + 1)
        assert list(exc_info.value.field_errors) == ["max_price"]

    def test_equal_bounds_allowed(self) -> None:
        spec = ProductFilterSpec(min_price=100, max_price=100)
        assert spec.min_price == spec.max_price


class TestBuildProductConditions:
    """Tests for condition assembly."""

    def test_price_only_by_default(self) -> None:
        """Without facets only the two price bounds apply."""
        assert len(build_product_conditions(ProductFilterSpec())) == 2

    def test_each_facet_adds_condition(self) -> None:
        spec = ProductFilterSpec(
            categories=["c"],
            variants=["v"],
            on_sale=True,
            on_discount=True,
        )
        assert len(build_product_conditions(spec)) == 6


class TestPriceColumns:
    """Price columns must hold every value the filter can bind."""

    @pytest.mark.parametrize(
        "column",
        [Product.__table__.c.base_price, ProductVariant.__table__.c.price],
    )
    def test_price_columns_are_64_bit(self, column) -> None:
        assert isinstance(column.type, BigInteger)
        assert MAX_PRICE <= 2**63 - 1
