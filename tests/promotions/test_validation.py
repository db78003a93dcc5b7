"""Tests for promotional submission checks."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.promotions.validation import (
    DiscountType,
    validate_discount,
    validate_sale,
    validate_window,
)

START = datetime(2025, 6, 1, tzinfo=timezone.utc)
END = START + timedelta(days=7)


def _discount(**overrides):
    values = {
        "start_date": START,
        "end_date": END,
        "discount_type": DiscountType.PERCENTAGE,
        "value": 20,
    }
    values.update(overrides)
    validate_discount(**values)


def _sale(**overrides):
    values = {
        "start_date": START,
        "end_date": END,
        "discount_type": DiscountType.PERCENTAGE,
        "discount_value": 20,
    }
    values.update(overrides)
    validate_sale(**values)


class TestValidateWindow:
    """Tests for start/end ordering."""

    def test_same_instant_allowed(self) -> None:
        validate_window(START, START)

    def test_end_before_start(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_window(END, START)
        assert list(exc_info.value.field_errors) == ["end_date"]


class TestValidateDiscount:
    """Tests for discount rules."""

    def test_valid(self) -> None:
        _discount(code="SUMMER-25", min_purchase=0, max_uses=10)

    def test_percentage_over_hundred(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _discount(value=150)
        assert "value" in exc_info.value.field_errors

    def test_percentage_hundred_allowed(self) -> None:
        _discount(value=100)

    def test_zero_value(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _discount(value=0)
        assert "value" in exc_info.value.field_errors

    def test_fixed_limit(self) -> None:
        _discount(discount_type=DiscountType.FIXED, value=1_000_000)
        with pytest.raises(ValidationError):
            _discount(discount_type=DiscountType.FIXED, value=1_000_001)

    @pytest.mark.parametrize("code", ["abc1", "AB", "THIS-CODE-IS-TOO-LONG", "SPACE CODE"])
    def test_bad_codes(self, code: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _discount(code=code)
        assert "code" in exc_info.value.field_errors

    def test_collects_every_error(self) -> None:
        """All violations are reported together."""
        with pytest.raises(ValidationError) as exc_info:
            _discount(end_date=START - timedelta(days=1), value=-5, max_uses=0, min_purchase=-1)
        assert set(exc_info.value.field_errors) == {"end_date", "value", "max_uses", "min_purchase"}


class TestValidateSale:
    """Tests for sale rules."""

    def test_valid(self) -> None:
        _sale()

    def test_zero_allowed(self) -> None:
        _sale(discount_value=0)

    def test_negative(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _sale(discount_value=-1)
        assert "discount_value" in exc_info.value.field_errors

    def test_percentage_limit(self) -> None:
        with pytest.raises(ValidationError):
            _sale(discount_value=101)

    def test_fixed_limit(self) -> None:
        _sale(discount_type=DiscountType.FIXED, discount_value=10_000)
        with pytest.raises(ValidationError):
            _sale(discount_type=DiscountType.FIXED, discount_value=10_001)
