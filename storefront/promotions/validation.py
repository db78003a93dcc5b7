"""Submission checks for promotional entities.

Run after date correction and before anything is written. Every
violated rule is collected so the caller sees all field errors at once.
"""

import re
from datetime import datetime
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.promotions.status import ensure_utc

DISCOUNT_CODE_PATTERN = re.compile(r"^[A-Z0-9_-]{4,16}$")
MAX_PERCENTAGE = 100
MAX_FIXED_DISCOUNT = 1_000_000
MAX_FIXED_SALE = 10_000


class DiscountType(str, Enum):
    """How a discount or sale value is applied."""

    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


def _check_window(errors: dict[str, str], start_date: datetime, end_date: datetime) -> None:
    if ensure_utc(end_date) < ensure_utc(start_date):
        errors["end_date"] = "End date must be on or after start date"


def validate_window(start_date: datetime, end_date: datetime) -> None:
    """Reject a window that ends before it starts.

    Raises:
        ValidationError: If end_date < start_date.
    """
    errors: dict[str, str] = {}
    _check_window(errors, start_date, end_date)
    if errors:
        raise ValidationError(errors)


def validate_discount(
    *,
    start_date: datetime,
    end_date: datetime,
    discount_type: DiscountType,
    value: int,
    code: str | None = None,
    min_purchase: int | None = None,
    max_uses: int | None = None,
) -> None:
    """Validate a discount submission.

    Args:
        start_date: Corrected start date.
        end_date: Corrected end date.
        discount_type: PERCENTAGE or FIXED.
        value: Percentage, or amount in cents for FIXED.
        code: Optional redemption code.
        min_purchase: Optional minimum order amount in cents.
        max_uses: Optional redemption limit.

    Raises:
        ValidationError: With one entry per offending field.
    """
    errors: dict[str, str] = {}
    _check_window(errors, start_date, end_date)

    if value <= 0:
        errors["value"] = "Value must be positive"
    elif discount_type == DiscountType.PERCENTAGE and value > MAX_PERCENTAGE:
        errors["value"] = f"Percentage discount cannot exceed {MAX_PERCENTAGE}"
    elif discount_type == DiscountType.FIXED and value > MAX_FIXED_DISCOUNT:
        errors["value"] = f"Fixed discount cannot exceed {MAX_FIXED_DISCOUNT}"

    if code is not None and not DISCOUNT_CODE_PATTERN.match(code):
        errors["code"] = "Code must be 4-16 characters of A-Z, 0-9, _ or -"

    if min_purchase is not None and min_purchase < 0:
        errors["min_purchase"] = "Minimum purchase cannot be negative"

    if max_uses is not None and max_uses <= 0:
        errors["max_uses"] = "Max uses must be positive"

    if errors:
        raise ValidationError(errors)


def validate_sale(
    *,
    start_date: datetime,
    end_date: datetime,
    discount_type: DiscountType,
    discount_value: int,
) -> None:
    """Validate a sale submission.

    Raises:
        ValidationError: With one entry per offending field.
    """
    errors: dict[str, str] = {}
    _check_window(errors, start_date, end_date)

    if discount_value < 0:
        errors["discount_value"] = "Discount value cannot be negative"
    elif discount_type == DiscountType.PERCENTAGE and discount_value > MAX_PERCENTAGE:
        errors["discount_value"] = f"Percentage discount cannot exceed {MAX_PERCENTAGE}"
    elif discount_type == DiscountType.FIXED and discount_value > MAX_FIXED_SALE:
        errors["discount_value"] = f"Fixed discount cannot exceed {MAX_FIXED_SALE}"

    if errors:
        raise ValidationError(errors)
