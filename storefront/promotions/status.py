"""Promotional status machine.

Collections, discounts and sales carry a status and a validity window.
The status dictates where the window may sit relative to "now":

    EXPIRED   ── window lies entirely in the past (end <= now)
    SCHEDULED ── window starts in the future (start > now)
    ACTIVE    ── window has started (start <= now)
    INACTIVE  ── no constraint

``correct_dates`` pulls submitted dates into the window the status
implies. ``start_date_bounds`` / ``end_date_bounds`` describe which dates
an editor should offer for a status. Everything here is pure: "now" is
always passed in.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

ONE_DAY = timedelta(days=1)
EXPIRED_LOOKBACK_YEARS = 10
FAR_FUTURE = datetime(2100, 1, 1, tzinfo=timezone.utc)


class PromotionStatus(str, Enum):
    """Lifecycle status of a promotional entity."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SCHEDULED = "SCHEDULED"
    EXPIRED = "EXPIRED"


class PromotionKind(str, Enum):
    """Kind of promotional entity.

    Each kind has its own default length for a freshly scheduled window.
    """

    COLLECTION = "COLLECTION"
    DISCOUNT = "DISCOUNT"
    SALE = "SALE"

    @property
    def default_duration(self) -> timedelta:
        """Window length used when a SCHEDULED start has to be moved."""
        return _DEFAULT_DURATIONS[self]


_DEFAULT_DURATIONS: dict[PromotionKind, timedelta] = {
    PromotionKind.COLLECTION: timedelta(days=7),
    PromotionKind.DISCOUNT: timedelta(days=30),
    PromotionKind.SALE: timedelta(days=7),
}


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def years_before(value: datetime, years: int) -> datetime:
    """Same calendar moment ``years`` earlier (Feb 29 falls back to Feb 28)."""
    try:
        return value.replace(year=value.year - years)
    except ValueError:
        return value.replace(year=value.year - years, day=28)


# ============================================================================
# Date Correction
# ============================================================================


def correct_dates(
    status: PromotionStatus,
    start_date: datetime,
    end_date: datetime,
    now: datetime,
    default_duration: timedelta = timedelta(days=7),
) -> tuple[datetime, datetime]:
    """Move a date pair into the window implied by ``status``.

    Rules:
        EXPIRED:   end = now; start = now if start was in the future.
        SCHEDULED: if start <= now, start = now + 1 day and
                   end = now + default_duration.
        ACTIVE:    start = now if start was in the future.
        INACTIVE:  unchanged.

    Args:
        status: Target status.
        start_date: Submitted start.
        end_date: Submitted end.
        now: Reference time.
        default_duration: Window length for a rescheduled window.

    Returns:
        Corrected (start_date, end_date).
    """
    start_date = ensure_utc(start_date)
    end_date = ensure_utc(end_date)
    now = ensure_utc(now)

    if status == PromotionStatus.EXPIRED:
        end_date = now
        if start_date > now:
            start_date = now
    elif status == PromotionStatus.SCHEDULED:
        if start_date <= now:
            start_date = now + ONE_DAY
            end_date = now + default_duration
    elif status == PromotionStatus.ACTIVE:
        if start_date > now:
            start_date = now

    return start_date, end_date


# ============================================================================
# Selectable Date Bounds
# ============================================================================


@dataclass(frozen=True)
class DateBounds:
    """Interval of selectable dates. ``None`` means unbounded on that side."""

    earliest: datetime | None = None
    latest: datetime | None = None
    earliest_inclusive: bool = True
    latest_inclusive: bool = True

    def contains(self, value: datetime) -> bool:
        """Check whether ``value`` is selectable.

        Args:
            value: Date to check (naive dates are read as UTC).

        Returns:
            True if the date lies inside the bounds.
        """
        value = ensure_utc(value)
        if self.earliest is not None:
            if value < self.earliest or (value == self.earliest and not self.earliest_inclusive):
                return False
        if self.latest is not None:
            if value > self.latest or (value == self.latest and not self.latest_inclusive):
                return False
        return True


def start_date_bounds(status: PromotionStatus, now: datetime) -> DateBounds:
    """Selectable start dates for a status.

    Args:
        status: Entity status.
        now: Reference time.

    Returns:
        Bounds for the start date.
    """
    now = ensure_utc(now)

    if status == PromotionStatus.EXPIRED:
        return DateBounds(earliest=years_before(now, EXPIRED_LOOKBACK_YEARS), latest=now)
    if status == PromotionStatus.SCHEDULED:
        return DateBounds(earliest=now, earliest_inclusive=False)
    if status == PromotionStatus.ACTIVE:
        return DateBounds(latest=now)
    return DateBounds(latest=FAR_FUTURE)


def end_date_bounds(
    status: PromotionStatus,
    start_date: datetime,
    now: datetime,
) -> DateBounds:
    """Selectable end dates for a status and chosen start date.

    Args:
        status: Entity status.
        start_date: Currently chosen start date.
        now: Reference time.

    Returns:
        Bounds for the end date.
    """
    start_date = ensure_utc(start_date)
    now = ensure_utc(now)

    if status == PromotionStatus.EXPIRED:
        return DateBounds(earliest=years_before(now, EXPIRED_LOOKBACK_YEARS), latest=now)
    if status == PromotionStatus.SCHEDULED:
        # strictly after start, and not in the past
        if start_date >= now:
            return DateBounds(earliest=start_date, earliest_inclusive=False)
        return DateBounds(earliest=now)
    if status == PromotionStatus.ACTIVE:
        return DateBounds(earliest=start_date)
    return DateBounds(latest=FAR_FUTURE)
