"""
Period resolution in the reference timezone.

Turns a filter specification into a concrete, inclusive [start, end]
window. Every calendar boundary (today, this month, this year) is taken
in the reference zone, not in UTC and not in the server's local zone.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Optional, Union
from zoneinfo import ZoneInfo

from config import settings
from betledger.errors import ValidationError
from betledger.models.stats import BetFilters, DateLike, Period

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
YEAR_PATTERN = re.compile(r"^(\d{4})$")

# Bare dates are pinned to noon so the calendar day survives UTC conversion
PLACED_AT_HOUR = 12


class Granularity(str, Enum):
    """Bucket size for profit_by_date."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive time window. A missing side is unbounded."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def contains(self, instant: datetime) -> bool:
        """Check if an instant falls inside the window (both ends inclusive)."""
        instant = localize(instant)
        if self.start is not None and instant < self.start:
            return False
        if self.end is not None and instant > self.end:
            return False
        return True


def reference_zone() -> ZoneInfo:
    """The configured reference timezone."""
    return settings.tz


def localize(instant: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Naive datetimes are reference-zone civil time, the same rule as filters and placed_at."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=tz or reference_zone())
    return instant


def assume_utc(instant: datetime) -> datetime:
    """For stored rows only: everything is written as UTC and SQLite drops the offset on read."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def to_reference(instant: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Convert an instant into reference-zone civil time."""
    tz = tz or reference_zone()
    return localize(instant, tz).astimezone(tz)


def start_of_day(day: date, tz: Optional[ZoneInfo] = None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz or reference_zone())


def end_of_day(day: date, tz: Optional[ZoneInfo] = None) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz or reference_zone())


def day_window(day: date, tz: Optional[ZoneInfo] = None) -> TimeWindow:
    """00:00:00 through 23:59:59.999999 of one civil day."""
    return TimeWindow(start_of_day(day, tz), end_of_day(day, tz))


def month_window(year: int, month: int, tz: Optional[ZoneInfo] = None) -> TimeWindow:
    """First through last instant of a calendar month. month is 1-12."""
    last_day = calendar.monthrange(year, month)[1]
    return TimeWindow(
        start_of_day(date(year, month, 1), tz),
        end_of_day(date(year, month, last_day), tz),
    )


def year_window(year: int, tz: Optional[ZoneInfo] = None) -> TimeWindow:
    """Jan 1 00:00 through Dec 31 23:59:59.999999."""
    return TimeWindow(
        start_of_day(date(year, 1, 1), tz),
        end_of_day(date(year, 12, 31), tz),
    )


def parse_month(value: str) -> tuple[int, int]:
    """
    Parse a YYYY-MM month string.

    Returns:
        (year, month) with month 1-indexed, as written

    Raises:
        ValidationError: if the string is malformed or out of range
    """
    match = MONTH_PATTERN.match(str(value).strip())
    if not match:
        raise ValidationError(f"Invalid month: {value!r}. Expected YYYY-MM", field="month")
    year, month = int(match.group(1)), int(match.group(2))
    if year < 1 or not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {value!r}. Expected YYYY-MM", field="month")
    return year, month


def parse_year(value: str) -> int:
    """Parse a YYYY year string, raising ValidationError when malformed."""
    match = YEAR_PATTERN.match(str(value).strip())
    if not match or int(match.group(1)) < 1:
        raise ValidationError(f"Invalid year: {value!r}. Expected YYYY", field="year")
    return int(match.group(1))


def _explicit_bound(value: DateLike, is_end: bool, tz: ZoneInfo) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value
    return end_of_day(value, tz) if is_end else start_of_day(value, tz)


def resolve_window(
    filters: Optional[BetFilters],
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> Optional[TimeWindow]:
    """
    Resolve the time window a filter specification selects.

    Precedence: month, then year, then start/end dates, then the relative
    period token. The first one present wins and the rest are ignored.

    Args:
        filters: Filter specification (None means no filters)
        now: Current instant (default: the real clock)
        tz: Reference timezone (default from settings)

    Returns:
        The window, or None when no time restriction applies

    Raises:
        ValidationError: on a malformed month/year or an inverted date range
    """
    if filters is None:
        return None
    tz = tz or reference_zone()

    if filters.month:
        year, month = parse_month(filters.month)
        return month_window(year, month, tz)

    if filters.year:
        return year_window(parse_year(filters.year), tz)

    if filters.start_date is not None or filters.end_date is not None:
        start = (
            _explicit_bound(filters.start_date, False, tz)
            if filters.start_date is not None
            else None
        )
        end = (
            _explicit_bound(filters.end_date, True, tz)
            if filters.end_date is not None
            else None
        )
        if start is not None and end is not None and start > end:
            raise ValidationError("startDate is after endDate", field="startDate")
        return TimeWindow(start, end)

    if filters.period is not None:
        return current_window(filters.period, now, tz)

    return None


def current_window(
    period: Union[Period, str],
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> TimeWindow:
    """The day, month or year containing now in the reference zone."""
    period = Period.parse(period)
    tz = tz or reference_zone()
    today = to_reference(now or datetime.now(timezone.utc), tz).date()

    if period == Period.DAILY:
        return day_window(today, tz)
    if period == Period.MONTHLY:
        return month_window(today.year, today.month, tz)
    return year_window(today.year, tz)


def resolve_previous_window(
    period: Union[Period, str],
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> TimeWindow:
    """The window right before the current one: yesterday, last month or last year."""
    period = Period.parse(period)
    tz = tz or reference_zone()
    today = to_reference(now or datetime.now(timezone.utc), tz).date()

    if period == Period.DAILY:
        return day_window(today - timedelta(days=1), tz)
    if period == Period.MONTHLY:
        if today.month == 1:
            return month_window(today.year - 1, 12, tz)
        return month_window(today.year, today.month - 1, tz)
    return year_window(today.year - 1, tz)


def granularity_for(period: Optional[Period]) -> Granularity:
    """Daily or no period buckets by day; monthly by month; yearly by year."""
    if period == Period.MONTHLY:
        return Granularity.MONTH
    if period == Period.YEARLY:
        return Granularity.YEAR
    return Granularity.DAY


def bucket_key(
    instant: datetime,
    granularity: Granularity,
    tz: Optional[ZoneInfo] = None,
) -> str:
    """Zero-padded YYYY-MM-DD, YYYY-MM or YYYY key of an instant in the reference zone."""
    local = to_reference(instant, tz)
    if granularity == Granularity.YEAR:
        return f"{local.year:04d}"
    if granularity == Granularity.MONTH:
        return f"{local.year:04d}-{local.month:02d}"
    return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"


def parse_placed_at(
    value: Union[str, date, datetime, None],
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> datetime:
    """
    Normalise a placed_at input into an aware datetime.

    A bare date (or YYYY-MM-DD string) becomes noon of that day in the
    reference zone. A naive datetime is reference-zone civil time. None
    means now.

    Raises:
        ValidationError: if a string cannot be parsed
    """
    tz = tz or reference_zone()
    if value is None:
        return localize(now or datetime.now(timezone.utc), tz)

    if isinstance(value, str):
        text = value.strip()
        try:
            if "T" not in text and " " not in text:
                value = date.fromisoformat(text)
            else:
                value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid placedAt: {value!r}", field="placedAt") from None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value
    return datetime.combine(value, time(PLACED_AT_HOUR), tzinfo=tz)
