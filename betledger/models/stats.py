"""
Statistics data models.

Filters going into the aggregation engine and the stats coming out of it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Any, Mapping, Optional, Union

from betledger.errors import ValidationError
from betledger.models.bet import BetType, ZERO

DateLike = Union[date, datetime]


class Period(str, Enum):
    """Relative period tokens, evaluated against now."""

    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Union["Period", str]) -> "Period":
        """Parse a period token, raising ValidationError for unknown ones."""
        if isinstance(value, Period):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid period: {value!r}. Must be one of daily, monthly, yearly",
                field="period",
            ) from None


def _parse_date_like(value: Union[DateLike, str], name: str) -> DateLike:
    """ISO string to date (YYYY-MM-DD) or datetime (anything longer)."""
    if isinstance(value, (date, datetime)):
        return value
    text = str(value).strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value!r}", field=name) from None


@dataclass
class BetFilters:
    """
    Filter specification for stats and listings.

    Time filters in precedence order: month, year, start/end dates, period.
    period also sets the bucket granularity of profit_by_date.
    """

    bet_type: Optional[BetType] = None
    house: Optional[str] = None
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    period: Optional[Period] = None
    month: Optional[str] = None  # YYYY-MM
    year: Optional[str] = None  # YYYY

    def __post_init__(self) -> None:
        if self.period is not None:
            self.period = Period.parse(self.period)
        if self.bet_type is not None:
            self.bet_type = BetType.parse(self.bet_type)
        if self.start_date is not None:
            self.start_date = _parse_date_like(self.start_date, "startDate")
        if self.end_date is not None:
            self.end_date = _parse_date_like(self.end_date, "endDate")

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> "BetFilters":
        """Build filters from query-string style keys (betType, startDate, ...)."""

        def get(key: str) -> Optional[str]:
            value = query.get(key)
            if value is None or value == "":
                return None
            return value

        return cls(
            bet_type=get("betType"),
            house=get("house"),
            start_date=get("startDate"),
            end_date=get("endDate"),
            period=get("period"),
            month=get("month"),
            year=get("year"),
        )


@dataclass
class ProfitBucket:
    """Aggregated amounts for one day, month or year."""

    date: str
    profit: Decimal = ZERO
    stake: Decimal = ZERO
    payout: Decimal = ZERO

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "profit": _money(self.profit),
            "stake": _money(self.stake),
            "payout": _money(self.payout),
        }


@dataclass
class BetStats:
    """Aggregate statistics over the finished bets in a window."""

    total_stake: Decimal = ZERO
    total_payout: Decimal = ZERO
    total_profit: Decimal = ZERO
    total_bets: int = 0
    win_rate: Decimal = ZERO
    roi: Decimal = ZERO
    profit_by_date: list[ProfitBucket] = field(default_factory=list)

    # Qualifying bets still pending, not part of any total
    pending_bets: int = 0
    skipped_bet_ids: list[str] = field(default_factory=list)
    period: Optional[Period] = None

    def to_dict(self) -> dict:
        """Dashboard JSON shape."""
        return {
            "totalStake": _money(self.total_stake),
            "totalPayout": _money(self.total_payout),
            "totalProfit": _money(self.total_profit),
            "totalBets": self.total_bets,
            "winRate": _money(self.win_rate),
            "roi": _money(self.roi),
            "profitByDate": [b.to_dict() for b in self.profit_by_date],
            "pendingBets": self.pending_bets,
            "skippedBetIds": list(self.skipped_bet_ids),
        }


def _money(value: Decimal) -> float:
    # Totals over many bets can pass the default 28 digit precision
    with localcontext() as ctx:
        ctx.prec = 60
        return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
