"""
Bet statistics engine.

Pure aggregation over a snapshot of bet records: totals, win rate, ROI
and a profit breakdown bucketed by day, month or year. Nothing here does
I/O or keeps state between calls.
"""

import warnings
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Optional, Sequence, Union
from zoneinfo import ZoneInfo

from config.logging_config import get_logger
from betledger.errors import DataCorruptionWarning
from betledger.models import (
    Bet,
    BetFilters,
    BetStats,
    BetStatus,
    BetType,
    Period,
    ProfitBucket,
    to_amount,
)
from betledger.models.bet import ZERO
from betledger.stats.periods import (
    Granularity,
    TimeWindow,
    bucket_key,
    granularity_for,
    localize,
    reference_zone,
    resolve_previous_window,
    resolve_window,
)

logger = get_logger(__name__)

PERCENT_PLACES = Decimal("0.01")
HUNDRED = Decimal(100)

# quantize() fails past the default 28 significant digits
DECIMAL_PRECISION = 60


@dataclass(frozen=True)
class _Entry:
    """Amounts one finished bet contributes."""

    key: str
    won: bool
    stake: Decimal
    payout: Decimal
    profit: Decimal


def _finished_entry(
    bet: Bet,
    placed_at: datetime,
    granularity: Granularity,
    tz: ZoneInfo,
) -> _Entry:
    """
    Read the amounts of a finished bet.

    Raises:
        ValueError: if the record cannot be aggregated
    """
    stake = to_amount(bet.stake)
    if stake <= 0:
        raise ValueError(f"stake must be positive, got {stake}")

    if bet.status == BetStatus.COMPLETED:
        if bet.payout is None:
            raise ValueError("completed bet has no payout")
        payout = to_amount(bet.payout)
        if payout < 0:
            raise ValueError(f"payout must not be negative, got {payout}")
        profit = payout - stake
    else:
        # Lost: payout ignored even when present
        payout = ZERO
        profit = -stake

    return _Entry(
        key=bucket_key(placed_at, granularity, tz),
        won=bet.status == BetStatus.COMPLETED,
        stake=stake,
        payout=payout,
        profit=profit,
    )


def _matches(
    bet: Bet,
    placed_at: datetime,
    owner_id: str,
    window: Optional[TimeWindow],
    bet_type: Optional[BetType],
    house: Optional[str],
) -> bool:
    if bet.owner_id != owner_id:
        return False
    if bet_type is not None and bet.bet_type != bet_type:
        return False
    if house is not None and bet.house != house:
        return False
    if window is not None and not window.contains(placed_at):
        return False
    return True


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return ZERO
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return (numerator / denominator * HUNDRED).quantize(
            PERCENT_PLACES, rounding=ROUND_HALF_UP
        )


def aggregate(
    owner_id: str,
    bets: Iterable[Bet],
    window: Optional[TimeWindow] = None,
    period: Optional[Period] = None,
    bet_type: Optional[BetType] = None,
    house: Optional[str] = None,
    tz: Optional[ZoneInfo] = None,
) -> BetStats:
    """
    Aggregate the owner's bets inside an already resolved window.

    Only finished (completed or lost) bets count. Corrupt records are
    skipped with a DataCorruptionWarning and the rest still aggregate.
    """
    tz = tz or reference_zone()
    granularity = granularity_for(period)
    stats = BetStats(period=period)
    buckets: dict[str, ProfitBucket] = {}
    wins = 0

    for bet in bets:
        placed_at = localize(bet.placed_at, tz)
        if not _matches(bet, placed_at, owner_id, window, bet_type, house):
            continue
        if not bet.is_finished:
            stats.pending_bets += 1
            continue

        try:
            entry = _finished_entry(bet, placed_at, granularity, tz)
        except ValueError as e:
            logger.warning("Skipping corrupt bet", bet_id=bet.id, reason=str(e))
            warnings.warn(DataCorruptionWarning(bet.id, str(e)), stacklevel=3)
            stats.skipped_bet_ids.append(bet.id)
            continue

        stats.total_bets += 1
        stats.total_stake += entry.stake
        stats.total_payout += entry.payout
        stats.total_profit += entry.profit
        if entry.won:
            wins += 1

        bucket = buckets.get(entry.key)
        if bucket is None:
            bucket = buckets[entry.key] = ProfitBucket(date=entry.key)
        bucket.stake += entry.stake
        bucket.payout += entry.payout
        bucket.profit += entry.profit

    stats.win_rate = _percent(Decimal(wins), Decimal(stats.total_bets))
    stats.roi = _percent(stats.total_profit, stats.total_stake)
    # Keys are zero-padded, so string order is chronological order
    stats.profit_by_date = [buckets[key] for key in sorted(buckets)]
    return stats


def compute_stats(
    owner_id: str,
    bets: Sequence[Bet],
    filters: Optional[BetFilters] = None,
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> BetStats:
    """
    Compute dashboard statistics for one owner.

    Args:
        owner_id: Trusted owner id; bets of other owners are ignored
        bets: Snapshot of bet records, filtered or not. A naive placed_at
            is reference-zone civil time, like naive filter dates
        filters: Type/house equality filters and the time filter
        now: Current instant for relative periods (default: the real clock)
        tz: Reference timezone (default from settings)

    Returns:
        BetStats for the finished bets that qualify

    Raises:
        ValidationError: if the filter specification is malformed
    """
    filters = filters or BetFilters()
    window = resolve_window(filters, now, tz)
    stats = aggregate(
        owner_id,
        bets,
        window=window,
        period=filters.period,
        bet_type=filters.bet_type,
        house=filters.house,
        tz=tz,
    )
    logger.debug(
        "Computed stats",
        owner_id=owner_id,
        period=filters.period.value if filters.period else None,
        total_bets=stats.total_bets,
        pending_bets=stats.pending_bets,
        skipped=len(stats.skipped_bet_ids),
    )
    return stats


def compute_previous_stats(
    owner_id: str,
    bets: Sequence[Bet],
    period: Union[Period, str] = Period.DAILY,
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> BetStats:
    """Stats for the period right before the current one (yesterday, last month, last year)."""
    period = Period.parse(period)
    window = resolve_previous_window(period, now, tz)
    return aggregate(owner_id, bets, window=window, period=period, tz=tz)


def available_months(bets: Iterable[Bet], tz: Optional[ZoneInfo] = None) -> list[str]:
    """Distinct YYYY-MM months with bets, most recent first."""
    return sorted(
        {bucket_key(b.placed_at, Granularity.MONTH, tz) for b in bets},
        reverse=True,
    )


def available_years(bets: Iterable[Bet], tz: Optional[ZoneInfo] = None) -> list[str]:
    """Distinct YYYY years with bets, most recent first."""
    return sorted(
        {bucket_key(b.placed_at, Granularity.YEAR, tz) for b in bets},
        reverse=True,
    )
