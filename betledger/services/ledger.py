"""
Ledger service.

The application layer between callers (HTTP handlers, scripts) and the
store. Validates input, scopes every call by owner, and feeds store
snapshots to the stats engine.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo

from config.logging_config import get_logger
from betledger.errors import ValidationError
from betledger.models import (
    Amount,
    Bet,
    BetFilters,
    BetStats,
    BetStatus,
    BetType,
    NewBet,
    Period,
    to_amount,
)
from betledger.stats import (
    available_months,
    available_years,
    compute_previous_stats,
    compute_stats,
    parse_placed_at,
    resolve_previous_window,
    resolve_window,
)
from betledger.storage import BetStore

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_stake(value: Amount) -> Decimal:
    try:
        stake = to_amount(value)
    except ValueError:
        raise ValidationError(f"Invalid stake: {value!r}", field="stake") from None
    if stake <= 0:
        raise ValidationError("Stake must be positive", field="stake")
    return stake


def _parse_payout(value: Optional[Amount]) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        payout = to_amount(value)
    except ValueError:
        raise ValidationError(f"Invalid payout: {value!r}", field="payout") from None
    if payout < 0:
        raise ValidationError("Payout must not be negative", field="payout")
    return payout


class LedgerService:
    """Bet bookkeeping and statistics for authenticated owners."""

    def __init__(
        self,
        store: BetStore,
        now_fn: Optional[Callable[[], datetime]] = None,
        tz: Optional[ZoneInfo] = None,
    ) -> None:
        """
        Args:
            store: Initialized bet store
            now_fn: Clock used for relative periods (default: UTC wall clock)
            tz: Reference timezone (default from settings)
        """
        self.store = store
        self._now = now_fn or _utcnow
        self.tz = tz

    async def create_bet(
        self,
        owner_id: str,
        stake: Amount,
        bet_type: Union[BetType, str],
        payout: Optional[Amount] = None,
        house: Optional[str] = None,
        description: Optional[str] = None,
        placed_at: Union[str, date, datetime, None] = None,
    ) -> Bet:
        """
        Record a new bet. Bets always start as pending.

        Raises:
            ValidationError: on a bad stake, payout, bet type or placed_at
        """
        new_bet = NewBet(
            stake=_parse_stake(stake),
            payout=_parse_payout(payout),
            bet_type=BetType.parse(bet_type),
            placed_at=parse_placed_at(placed_at, now=self._now(), tz=self.tz),
            house=_clean_text(house),
            description=_clean_text(description),
        )
        bet = await self.store.create_bet(owner_id, new_bet)
        logger.info(
            "Bet created",
            owner_id=owner_id,
            bet_id=bet.id,
            stake=str(bet.stake),
            bet_type=bet.bet_type.value,
        )
        return bet

    async def list_bets(
        self,
        owner_id: str,
        filters: Optional[BetFilters] = None,
    ) -> list[Bet]:
        """Raw listing, pending bets included, newest first."""
        filters = filters or BetFilters()
        window = resolve_window(filters, self._now(), self.tz)
        return await self.store.list_bets(
            owner_id,
            bet_type=filters.bet_type,
            house=filters.house,
            window=window,
        )

    async def update_status(
        self,
        owner_id: str,
        bet_id: str,
        status: Union[BetStatus, str],
        payout: Optional[Amount] = None,
    ) -> Bet:
        """
        Move a bet to any status. Profit follows from the new status on next read.

        Raises:
            ValidationError: on an unknown status, or completing a bet with no payout
            NotFoundError: if the bet is missing or belongs to someone else
        """
        new_status = BetStatus.parse(status)
        new_payout = _parse_payout(payout)

        if new_status == BetStatus.COMPLETED and new_payout is None:
            current = await self.store.get_bet(owner_id, bet_id)
            if current.payout is None:
                raise ValidationError("A completed bet needs a payout", field="payout")

        bet = await self.store.update_status(owner_id, bet_id, new_status, new_payout)
        logger.info(
            "Bet status changed",
            owner_id=owner_id,
            bet_id=bet_id,
            status=new_status.value,
        )
        return bet

    async def delete_bet(self, owner_id: str, bet_id: str) -> None:
        """
        Raises:
            NotFoundError: if the bet is missing or belongs to someone else
        """
        await self.store.delete_bet(owner_id, bet_id)
        logger.info("Bet deleted", owner_id=owner_id, bet_id=bet_id)

    async def get_stats(
        self,
        owner_id: str,
        filters: Optional[BetFilters] = None,
    ) -> BetStats:
        """
        Dashboard statistics for the owner.

        The filters are validated before the store is touched.

        Raises:
            ValidationError: on malformed filters
        """
        filters = filters or BetFilters()
        now = self._now()
        window = resolve_window(filters, now, self.tz)
        bets = await self.store.list_bets(
            owner_id,
            bet_type=filters.bet_type,
            house=filters.house,
            window=window,
        )
        stats = compute_stats(owner_id, bets, filters, now=now, tz=self.tz)
        logger.info(
            "Stats computed",
            owner_id=owner_id,
            period=filters.period.value if filters.period else None,
            month=filters.month,
            year=filters.year,
            total_bets=stats.total_bets,
        )
        return stats

    async def get_previous_stats(
        self,
        owner_id: str,
        period: Union[Period, str] = Period.DAILY,
    ) -> BetStats:
        """Stats for yesterday, last month or last year."""
        period = Period.parse(period)
        now = self._now()
        window = resolve_previous_window(period, now, self.tz)
        bets = await self.store.list_bets(owner_id, window=window)
        return compute_previous_stats(owner_id, bets, period, now=now, tz=self.tz)

    async def available_months(self, owner_id: str) -> list[str]:
        """YYYY-MM months the owner has bets in, most recent first."""
        return available_months(await self.store.list_bets(owner_id), self.tz)

    async def available_years(self, owner_id: str) -> list[str]:
        """YYYY years the owner has bets in, most recent first."""
        return available_years(await self.store.list_bets(owner_id), self.tz)
