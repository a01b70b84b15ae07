"""
Database repositories for CRUD operations.

Provides clean interfaces for interacting with database tables.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.logging_config import get_logger
from betledger.database.schema import BetRecord
from betledger.models import Bet, BetStatus, BetType, NewBet
from betledger.stats.periods import TimeWindow, assume_utc, localize

logger = get_logger(__name__)


def _utc(instant: datetime) -> datetime:
    """SQLite stores wall time without offset, so everything goes in as UTC."""
    return localize(instant).astimezone(timezone.utc)


def record_to_bet(record: BetRecord) -> Bet:
    """Convert an ORM row into the domain model."""
    return Bet(
        id=record.id,
        owner_id=record.owner_id,
        stake=record.stake,
        payout=record.payout,
        bet_type=BetType(record.bet_type),
        status=BetStatus(record.status),
        house=record.house,
        description=record.description,
        placed_at=assume_utc(record.placed_at),
        created_at=assume_utc(record.created_at),
        updated_at=assume_utc(record.updated_at),
    )


class BetRepository:
    """Repository for bet data. Every query is scoped by owner."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, owner_id: str, new_bet: NewBet) -> BetRecord:
        """Insert a new pending bet and return its row."""
        now = datetime.now(timezone.utc)
        record = BetRecord(
            owner_id=owner_id,
            stake=new_bet.stake,
            payout=new_bet.payout,
            bet_type=new_bet.bet_type.value,
            status=BetStatus.PENDING.value,
            house=new_bet.house,
            description=new_bet.description,
            placed_at=_utc(new_bet.placed_at),
            created_at=now,
            updated_at=now,
        )
        self.session.add(record)
        await self.session.flush()
        return record

    async def get(self, owner_id: str, bet_id: str) -> Optional[BetRecord]:
        """Get a bet by ID, only if it belongs to the owner."""
        result = await self.session.execute(
            select(BetRecord)
            .where(BetRecord.id == bet_id)
            .where(BetRecord.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def get_by_owner(
        self,
        owner_id: str,
        bet_type: Optional[BetType] = None,
        house: Optional[str] = None,
        window: Optional[TimeWindow] = None,
    ) -> list[BetRecord]:
        """Get an owner's bets, newest first."""
        query = select(BetRecord).where(BetRecord.owner_id == owner_id)

        if bet_type is not None:
            query = query.where(BetRecord.bet_type == bet_type.value)
        if house is not None:
            query = query.where(BetRecord.house == house)
        if window is not None and window.start is not None:
            query = query.where(BetRecord.placed_at >= _utc(window.start))
        if window is not None and window.end is not None:
            query = query.where(BetRecord.placed_at <= _utc(window.end))

        result = await self.session.execute(query.order_by(BetRecord.placed_at.desc()))
        return list(result.scalars().all())

    async def set_status(
        self,
        record: BetRecord,
        status: BetStatus,
        payout: Optional[Decimal] = None,
    ) -> BetRecord:
        """Move a bet to a new status, optionally recording its payout."""
        record.status = status.value
        if payout is not None:
            record.payout = payout
        record.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return record

    async def remove(self, owner_id: str, bet_id: str) -> bool:
        """Delete a bet. Returns False when nothing matched."""
        result = await self.session.execute(
            delete(BetRecord)
            .where(BetRecord.id == bet_id)
            .where(BetRecord.owner_id == owner_id)
        )
        return result.rowcount > 0
