"""SQL bet store on top of the async SQLAlchemy repositories."""

from decimal import Decimal
from typing import Optional

from betledger.database import BetRepository, DatabaseConnection, record_to_bet
from betledger.errors import NotFoundError
from betledger.models import Bet, BetStatus, BetType, NewBet
from betledger.stats.periods import TimeWindow
from betledger.storage.base import BetStore


class SqlBetStore(BetStore):
    """Bets in SQLite or PostgreSQL. One session per call."""

    def __init__(self, connection: DatabaseConnection) -> None:
        self.connection = connection

    async def initialize(self) -> None:
        if not self.connection.is_initialized:
            await self.connection.initialize()

    async def close(self) -> None:
        await self.connection.close()

    async def list_bets(
        self,
        owner_id: str,
        bet_type: Optional[BetType] = None,
        house: Optional[str] = None,
        window: Optional[TimeWindow] = None,
    ) -> list[Bet]:
        async with self.connection.session() as session:
            records = await BetRepository(session).get_by_owner(
                owner_id, bet_type=bet_type, house=house, window=window
            )
            return [record_to_bet(r) for r in records]

    async def get_bet(self, owner_id: str, bet_id: str) -> Bet:
        async with self.connection.session() as session:
            record = await BetRepository(session).get(owner_id, bet_id)
            if record is None:
                raise NotFoundError(bet_id)
            return record_to_bet(record)

    async def create_bet(self, owner_id: str, new_bet: NewBet) -> Bet:
        async with self.connection.session() as session:
            record = await BetRepository(session).add(owner_id, new_bet)
            return record_to_bet(record)

    async def update_status(
        self,
        owner_id: str,
        bet_id: str,
        status: BetStatus,
        payout: Optional[Decimal] = None,
    ) -> Bet:
        async with self.connection.session() as session:
            repo = BetRepository(session)
            record = await repo.get(owner_id, bet_id)
            if record is None:
                raise NotFoundError(bet_id)
            record = await repo.set_status(record, status, payout)
            return record_to_bet(record)

    async def delete_bet(self, owner_id: str, bet_id: str) -> None:
        async with self.connection.session() as session:
            if not await BetRepository(session).remove(owner_id, bet_id):
                raise NotFoundError(bet_id)
