"""In-memory bet store for tests and demos."""

import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from betledger.errors import NotFoundError
from betledger.models import Bet, BetStatus, BetType, NewBet
from betledger.models.bet import utcnow
from betledger.stats.periods import TimeWindow, localize
from betledger.storage.base import BetStore, filter_bets


class InMemoryBetStore(BetStore):
    """Dict-backed store. Callers always get copies, never the stored objects."""

    def __init__(self, bets: Optional[list[Bet]] = None) -> None:
        self._bets: dict[str, Bet] = {
            b.id: replace(b, placed_at=localize(b.placed_at)) for b in bets or []
        }

    async def list_bets(
        self,
        owner_id: str,
        bet_type: Optional[BetType] = None,
        house: Optional[str] = None,
        window: Optional[TimeWindow] = None,
    ) -> list[Bet]:
        selected = filter_bets(self._bets.values(), owner_id, bet_type, house, window)
        return [replace(b) for b in selected]

    def _owned(self, owner_id: str, bet_id: str) -> Bet:
        bet = self._bets.get(bet_id)
        if bet is None or bet.owner_id != owner_id:
            raise NotFoundError(bet_id)
        return bet

    async def get_bet(self, owner_id: str, bet_id: str) -> Bet:
        return replace(self._owned(owner_id, bet_id))

    async def create_bet(self, owner_id: str, new_bet: NewBet) -> Bet:
        now = utcnow()
        bet = Bet(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            stake=new_bet.stake,
            payout=new_bet.payout,
            bet_type=new_bet.bet_type,
            status=BetStatus.PENDING,
            house=new_bet.house,
            description=new_bet.description,
            placed_at=localize(new_bet.placed_at),
            created_at=now,
            updated_at=now,
        )
        self._bets[bet.id] = bet
        return replace(bet)

    async def update_status(
        self,
        owner_id: str,
        bet_id: str,
        status: BetStatus,
        payout: Optional[Decimal] = None,
    ) -> Bet:
        bet = self._owned(owner_id, bet_id)
        bet.status = status
        if payout is not None:
            bet.payout = payout
        bet.updated_at = utcnow()
        return replace(bet)

    async def delete_bet(self, owner_id: str, bet_id: str) -> None:
        self._owned(owner_id, bet_id)
        del self._bets[bet_id]
