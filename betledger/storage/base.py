"""
Bet store interface.

One storage abstraction, picked once at startup. Every method is scoped
by owner: a bet that belongs to someone else is reported as not found.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Optional

from betledger.models import Bet, BetStatus, BetType, NewBet
from betledger.stats.periods import TimeWindow


class BetStore(ABC):
    """Persistence for bet records."""

    async def initialize(self) -> None:
        """Prepare the backing storage. No-op by default."""

    async def close(self) -> None:
        """Release the backing storage. No-op by default."""

    @abstractmethod
    async def list_bets(
        self,
        owner_id: str,
        bet_type: Optional[BetType] = None,
        house: Optional[str] = None,
        window: Optional[TimeWindow] = None,
    ) -> list[Bet]:
        """Get an owner's bets, newest first."""

    @abstractmethod
    async def get_bet(self, owner_id: str, bet_id: str) -> Bet:
        """
        Get one bet.

        Raises:
            NotFoundError: if the bet is missing or not owned by owner_id
        """

    @abstractmethod
    async def create_bet(self, owner_id: str, new_bet: NewBet) -> Bet:
        """Store a new pending bet and return it with its id."""

    @abstractmethod
    async def update_status(
        self,
        owner_id: str,
        bet_id: str,
        status: BetStatus,
        payout: Optional[Decimal] = None,
    ) -> Bet:
        """
        Move a bet to a new status. A payout, when given, replaces the stored one.

        Raises:
            NotFoundError: if the bet is missing or not owned by owner_id
        """

    @abstractmethod
    async def delete_bet(self, owner_id: str, bet_id: str) -> None:
        """
        Permanently delete a bet.

        Raises:
            NotFoundError: if the bet is missing or not owned by owner_id
        """


def filter_bets(
    bets: Iterable[Bet],
    owner_id: str,
    bet_type: Optional[BetType] = None,
    house: Optional[str] = None,
    window: Optional[TimeWindow] = None,
) -> list[Bet]:
    """Listing filter shared by the non-SQL stores, newest first."""
    selected = [
        bet
        for bet in bets
        if bet.owner_id == owner_id
        and (bet_type is None or bet.bet_type == bet_type)
        and (house is None or bet.house == house)
        and (window is None or window.contains(bet.placed_at))
    ]
    selected.sort(key=lambda b: b.placed_at, reverse=True)
    return selected
