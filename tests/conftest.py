"""Shared fixtures for ledger tests."""

import itertools
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from betledger.models import Bet, BetStatus, BetType

SAO_PAULO = ZoneInfo("America/Sao_Paulo")
OWNER = "user-1"
OTHER_OWNER = "user-2"

_ids = itertools.count(1)


def local(year, month, day, hour=12, minute=0, second=0, microsecond=0) -> datetime:
    """Reference-zone civil time."""
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=SAO_PAULO)


def utc(year, month, day, hour=0, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_bet(
    stake="10.00",
    payout=None,
    status=BetStatus.COMPLETED,
    placed_at=None,
    owner_id=OWNER,
    bet_type=BetType.SUREBET,
    house=None,
    bet_id=None,
) -> Bet:
    """Build a bet with sensible defaults for aggregation tests."""
    return Bet(
        id=bet_id or f"bet-{next(_ids)}",
        owner_id=owner_id,
        stake=Decimal(stake) if isinstance(stake, str) and _is_number(stake) else stake,
        payout=Decimal(payout) if isinstance(payout, str) and _is_number(payout) else payout,
        bet_type=bet_type,
        status=status,
        house=house,
        placed_at=placed_at or local(2025, 3, 10),
    )


def _is_number(text: str) -> bool:
    try:
        Decimal(text)
    except ArithmeticError:
        return False
    return True


@pytest.fixture
def now() -> datetime:
    """Fixed clock: 2025-03-10 15:00 in Sao Paulo."""
    return local(2025, 3, 10, 15)
