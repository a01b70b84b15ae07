"""
Tests for the ledger report script.

Run with: python -m pytest tests/test_ledger_report.py -v
"""

import asyncio

import pytest

from betledger.errors import ValidationError
from betledger.models import BetStatus, BetType, Period
from betledger.services import LedgerService
from betledger.storage import InMemoryBetStore
from conftest import OWNER, SAO_PAULO, local, make_bet
from scripts.ledger_report import build_parser, build_report, filters_from_args


def parse(*argv):
    return filters_from_args(build_parser().parse_args(["--owner", OWNER, *argv]))


@pytest.fixture
def service(now):
    bets = [
        make_bet(stake="10.00", payout="15.00", placed_at=local(2025, 1, 20)),
        make_bet(stake="10.00", payout="12.00", placed_at=local(2025, 3, 9)),
        make_bet(stake="10.00", status=BetStatus.LOST, placed_at=local(2025, 3, 10, 9)),
        make_bet(stake="20.00", payout="30.00", placed_at=local(2025, 3, 10, 10), bet_type=BetType.GIROS),
    ]
    return LedgerService(InMemoryBetStore(bets), now_fn=lambda: now, tz=SAO_PAULO)


class TestArguments:
    """Tests for turning command-line flags into filters."""

    def test_no_period_by_default(self):
        """Test leaving out --period selects every bet."""
        filters = parse()

        assert filters.period is None
        assert filters.month is None

    def test_flags_map_to_filters(self):
        filters = parse("--period", "monthly", "--bet-type", "giros", "--house", "Betano")

        assert filters.period == Period.MONTHLY
        assert filters.bet_type == BetType.GIROS
        assert filters.house == "Betano"

    def test_bad_bet_type_rejected(self):
        with pytest.raises(ValidationError):
            parse("--bet-type", "lottery")


class TestBuildReport:
    """Tests for the rendered report."""

    def test_all_records_by_default(self, service):
        """Test the default report spans months, not just today."""
        text = asyncio.run(build_report(service, OWNER, parse()))

        assert "Period: all time" in text
        assert "2025-01-20" in text
        assert "2025-03-09" in text
        assert "2025-03-10" in text

    def test_daily_period(self, service):
        """Test --period daily keeps only today's bets."""
        text = asyncio.run(build_report(service, OWNER, parse("--period", "daily")))

        assert "Period: daily" in text
        assert "2025-03-10" in text
        assert "2025-01-20" not in text

    def test_previous_defaults_to_daily(self, service):
        """Test --previous without a period reports yesterday."""
        text = asyncio.run(build_report(service, OWNER, parse(), previous=True))

        assert "PREVIOUS DAILY STATISTICS" in text
        assert "2025-03-09" in text
        assert "2025-03-10" not in text

    def test_previous_month(self, service):
        text = asyncio.run(build_report(service, OWNER, parse("--period", "monthly"), previous=True))

        assert "PREVIOUS MONTHLY STATISTICS" in text

    def test_bet_type_label_in_header(self, service):
        text = asyncio.run(build_report(service, OWNER, parse("--bet-type", "giros")))

        assert "Bet type: Giros grátis" in text
