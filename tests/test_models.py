"""
Tests for bet and filter models.

Run with: python -m pytest tests/test_models.py -v
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from betledger.errors import ValidationError
from betledger.models import (
    BET_TYPE_LABELS,
    BetFilters,
    BetStatus,
    BetType,
    Period,
    to_amount,
)
from conftest import make_bet


class TestToAmount:
    """Tests for amount parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("10", Decimal("10.00")),
            (" 12.5 ", Decimal("12.50")),
            (7, Decimal("7.00")),
            (0.1, Decimal("0.10")),
            (Decimal("1.005"), Decimal("1.01")),
            ("2.675", Decimal("2.68")),
        ],
    )
    def test_valid_amounts(self, value, expected):
        """Test amounts are quantized to cents, half up."""
        assert to_amount(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, "NaN", "Infinity", float("inf"), [1]])
    def test_invalid_amounts(self, value):
        """Test non-numeric values raise ValueError."""
        with pytest.raises(ValueError):
            to_amount(value)

    @pytest.mark.parametrize("value", ["1e24", "10000000000.00", "-10000000000", 10**30])
    def test_out_of_range_amounts(self, value):
        """Test amounts wider than the Numeric(12, 2) column are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            to_amount(value)

    def test_largest_amount(self):
        assert to_amount("9999999999.99") == Decimal("9999999999.99")


class TestBetProfit:
    """Tests for derived profit."""

    def test_completed(self):
        """Test completed profit is payout minus stake."""
        assert make_bet(stake="10.00", payout="25.00").profit == Decimal("15.00")

    def test_lost(self):
        """Test lost profit is minus the stake."""
        bet = make_bet(stake="10.00", payout="25.00", status=BetStatus.LOST)

        assert bet.profit == Decimal("-10.00")

    def test_pending(self):
        """Test pending profit is zero even with a payout set."""
        bet = make_bet(stake="10.00", payout="25.00", status=BetStatus.PENDING)

        assert bet.profit == Decimal("0.00")

    def test_completed_without_payout(self):
        """Test a completed bet without payout has no profit."""
        with pytest.raises(ValueError):
            make_bet(payout=None).profit

    def test_string_amounts(self):
        """Test amounts stored as strings still work."""
        bet = make_bet(payout="25.00")
        bet.stake = "10"

        assert bet.profit == Decimal("15.00")


class TestBetToDict:
    """Tests for the wire representation."""

    def test_camel_case_keys(self):
        """Test keys and string amounts."""
        bet = make_bet(stake="10.00", payout="12.00", bet_id="bet-7", house="Bet365")

        data = bet.to_dict()

        assert data["id"] == "bet-7"
        assert data["userId"] == "user-1"
        assert data["stake"] == "10.00"
        assert data["payout"] == "12.00"
        assert data["profit"] == "2.00"
        assert data["betType"] == "surebet"
        assert data["status"] == "completed"
        assert data["house"] == "Bet365"
        assert data["placedAt"].startswith("2025-03-10T12:00:00")

    def test_unreadable_profit_is_none(self):
        """Test corrupt amounts serialise without raising."""
        data = make_bet(stake="abc", payout="1.00").to_dict()

        assert data["profit"] is None
        assert data["stake"] == "abc"


class TestEnums:
    """Tests for status and type parsing."""

    def test_status_parse(self):
        """Test status strings are case insensitive."""
        assert BetStatus.parse("Completed") == BetStatus.COMPLETED
        assert BetStatus.parse(BetStatus.LOST) == BetStatus.LOST

    def test_status_parse_rejects_unknown(self):
        """Test unknown statuses raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            BetStatus.parse("won")

        assert exc_info.value.field == "status"

    def test_is_finished(self):
        """Test only pending is unfinished."""
        assert not BetStatus.PENDING.is_finished
        assert BetStatus.COMPLETED.is_finished
        assert BetStatus.LOST.is_finished

    def test_every_type_has_label(self):
        """Test each bet type has a display label."""
        assert set(BET_TYPE_LABELS) == set(BetType)
        assert BetType.EXTRACAO.label == "Extração de FB"

    def test_type_parse_rejects_unknown(self):
        """Test unknown bet types raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            BetType.parse("poker")

        assert exc_info.value.field == "betType"


class TestBetFilters:
    """Tests for filter normalisation."""

    def test_normalises_tokens_and_dates(self):
        """Test strings become enums and dates."""
        filters = BetFilters(
            bet_type="giros",
            period="Monthly",
            start_date="2025-03-01",
            end_date="2025-03-05T10:00:00Z",
        )

        assert filters.bet_type == BetType.GIROS
        assert filters.period == Period.MONTHLY
        assert filters.start_date == date(2025, 3, 1)
        assert isinstance(filters.end_date, datetime)
        assert filters.end_date.tzinfo is not None

    def test_from_query(self):
        """Test query-string keys map onto filters."""
        filters = BetFilters.from_query(
            {
                "betType": "dnc",
                "house": "Betano",
                "month": "2025-03",
                "year": "",
                "period": "daily",
            }
        )

        assert filters.bet_type == BetType.DNC
        assert filters.house == "Betano"
        assert filters.month == "2025-03"
        assert filters.year is None
        assert filters.period == Period.DAILY

    def test_from_query_rejects_bad_period(self):
        """Test invalid query values raise ValidationError."""
        with pytest.raises(ValidationError):
            BetFilters.from_query({"period": "hourly"})
