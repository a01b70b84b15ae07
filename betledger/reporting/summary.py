"""
Stats report formatting.

Plain-text rendering of BetStats for the command line and log files.
"""

from datetime import datetime, timezone
from typing import Optional

from betledger.models import BetStats, BetType
from betledger.reporting.formatters import (
    format_currency,
    format_currency_with_sign,
    format_percentage,
)


class StatsReportFormatter:
    """Formats bet statistics as text."""

    def __init__(self, currency_symbol: Optional[str] = None) -> None:
        self.currency_symbol = currency_symbol

    def _money(self, value) -> str:
        return format_currency(value, self.currency_symbol)

    def _signed(self, value) -> str:
        return format_currency_with_sign(value, self.currency_symbol)

    def format_text(
        self,
        stats: BetStats,
        title: str = "BET STATISTICS",
        generated_at: Optional[datetime] = None,
        bet_type: Optional[BetType] = None,
    ) -> str:
        """Format stats as a plain-text report. bet_type names the type filter, if any."""
        generated_at = generated_at or datetime.now(timezone.utc)

        lines = [
            "=" * 60,
            title,
            f"Period: {stats.period.value if stats.period else 'all time'}",
            f"Bet type: {bet_type.label if bet_type else 'all'}",
            "=" * 60,
            "",
            "SUMMARY",
            "-" * 40,
            f"  Finished Bets: {stats.total_bets:>14}",
            f"  Pending Bets:  {stats.pending_bets:>14}",
            f"  Total Stake:   {self._money(stats.total_stake):>14}",
            f"  Total Payout:  {self._money(stats.total_payout):>14}",
            f"  Profit:        {self._signed(stats.total_profit):>14}",
            f"  Win Rate:      {format_percentage(stats.win_rate):>14}",
            f"  ROI:           {format_percentage(stats.roi, signed=True):>14}",
            "",
            "PROFIT BY DATE",
            "-" * 40,
        ]

        if stats.profit_by_date:
            lines.append(f"  {'Date':<12}{'Stake':>16}{'Payout':>16}{'Profit':>16}")
            for bucket in stats.profit_by_date:
                lines.append(
                    f"  {bucket.date:<12}"
                    f"{self._money(bucket.stake):>16}"
                    f"{self._money(bucket.payout):>16}"
                    f"{self._signed(bucket.profit):>16}"
                )
        else:
            lines.append("  No finished bets")

        if stats.skipped_bet_ids:
            lines.extend([
                "",
                "SKIPPED (unreadable amounts)",
                "-" * 40,
            ])
            lines.extend(f"  • {bet_id}" for bet_id in stats.skipped_bet_ids)

        lines.extend([
            "",
            "=" * 60,
            f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M')} UTC",
        ])

        return "\n".join(lines)


# Global formatter instance
report_formatter = StatsReportFormatter()
