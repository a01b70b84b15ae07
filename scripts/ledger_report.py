#!/usr/bin/env python3
"""
Ledger Report Script.

Prints bet statistics for one owner from the configured store.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse

from config import settings
from config.logging_config import bind_context, clear_context, get_logger, setup_logging
from betledger.errors import LedgerError
from betledger.models import BetFilters, Period
from betledger.reporting import report_formatter
from betledger.services import LedgerService
from betledger.storage import create_store

logger = get_logger(__name__)


async def build_report(
    service: LedgerService,
    owner_id: str,
    filters: BetFilters,
    previous: bool = False,
) -> str:
    """
    Compute stats and render them as text.

    With no time filter the report covers every bet the owner has.
    --previous needs a period and uses daily when none was given.
    """
    if previous:
        period = filters.period or Period.DAILY
        stats = await service.get_previous_stats(owner_id, period)
        title = f"PREVIOUS {period.value.upper()} STATISTICS"
    else:
        stats = await service.get_stats(owner_id, filters)
        title = "BET STATISTICS"
        if filters.month:
            title += f" - {filters.month}"
        elif filters.year:
            title += f" - {filters.year}"

    return report_formatter.format_text(stats, title=title, bet_type=filters.bet_type)


async def main(
    owner_id: str,
    filters: BetFilters,
    previous: bool = False,
    output_file: str | None = None,
) -> None:
    """
    Compute and print a stats report.

    Args:
        owner_id: Whose bets to report on
        filters: Period and category filters
        previous: Report the period before the current one instead
        output_file: Optional file path to save report
    """
    setup_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )
    bind_context(owner_id=owner_id)
    store = create_store(settings)
    await store.initialize()

    try:
        text = await build_report(LedgerService(store), owner_id, filters, previous)
        print("\n" + text + "\n")

        if output_file:
            output_path = Path(output_file)
            output_path.write_text(text, encoding="utf-8")
            logger.info("Report saved to file", path=str(output_path))

    finally:
        await store.close()
        clear_context()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print bet statistics for an owner")

    parser.add_argument("--owner", required=True, help="Owner (user) id")
    parser.add_argument(
        "--period",
        choices=[p.value for p in Period],
        default=None,
        help="Relative period, also sets the bucket size (default: all bets, daily buckets)",
    )
    parser.add_argument("--month", help="Specific month (YYYY-MM)")
    parser.add_argument("--year", help="Specific year (YYYY)")
    parser.add_argument("--start-date", help="Window start (ISO date or datetime)")
    parser.add_argument("--end-date", help="Window end (ISO date or datetime)")
    parser.add_argument("--bet-type", help="Only this bet type")
    parser.add_argument("--house", help="Only this betting house")
    parser.add_argument(
        "--previous",
        action="store_true",
        help="Report the previous day/month/year instead of the current one (default: daily)",
    )
    parser.add_argument("--output", "-o", type=str, help="Save report to file")
    return parser


def filters_from_args(args: argparse.Namespace) -> BetFilters:
    """
    Raises:
        ValidationError: on a bad period, bet type or date
    """
    return BetFilters(
        bet_type=args.bet_type,
        house=args.house,
        start_date=args.start_date,
        end_date=args.end_date,
        period=args.period,
        month=args.month,
        year=args.year,
    )


if __name__ == "__main__":
    args = build_parser().parse_args()

    try:
        asyncio.run(
            main(
                owner_id=args.owner,
                filters=filters_from_args(args),
                previous=args.previous,
                output_file=args.output,
            )
        )
    except LedgerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
