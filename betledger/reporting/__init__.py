"""Reporting module."""

from betledger.reporting.formatters import (
    format_currency,
    format_currency_with_sign,
    format_percentage,
)
from betledger.reporting.summary import (
    StatsReportFormatter,
    report_formatter,
)

__all__ = [
    "StatsReportFormatter",
    "format_currency",
    "format_currency_with_sign",
    "format_percentage",
    "report_formatter",
]
