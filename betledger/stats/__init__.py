"""Period resolution and stats aggregation."""

from betledger.stats.engine import (
    aggregate,
    available_months,
    available_years,
    compute_previous_stats,
    compute_stats,
)
from betledger.stats.periods import (
    Granularity,
    TimeWindow,
    bucket_key,
    current_window,
    granularity_for,
    parse_placed_at,
    resolve_previous_window,
    resolve_window,
    to_reference,
)

__all__ = [
    # Engine
    "aggregate",
    "available_months",
    "available_years",
    "compute_previous_stats",
    "compute_stats",
    # Periods
    "Granularity",
    "TimeWindow",
    "bucket_key",
    "current_window",
    "granularity_for",
    "parse_placed_at",
    "resolve_previous_window",
    "resolve_window",
    "to_reference",
]
