"""Data models for the bet ledger."""

from betledger.models.bet import (
    BET_TYPE_LABELS,
    Amount,
    Bet,
    BetStatus,
    BetType,
    NewBet,
    to_amount,
)
from betledger.models.stats import (
    BetFilters,
    BetStats,
    Period,
    ProfitBucket,
)

__all__ = [
    # Bet models
    "BET_TYPE_LABELS",
    "Amount",
    "Bet",
    "BetStatus",
    "BetType",
    "NewBet",
    "to_amount",
    # Stats models
    "BetFilters",
    "BetStats",
    "Period",
    "ProfitBucket",
]
