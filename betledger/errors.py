"""
Ledger exception hierarchy.

- LedgerError: base for everything raised by the ledger
- ValidationError: malformed caller input (filters, status, amounts)
- NotFoundError: bet id missing or owned by someone else
- DataCorruptionWarning: one stored record is unreadable, non-fatal
"""

from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger errors."""

    pass


class ValidationError(LedgerError):
    """Caller supplied input that cannot be used."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(LedgerError):
    """Bet does not exist for this owner."""

    def __init__(self, bet_id: str):
        super().__init__(f"Bet not found: {bet_id}")
        self.bet_id = bet_id


class DataCorruptionWarning(UserWarning):
    """A stored bet has amounts that cannot be aggregated."""

    def __init__(self, bet_id: str, reason: str):
        super().__init__(f"Skipping bet {bet_id}: {reason}")
        self.bet_id = bet_id
        self.reason = reason
