"""Application services."""

from betledger.services.ledger import LedgerService

__all__ = [
    "LedgerService",
]
