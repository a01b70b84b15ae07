"""Database module."""

from betledger.database.connection import DatabaseConnection
from betledger.database.repositories import BetRepository, record_to_bet
from betledger.database.schema import Base, BetRecord

__all__ = [
    # Connection
    "DatabaseConnection",
    # Repositories
    "BetRepository",
    "record_to_bet",
    # Schema
    "Base",
    "BetRecord",
]
