"""
SQLAlchemy ORM models for database tables.

Defines the database schema using SQLAlchemy 2.0 style.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Index, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class BetRecord(Base):
    """All bets recorded by all users."""

    __tablename__ = "bets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Amounts
    stake: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payout: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))

    # Classification
    bet_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    house: Mapped[Optional[str]] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(String(255))

    # Timestamps, stored as UTC
    placed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        Index("idx_bets_owner", "owner_id"),
        Index("idx_bets_owner_placed", "owner_id", "placed_at"),
        Index("idx_bets_status", "status"),
    )
