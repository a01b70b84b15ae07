"""
Bet data models.

A bet is the only entity in the ledger. Profit is always derived from
stake, payout and status, never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Union

from betledger.errors import ValidationError

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")

# Raw amounts as they may come out of a store (JSON keeps strings)
Amount = Union[Decimal, str, int, float]


class BetStatus(str, Enum):
    """Bet lifecycle status. Any status may move to any other."""

    PENDING = "pending"
    COMPLETED = "completed"
    LOST = "lost"

    @classmethod
    def parse(cls, value: Union["BetStatus", str]) -> "BetStatus":
        """Parse a status string, raising ValidationError for unknown ones."""
        if isinstance(value, BetStatus):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid status: {value!r}", field="status") from None

    @property
    def is_finished(self) -> bool:
        """Completed and lost bets count towards the stats."""
        return self != BetStatus.PENDING


class BetType(str, Enum):
    """Bet categories. Informational only."""

    SUREBET = "surebet"
    GIROS = "giros"
    SUPERODD = "superodd"
    DNC = "dnc"
    GASTOS = "gastos"
    BINGOS = "bingos"
    EXTRACAO = "extracao"

    @classmethod
    def parse(cls, value: Union["BetType", str]) -> "BetType":
        if isinstance(value, BetType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid bet type: {value!r}", field="betType") from None

    @property
    def label(self) -> str:
        """Display label."""
        return BET_TYPE_LABELS[self]


BET_TYPE_LABELS = {
    BetType.SUREBET: "Surebet",
    BetType.GIROS: "Giros grátis",
    BetType.SUPERODD: "Superodd",
    BetType.DNC: "DNC",
    BetType.GASTOS: "Gastos",
    BetType.BINGOS: "Bingos",
    BetType.EXTRACAO: "Extração de FB",
}


def to_amount(value: Amount) -> Decimal:
    """
    Parse a monetary amount into a 2 dp Decimal.

    Floats go through str() so 0.1 stays 0.10 instead of its binary expansion.

    Raises:
        ValueError: if the value is not a finite number or its magnitude
            exceeds MAX_AMOUNT
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not an amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not an amount: {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount out of range: {value!r}")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def utcnow() -> datetime:
    """Current time, timezone aware."""
    return datetime.now(timezone.utc)


@dataclass
class Bet:
    """A single recorded bet."""

    id: str
    owner_id: str
    stake: Amount
    bet_type: BetType
    placed_at: datetime
    status: BetStatus = BetStatus.PENDING
    payout: Optional[Amount] = None

    house: Optional[str] = None
    description: Optional[str] = None

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def is_finished(self) -> bool:
        return self.status.is_finished

    @property
    def profit(self) -> Decimal:
        """
        Profit derived from the current status.

        completed -> payout - stake, lost -> -stake, pending -> 0.

        Raises:
            ValueError: if the amounts needed for this status are unreadable
        """
        if self.status == BetStatus.PENDING:
            return ZERO
        stake = to_amount(self.stake)
        if self.status == BetStatus.LOST:
            return -stake
        if self.payout is None:
            raise ValueError("completed bet has no payout")
        return to_amount(self.payout) - stake

    def to_dict(self) -> dict:
        """Wire representation with camelCase keys, amounts as strings."""
        try:
            profit: Optional[str] = str(self.profit)
        except ValueError:
            profit = None
        return {
            "id": self.id,
            "userId": self.owner_id,
            "stake": None if self.stake is None else str(self.stake),
            "payout": None if self.payout is None else str(self.payout),
            "profit": profit,
            "betType": self.bet_type.value,
            "status": self.status.value,
            "house": self.house,
            "description": self.description,
            "placedAt": self.placed_at.isoformat(),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass
class NewBet:
    """Input for creating a bet. Status always starts as pending."""

    stake: Decimal
    bet_type: BetType
    placed_at: datetime
    payout: Optional[Decimal] = None
    house: Optional[str] = None
    description: Optional[str] = None
