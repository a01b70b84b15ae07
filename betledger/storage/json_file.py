"""
JSON file bet store with atomic writes to <dir>/bets.json.

The whole ledger lives in one document: a monotonic id counter and the
bet list. Amounts are kept as strings, exactly as entered.
"""

import json
import shutil
import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from config.logging_config import get_logger
from betledger.errors import NotFoundError
from betledger.models import Bet, BetStatus, BetType, NewBet
from betledger.models.bet import utcnow
from betledger.stats.periods import TimeWindow, assume_utc, localize
from betledger.storage.base import BetStore, filter_bets

logger = get_logger(__name__)

BETS_FILENAME = "bets.json"


class StoredBet(BaseModel):
    """One bet as written to the JSON file."""

    id: str
    owner_id: str
    # Written as strings; numbers or nulls from hand edits are read as-is
    stake: Optional[Union[str, int, float]]
    payout: Optional[Union[str, int, float]] = None
    bet_type: str
    status: str = BetStatus.PENDING.value
    house: Optional[str] = None
    description: Optional[str] = None
    placed_at: datetime
    created_at: datetime
    updated_at: datetime

    def to_bet(self) -> Bet:
        return Bet(
            id=self.id,
            owner_id=self.owner_id,
            stake=self.stake,
            payout=self.payout,
            bet_type=BetType(self.bet_type),
            status=BetStatus(self.status),
            house=self.house,
            description=self.description,
            placed_at=assume_utc(self.placed_at),
            created_at=assume_utc(self.created_at),
            updated_at=assume_utc(self.updated_at),
        )


class LedgerDocument(BaseModel):
    """Complete file contents."""

    counter: int = 1
    bets: list[StoredBet] = Field(default_factory=list)


class JsonFileBetStore(BetStore):
    """File-backed store. Every call re-reads the file, so instances share data."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.path = self.directory / BETS_FILENAME

    async def initialize(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info("Using JSON bet store", path=str(self.path))

    def _load(self) -> LedgerDocument:
        if not self.path.exists():
            return LedgerDocument()
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            logger.warning("Empty bets file, starting fresh", path=str(self.path))
            return LedgerDocument()
        return LedgerDocument.model_validate_json(raw)

    def _save(self, document: LedgerDocument) -> None:
        """Write to a temp file in the same directory, then rename over the original."""
        self.directory.mkdir(parents=True, exist_ok=True)
        temp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=self.directory,
                delete=False,
                suffix=".json",
                encoding="utf-8",
            ) as temp_file:
                json.dump(document.model_dump(mode="json"), temp_file, indent=2, ensure_ascii=False)
                temp_path = Path(temp_file.name)

            shutil.move(str(temp_path), str(self.path))
        except Exception as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            logger.error("Failed to save bets file", path=str(self.path), error=str(e))
            raise

    @staticmethod
    def _find(document: LedgerDocument, owner_id: str, bet_id: str) -> int:
        for index, stored in enumerate(document.bets):
            if stored.id == bet_id and stored.owner_id == owner_id:
                return index
        raise NotFoundError(bet_id)

    async def list_bets(
        self,
        owner_id: str,
        bet_type: Optional[BetType] = None,
        house: Optional[str] = None,
        window: Optional[TimeWindow] = None,
    ) -> list[Bet]:
        document = self._load()
        bets = [s.to_bet() for s in document.bets if s.owner_id == owner_id]
        return filter_bets(bets, owner_id, bet_type, house, window)

    async def get_bet(self, owner_id: str, bet_id: str) -> Bet:
        document = self._load()
        return document.bets[self._find(document, owner_id, bet_id)].to_bet()

    async def create_bet(self, owner_id: str, new_bet: NewBet) -> Bet:
        document = self._load()
        now = utcnow()
        stored = StoredBet(
            id=f"bet-{document.counter}",
            owner_id=owner_id,
            stake=str(new_bet.stake),
            payout=None if new_bet.payout is None else str(new_bet.payout),
            bet_type=new_bet.bet_type.value,
            house=new_bet.house,
            description=new_bet.description,
            placed_at=localize(new_bet.placed_at),
            created_at=now,
            updated_at=now,
        )
        document.counter += 1
        document.bets.append(stored)
        self._save(document)
        return stored.to_bet()

    async def update_status(
        self,
        owner_id: str,
        bet_id: str,
        status: BetStatus,
        payout: Optional[Decimal] = None,
    ) -> Bet:
        document = self._load()
        stored = document.bets[self._find(document, owner_id, bet_id)]
        stored.status = status.value
        if payout is not None:
            stored.payout = str(payout)
        stored.updated_at = utcnow()
        self._save(document)
        return stored.to_bet()

    async def delete_bet(self, owner_id: str, bet_id: str) -> None:
        document = self._load()
        del document.bets[self._find(document, owner_id, bet_id)]
        self._save(document)
