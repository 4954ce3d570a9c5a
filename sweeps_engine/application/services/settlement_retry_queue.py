"""Holding area for results whose winnings could not be credited"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional

from sweeps_engine.domain.entities.game_bet import GameBet
from sweeps_engine.domain.entities.game_result import GameResult


@dataclass
class PendingSettlement:
    bet: GameBet
    result: GameResult
    attempts: int = 1
    last_error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "bet_id": self.bet.id,
            "user_id": self.bet.user_id,
            "currency": self.bet.currency.value,
            "win_amount": self.result.win_amount,
            "attempts": self.attempts,
            "last_error": self.last_error
        }


class SettlementRetryQueue:
    """In-process queue of unsettled wins keyed by bet id, oldest first"""

    def __init__(self):
        self._pending: Dict[str, PendingSettlement] = OrderedDict()

    def __len__(self) -> int:
        return len(self._pending)

    def add(self, bet: GameBet, result: GameResult, error: str) -> PendingSettlement:
        entry = self._pending.get(bet.id)
        if entry is None:
            entry = PendingSettlement(bet=bet, result=result, last_error=error)
            self._pending[bet.id] = entry
        else:
            entry.attempts += 1
            entry.last_error = error
        return entry

    def remove(self, bet_id: str) -> None:
        self._pending.pop(bet_id, None)

    def pending(self) -> List[PendingSettlement]:
        return list(self._pending.values())
