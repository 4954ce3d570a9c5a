"""Game result entity"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict

from sweeps_engine.domain.enums import Outcome
from sweeps_engine.domain.exceptions import InvalidGeneratorOutput


@dataclass
class GameResult:
    """Domain entity representing the settled outcome of one bet"""

    id: str
    bet_id: str
    outcome: Outcome
    win_amount: float
    multiplier: float
    timestamp: float
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        result_id: str,
        bet_id: str,
        bet_amount: float,
        win_amount: float,
        timestamp: float,
        details: Dict[str, Any] = None,
        push: bool = False,
    ) -> 'GameResult':
        """Build a result whose outcome and multiplier follow from the win amount"""
        if not isinstance(win_amount, (int, float)) or math.isnan(win_amount) or math.isinf(win_amount):
            raise InvalidGeneratorOutput(f"Win amount must be a finite number, got {win_amount!r}")
        if win_amount < 0:
            raise InvalidGeneratorOutput(f"Win amount must not be negative, got {win_amount}")
        if push and win_amount > 0:
            raise InvalidGeneratorOutput("A push cannot carry a win amount")

        if win_amount > 0:
            outcome = Outcome.WIN
            multiplier = win_amount / bet_amount
        else:
            outcome = Outcome.PUSH if push else Outcome.LOSE
            multiplier = 0

        return cls(
            id=result_id,
            bet_id=bet_id,
            outcome=outcome,
            win_amount=win_amount,
            multiplier=multiplier,
            timestamp=timestamp,
            details=details or {},
        )

    @property
    def is_win(self) -> bool:
        return self.outcome == Outcome.WIN

    def to_dict(self) -> dict:
        """Convert to dictionary for publishing"""
        return {
            "id": self.id,
            "bet_id": self.bet_id,
            "outcome": self.outcome.value,
            "win_amount": self.win_amount,
            "multiplier": self.multiplier,
            "details": self.details,
            "timestamp": self.timestamp,
        }
