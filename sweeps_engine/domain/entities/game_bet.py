"""Game bet entity"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sweeps_engine.domain.entities.game_result import GameResult
from sweeps_engine.domain.enums import BetStatus, Currency, GameCategory
from sweeps_engine.domain.exceptions import InvalidBetState


@dataclass
class GameBet:
    """A stake placed on one game round"""

    id: str
    user_id: str
    game_id: str
    category: GameCategory
    currency: Currency
    amount: float
    timestamp: float
    session_id: Optional[str] = None
    status: BetStatus = BetStatus.PROCESSING
    result: Optional[GameResult] = None
    # Game-specific data such as a sportsbook selection
    game_data: Dict[str, Any] = field(default_factory=dict)

    def await_event(self) -> None:
        """Hold a sportsbook bet open until its event is settled"""
        if self.status != BetStatus.PROCESSING:
            raise InvalidBetState(f"Bet {self.id} is {self.status.value}")
        self.status = BetStatus.PENDING

    def complete(self, result: GameResult) -> None:
        if self.status not in (BetStatus.PROCESSING, BetStatus.PENDING, BetStatus.FAILED):
            raise InvalidBetState(f"Bet {self.id} is already {self.status.value}")
        if result.bet_id != self.id:
            raise InvalidBetState(f"Result {result.id} belongs to bet {result.bet_id}, not {self.id}")
        self.result = result
        self.status = BetStatus.COMPLETED

    def fail(self) -> None:
        if self.status == BetStatus.COMPLETED:
            raise InvalidBetState(f"Bet {self.id} is already completed")
        self.status = BetStatus.FAILED

    @property
    def is_settled(self) -> bool:
        return self.status == BetStatus.COMPLETED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "game_id": self.game_id,
            "category": self.category.value,
            "currency": self.currency.value,
            "amount": self.amount,
            "timestamp": self.timestamp,
            "session_id": self.session_id,
            "status": self.status.value,
            "result_id": self.result.id if self.result else None,
            "game_data": self.game_data,
        }
