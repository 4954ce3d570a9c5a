"""Game round response DTO"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sweeps_engine.domain.entities.game_bet import GameBet
from sweeps_engine.domain.entities.game_result import GameResult


@dataclass
class PlayResponse:
    """Response DTO for any game round"""

    bet: GameBet
    result: Optional[GameResult] = None
    game: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        response = {
            "bet": self.bet.to_dict(),
            "game": self.game
        }
        if self.result:
            response["result"] = self.result.to_dict()
        return response
