"""Simplified table-game resolver

The outcome is a weighted coin flip modelling the house edge. Hands are
synthesised for display only and never influence the result; a rule-accurate
engine can replace SimplifiedTableStrategy behind the TableStrategy interface.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from sweeps_engine.domain.enums import TableGameType
from sweeps_engine.domain.generators.random_source import RandomSource

DEFAULT_WIN_PROBABILITY = 0.47

PAYOUT_MULTIPLIERS: Dict[TableGameType, int] = {
    TableGameType.BLACKJACK: 2,
    TableGameType.ROULETTE: 35,
    TableGameType.BACCARAT: 2,
    TableGameType.POKER: 5,
}

RANKS = ['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']
SUITS = ['♠', '♥', '♦', '♣']
RED_NUMBERS = {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}


@dataclass
class TableRound:
    """Outcome of one table-game round"""

    game_type: TableGameType
    outcome: str
    win_amount: float
    multiplier: int
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_push(self) -> bool:
        return self.outcome == "push"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_type": self.game_type.value,
            "outcome": self.outcome,
            "winnings": self.win_amount,
            "multiplier": self.multiplier,
            "details": self.details
        }


class TableStrategy(ABC):
    """Resolves a table-game bet into a win, lose or push"""

    @abstractmethod
    def resolve(self, game_type: TableGameType, bet_amount: float) -> TableRound:
        pass


class SimplifiedTableStrategy(TableStrategy):
    """House-edge coin flip with a nominal payout multiplier per game type"""

    def __init__(
        self,
        random_source: RandomSource,
        win_probability: float = DEFAULT_WIN_PROBABILITY,
        push_probability: float = 0.0,
        multipliers: Dict[TableGameType, int] = None
    ):
        if not 0 <= win_probability <= 1 or not 0 <= push_probability <= 1 - win_probability:
            raise ValueError(
                f"Invalid probabilities: win={win_probability}, push={push_probability}"
            )
        self.random_source = random_source
        self.win_probability = win_probability
        self.push_probability = push_probability
        self.multipliers = multipliers or PAYOUT_MULTIPLIERS

    def resolve(self, game_type: TableGameType, bet_amount: float) -> TableRound:
        draw = self.random_source.next()
        multiplier = self.multipliers.get(game_type, 2)

        if draw < self.win_probability:
            outcome, win_amount = "win", bet_amount * multiplier
        elif draw < self.win_probability + self.push_probability:
            outcome, win_amount = "push", 0
        else:
            outcome, win_amount = "lose", 0

        return TableRound(
            game_type=game_type,
            outcome=outcome,
            win_amount=win_amount,
            multiplier=multiplier,
            details=self._synthesise_details(game_type)
        )

    def _deal(self, count: int) -> List[str]:
        return [f"{self.random_source.choice(RANKS)}{self.random_source.choice(SUITS)}" for _ in range(count)]

    def _synthesise_details(self, game_type: TableGameType) -> Dict[str, Any]:
        """Plausible cards or spin for display; independent of the outcome"""
        if game_type == TableGameType.BLACKJACK:
            return {"player_hand": self._deal(2), "dealer_hand": self._deal(2)}
        if game_type == TableGameType.BACCARAT:
            return {"player_hand": self._deal(2), "banker_hand": self._deal(2)}
        if game_type == TableGameType.POKER:
            return {"player_hand": self._deal(5)}

        number = self.random_source.randint(0, 36)
        colour = 'green' if number == 0 else ('red' if number in RED_NUMBERS else 'black')
        return {"number": number, "colour": colour}


class TableGenerator:
    """Dispatches each game type to its strategy, falling back to a default"""

    def __init__(self, default_strategy: TableStrategy, strategies: Dict[TableGameType, TableStrategy] = None):
        self.default_strategy = default_strategy
        self.strategies = dict(strategies or {})

    def register(self, game_type: TableGameType, strategy: TableStrategy) -> None:
        self.strategies[game_type] = strategy

    def resolve(self, game_type: TableGameType, bet_amount: float) -> TableRound:
        strategy = self.strategies.get(game_type, self.default_strategy)
        return strategy.resolve(game_type, bet_amount)
