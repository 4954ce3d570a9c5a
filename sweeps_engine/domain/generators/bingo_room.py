"""Bingo number caller and room"""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from sweeps_engine.domain.entities.bingo import BingoCard, BingoPattern
from sweeps_engine.domain.enums import BallType
from sweeps_engine.domain.generators.random_source import RandomSource

DEFAULT_RECENT_CALLS = 5


class NumberCaller:
    """Draws unique numbers from [1, max_number] until none remain"""

    def __init__(self, max_number: int, random_source: RandomSource, history_limit: int = DEFAULT_RECENT_CALLS):
        self.max_number = max_number
        self.random_source = random_source
        self.called: List[int] = []
        self.recent: Deque[int] = deque(maxlen=history_limit)
        self._remaining = list(range(1, max_number + 1))

    @property
    def exhausted(self) -> bool:
        return not self._remaining

    def call(self) -> Optional[int]:
        if self.exhausted:
            return None
        number = self._remaining.pop(self.random_source.randint(0, len(self._remaining) - 1))
        self.called.append(number)
        self.recent.append(number)
        return number


@dataclass
class CallResult:
    number: Optional[int]
    new_winners: List[BingoCard] = field(default_factory=list)


class BingoRoom:
    """One bingo game: a caller, an active pattern and the cards in play"""

    def __init__(
        self,
        room_id: str,
        ball_type: BallType,
        pattern: BingoPattern,
        random_source: RandomSource,
        history_limit: int = DEFAULT_RECENT_CALLS
    ):
        self.id = room_id
        self.ball_type = ball_type
        self.pattern = pattern
        self.caller = NumberCaller(ball_type.max_number, random_source, history_limit)
        self.cards: List[BingoCard] = []
        self.winners: List[BingoCard] = []

    @property
    def called_numbers(self) -> List[int]:
        return list(self.caller.called)

    @property
    def recent_calls(self) -> List[int]:
        return list(self.caller.recent)

    @property
    def game_over(self) -> bool:
        return bool(self.winners) or self.caller.exhausted

    def add_card(self, card: BingoCard) -> None:
        if card.ball_type != self.ball_type:
            raise ValueError(f"Card {card.id} is {card.ball_type.value}, room plays {self.ball_type.value}")
        self.cards.append(card)

    def call_next(self) -> CallResult:
        """Call one number, auto-mark cards and report cards that now satisfy the pattern"""
        number = self.caller.call()
        result = CallResult(number=number)
        if number is None:
            return result

        for card in self.cards:
            card.auto_mark_number(number)

        winner_ids = {card.id for card in self.winners}
        for card in self.cards:
            if card.active and card.id not in winner_ids and card.satisfies(self.pattern):
                self.winners.append(card)
                winner_ids.add(card.id)
                result.new_winners.append(card)
        return result

    def play(self, max_calls: int) -> List[BingoCard]:
        """Call until a card wins, numbers run out or max_calls is reached"""
        calls = 0
        while calls < max_calls and not self.game_over:
            self.call_next()
            calls += 1
        return list(self.winners)
