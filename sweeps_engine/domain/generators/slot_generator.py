"""Slot reel and payline evaluator"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sweeps_engine.domain.entities.slot_symbols import SlotSymbols
from sweeps_engine.domain.generators.random_source import RandomSource

REEL_COUNT = 5
ROW_COUNT = 3
PAYLINE_ROW = 1

BONUS_PROBABILITY = 0.05
BONUS_MIN_MULTIPLIER = 2
BONUS_MAX_MULTIPLIER = 7
FREE_SPINS_PROBABILITY = 0.03
FREE_SPINS_MIN = 5
FREE_SPINS_MAX = 14


@dataclass
class PaylineWin:
    line: int
    symbols: List[str]
    multiplier: int
    payout: float

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "symbols": self.symbols,
            "multiplier": self.multiplier,
            "payout": self.payout
        }


@dataclass
class SlotSpin:
    """Outcome of one spin"""

    reels: List[List[str]]
    paylines: List[PaylineWin] = field(default_factory=list)
    total_win: float = 0
    is_bonus: bool = False
    bonus_win: float = 0
    is_free_spins: bool = False
    free_spins_remaining: Optional[int] = None

    @property
    def payline_symbols(self) -> List[str]:
        return [reel[PAYLINE_ROW] for reel in self.reels]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reels": self.reels,
            "paylines": [p.to_dict() for p in self.paylines],
            "total_win": self.total_win,
            "is_bonus": self.is_bonus,
            "bonus_win": self.bonus_win,
            "is_free_spins": self.is_free_spins,
            "free_spins_remaining": self.free_spins_remaining
        }


class SlotGenerator:
    """5x3 reel generator evaluating the middle row as the only payline"""

    def __init__(self, random_source: RandomSource, symbols: SlotSymbols = None):
        self.random_source = random_source
        self.slot_symbols = symbols or SlotSymbols()

    def spin(self, bet_amount: float) -> SlotSpin:
        reels = [
            [self.random_source.choice(self.slot_symbols.SYMBOLS) for _ in range(ROW_COUNT)]
            for _ in range(REEL_COUNT)
        ]
        spin = SlotSpin(reels=reels)

        line_win = self.evaluate_line(spin.payline_symbols, bet_amount)
        if line_win:
            spin.paylines.append(line_win)
            spin.total_win += line_win.payout

        # Bonus and free spins trigger independently of the payline
        spin.is_bonus = self.random_source.chance(BONUS_PROBABILITY)
        spin.is_free_spins = self.random_source.chance(FREE_SPINS_PROBABILITY)

        if spin.is_bonus:
            spin.bonus_win = bet_amount * self.random_source.uniform(BONUS_MIN_MULTIPLIER, BONUS_MAX_MULTIPLIER)
            spin.total_win += spin.bonus_win

        if spin.is_free_spins:
            spin.free_spins_remaining = self.random_source.randint(FREE_SPINS_MIN, FREE_SPINS_MAX)

        return spin

    def evaluate_line(self, line: List[str], bet_amount: float) -> Optional[PaylineWin]:
        """Pay the first symbol appearing at least three times on the line"""
        for symbol, count in Counter(line).items():
            if count >= 3:
                multiplier = self.slot_symbols.get_multiplier(symbol) * self.slot_symbols.get_count_multiplier(count)
                return PaylineWin(
                    line=1,
                    symbols=list(line),
                    multiplier=multiplier,
                    payout=bet_amount * multiplier
                )
        return None
