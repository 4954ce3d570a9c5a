"""Slot machine symbols configuration"""
from dataclasses import dataclass
from typing import Dict, List


@dataclass
class SlotSymbols:
    """Slot machine symbol alphabet with base and count multipliers"""

    SYMBOLS: List[str] = None
    MULTIPLIERS: Dict[str, int] = None
    COUNT_MULTIPLIERS: Dict[int, int] = None

    def __post_init__(self):
        # Tables passed to the constructor win over the defaults below
        if self.SYMBOLS is None:
            # Drawn uniformly, so every symbol is equally likely on every cell
            self.SYMBOLS = ['🍒', '🍋', '🍊', '🍇', '⭐', '💎', '7️⃣', '🔔']

        if self.MULTIPLIERS is None:
            self.MULTIPLIERS = {
                '🍒': 3,
                '🍋': 5,
                '🍊': 8,
                '🍇': 10,
                '🔔': 15,
                '⭐': 25,
                '7️⃣': 50,
                '💎': 100
            }

        if self.COUNT_MULTIPLIERS is None:
            # Matching symbols on the payline -> multiplier applied on top of the base
            self.COUNT_MULTIPLIERS = {
                3: 1,
                4: 5,
                5: 10
            }

    def get_multiplier(self, symbol: str) -> int:
        """Get base payout multiplier for a symbol"""
        return self.MULTIPLIERS.get(symbol, 2)

    def get_count_multiplier(self, count: int) -> int:
        """Get multiplier for the number of matching symbols, 0 below three"""
        if count < 3:
            return 0
        return self.COUNT_MULTIPLIERS[min(count, 5)]
