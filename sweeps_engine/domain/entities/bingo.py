"""Bingo card and pattern entities"""
from dataclasses import dataclass, field
from typing import List, Optional, Set

from sweeps_engine.domain.enums import BallType

Grid = List[List[Optional[int]]]


@dataclass(frozen=True)
class BingoPattern:
    """Boolean grid of the cells a card must cover to win"""

    id: str
    name: str
    description: str
    pattern: List[List[bool]]
    payout: float
    difficulty: str
    special: bool
    min_numbers: int = 0

    @property
    def shape(self) -> tuple:
        return len(self.pattern), len(self.pattern[0]) if self.pattern else 0

    @property
    def covers_full_line(self) -> bool:
        """True when at least one whole row or column of the pattern is required"""
        if any(all(row) for row in self.pattern):
            return True
        return any(all(row[c] for row in self.pattern) for c in range(self.shape[1]))


@dataclass
class BingoCard:
    """A player's bingo card; null cells are free or blank and always count as covered"""

    id: str
    ball_type: BallType
    numbers: Grid
    cost: float = 0
    marked: Set[int] = field(default_factory=set)
    auto_mark: bool = True
    active: bool = True

    @property
    def shape(self) -> tuple:
        return len(self.numbers), len(self.numbers[0]) if self.numbers else 0

    @property
    def populated_numbers(self) -> List[int]:
        return [n for row in self.numbers for n in row if n is not None]

    def contains(self, number: int) -> bool:
        return any(number in row for row in self.numbers)

    def auto_mark_number(self, number: int) -> bool:
        """Mark a called number when auto-mark is on; returns True if the card changed"""
        if not (self.auto_mark and self.active) or number in self.marked:
            return False
        if not self.contains(number):
            return False
        self.marked.add(number)
        return True

    def toggle_mark(self, number: int) -> bool:
        """Manually mark or unmark a number; False when the number is not on the card"""
        if not self.contains(number):
            return False
        if number in self.marked:
            self.marked.discard(number)
        else:
            self.marked.add(number)
        return True

    def is_covered(self, row: int, col: int) -> bool:
        number = self.numbers[row][col]
        return number is None or number in self.marked

    def satisfies(self, pattern: BingoPattern) -> bool:
        """Every true cell of the pattern must be free or marked on this card"""
        if pattern.shape != self.shape:
            raise ValueError(
                f"Pattern {pattern.id} is {pattern.shape[0]}x{pattern.shape[1]}, "
                f"card is {self.shape[0]}x{self.shape[1]}"
            )
        for r, pattern_row in enumerate(pattern.pattern):
            for c, required in enumerate(pattern_row):
                if required and not self.is_covered(r, c):
                    return False
        return True

    def completed_lines(self) -> List[str]:
        """Names of the complete structural lines

        Rows count on every card; columns and diagonals only on square cards.
        """
        rows, cols = self.shape
        lines = [f"Row {r + 1}" for r in range(rows) if all(self.is_covered(r, c) for c in range(cols))]
        if rows != cols:
            return lines

        lines.extend(
            f"Column {c + 1}" for c in range(cols) if all(self.is_covered(r, c) for r in range(rows))
        )
        if all(self.is_covered(i, i) for i in range(rows)):
            lines.append("Diagonal 1")
        if all(self.is_covered(i, cols - 1 - i) for i in range(rows)):
            lines.append("Diagonal 2")
        return lines

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ball_type": self.ball_type.value,
            "numbers": self.numbers,
            "marked": sorted(self.marked),
            "cost": self.cost,
            "auto_mark": self.auto_mark,
            "active": self.active,
        }
