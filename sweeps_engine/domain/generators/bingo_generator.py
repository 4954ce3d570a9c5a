"""Bingo card generation and prize computation"""
import uuid
from typing import Callable, List, Tuple

from sweeps_engine.domain.entities.bingo import BingoCard, BingoPattern, Grid
from sweeps_engine.domain.enums import BallType
from sweeps_engine.domain.generators.random_source import RandomSource

FREE_SPACE = (2, 2)

NINETY_BALL_ROWS = 3
NINETY_BALL_COLUMNS = 9
NINETY_BALL_NUMBERS_PER_ROW = 5

# Prizes are expressed for a standard 100-coin card and scale with the card cost
STANDARD_CARD_COST = 100
LINE_PRIZE = 50
DIAGONAL_PRIZE = 100


def _new_card_id() -> str:
    return f"card-{uuid.uuid4().hex[:12]}"


class BingoCardGenerator:
    """Generates cards whose columns respect each ball type's number ranges"""

    def __init__(self, random_source: RandomSource, id_factory: Callable[[], str] = _new_card_id):
        self.random_source = random_source
        self.id_factory = id_factory

    def generate(self, ball_type: BallType, cost: float = 0) -> BingoCard:
        if ball_type == BallType.BALL_75:
            numbers = self._generate_75_ball()
        elif ball_type == BallType.BALL_90:
            numbers = self._generate_90_ball()
        else:
            numbers = self._generate_30_ball()
        return BingoCard(id=self.id_factory(), ball_type=ball_type, numbers=numbers, cost=cost)

    def _generate_75_ball(self) -> Grid:
        """5x5 grid, column c drawn from [15c+1, 15c+15], free centre"""
        grid: Grid = [[None] * 5 for _ in range(5)]
        for col in range(5):
            low = col * 15 + 1
            column = sorted(self.random_source.sample(range(low, low + 15), 5))
            for row in range(5):
                grid[row][col] = None if (row, col) == FREE_SPACE else column[row]
        return grid

    def _generate_90_ball(self) -> Grid:
        """3x9 grid of 15 numbers: five per row, at least one per column"""
        counts = [1] * NINETY_BALL_COLUMNS
        extra = NINETY_BALL_ROWS * NINETY_BALL_NUMBERS_PER_ROW - NINETY_BALL_COLUMNS
        while extra:
            col = self.random_source.randint(0, NINETY_BALL_COLUMNS - 1)
            if counts[col] < NINETY_BALL_ROWS:
                counts[col] += 1
                extra -= 1

        grid: Grid = [[None] * NINETY_BALL_COLUMNS for _ in range(NINETY_BALL_ROWS)]
        capacity = [NINETY_BALL_NUMBERS_PER_ROW] * NINETY_BALL_ROWS

        # Fullest columns first, each into the rows with most room left
        order = sorted(range(NINETY_BALL_COLUMNS), key=lambda c: (-counts[c], self.random_source.next()))
        for col in order:
            rows = sorted(
                range(NINETY_BALL_ROWS),
                key=lambda r: (-capacity[r], self.random_source.next())
            )[:counts[col]]
            low, high = self.column_range_90(col)
            values = sorted(self.random_source.sample(range(low, high + 1), counts[col]))
            for row, value in zip(sorted(rows), values):
                grid[row][col] = value
                capacity[row] -= 1
        return grid

    def _generate_30_ball(self) -> Grid:
        values = self.random_source.sample(range(1, 31), 9)
        return [values[row * 3:row * 3 + 3] for row in range(3)]

    @staticmethod
    def column_range_90(col: int) -> Tuple[int, int]:
        low = col * 10 + 1
        high = 90 if col == NINETY_BALL_COLUMNS - 1 else col * 10 + 10
        return low, high


def compute_prize(card: BingoCard, pattern: BingoPattern) -> Tuple[float, List[str]]:
    """Prize for a card against the active pattern, with the completed lines

    Special patterns pay their configured payout. Other patterns pay per
    completed structural line, falling back to the pattern payout when the
    pattern can be satisfied without completing a line.
    """
    if not card.satisfies(pattern):
        return 0, []

    scale = card.cost / STANDARD_CARD_COST if card.cost else 1
    lines = card.completed_lines()
    if pattern.special:
        return pattern.payout * scale, lines

    units = sum(DIAGONAL_PRIZE if line.startswith("Diagonal") else LINE_PRIZE for line in lines)
    if not units:
        units = pattern.payout
    return units * scale, lines
