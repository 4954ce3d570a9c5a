"""Bingo pattern catalogue"""
from typing import Dict, List

from sweeps_engine.domain.entities.bingo import BingoPattern
from sweeps_engine.domain.enums import BallType
from sweeps_engine.domain.exceptions import UnknownPattern

T, F = True, False


def _grid(rows: int, cols: int, fill: bool) -> List[List[bool]]:
    return [[fill] * cols for _ in range(rows)]


def standard_75_ball_patterns() -> List[BingoPattern]:
    return [
        BingoPattern(
            id="line-horizontal",
            name="Any Line",
            description="Complete any horizontal, vertical, or diagonal line",
            pattern=[[T] * 5] + _grid(4, 5, F),
            payout=100,
            difficulty="easy",
            special=False,
            min_numbers=5,
        ),
        BingoPattern(
            id="four-corners",
            name="Four Corners",
            description="Mark all four corners of the card",
            pattern=[
                [T, F, F, F, T],
                [F, F, F, F, F],
                [F, F, F, F, F],
                [F, F, F, F, F],
                [T, F, F, F, T],
            ],
            payout=250,
            difficulty="easy",
            special=False,
            min_numbers=4,
        ),
        BingoPattern(
            id="x-pattern",
            name="X Pattern",
            description="Complete both diagonal lines to form an X",
            pattern=[
                [T, F, F, F, T],
                [F, T, F, T, F],
                [F, F, T, F, F],
                [F, T, F, T, F],
                [T, F, F, F, T],
            ],
            payout=500,
            difficulty="medium",
            special=True,
            min_numbers=9,
        ),
        BingoPattern(
            id="full-house",
            name="Full House",
            description="Fill the entire bingo card",
            pattern=_grid(5, 5, T),
            payout=1000,
            difficulty="hard",
            special=True,
            min_numbers=24,
        ),
    ]


def standard_90_ball_patterns() -> List[BingoPattern]:
    return [
        BingoPattern(
            id="one-line",
            name="One Line",
            description="Complete any horizontal line",
            pattern=[[T] * 9] + _grid(2, 9, F),
            payout=50,
            difficulty="easy",
            special=False,
            min_numbers=5,
        ),
        BingoPattern(
            id="two-lines",
            name="Two Lines",
            description="Complete any two horizontal lines",
            pattern=_grid(2, 9, T) + [[F] * 9],
            payout=200,
            difficulty="medium",
            special=False,
            min_numbers=10,
        ),
        BingoPattern(
            id="full-house-90",
            name="Full House",
            description="Fill the entire card",
            pattern=_grid(3, 9, T),
            payout=500,
            difficulty="hard",
            special=True,
            min_numbers=15,
        ),
    ]


def standard_30_ball_patterns() -> List[BingoPattern]:
    return [
        BingoPattern(
            id="line-30",
            name="Any Line",
            description="Complete any line on the 3x3 grid",
            pattern=[[T] * 3] + _grid(2, 3, F),
            payout=25,
            difficulty="easy",
            special=False,
            min_numbers=3,
        ),
        BingoPattern(
            id="full-house-30",
            name="Full House",
            description="Fill the entire 3x3 grid",
            pattern=_grid(3, 3, T),
            payout=100,
            difficulty="medium",
            special=True,
            min_numbers=9,
        ),
    ]


def special_patterns() -> List[BingoPattern]:
    """Curated 75-ball patterns for VIP rooms"""
    return [
        BingoPattern(
            id="diamond",
            name="Diamond",
            description="Complete a diamond shape",
            pattern=[
                [F, F, T, F, F],
                [F, T, F, T, F],
                [T, F, F, F, T],
                [F, T, F, T, F],
                [F, F, T, F, F],
            ],
            payout=2500,
            difficulty="hard",
            special=True,
            min_numbers=9,
        ),
        BingoPattern(
            id="crown",
            name="Crown",
            description="Complete a crown shape for VIP players",
            pattern=[
                [T, F, T, F, T],
                [T, T, T, T, T],
                [F, T, T, T, F],
                [F, F, T, F, F],
                [F, F, T, F, F],
            ],
            payout=5000,
            difficulty="hard",
            special=True,
            min_numbers=11,
        ),
        BingoPattern(
            id="progressive-special",
            name="Progressive Special",
            description="Unique pattern for progressive jackpot",
            pattern=[
                [T, F, F, F, T],
                [F, T, T, T, F],
                [F, T, F, T, F],
                [F, T, T, T, F],
                [T, F, F, F, T],
            ],
            payout=10000,
            difficulty="hard",
            special=True,
            min_numbers=13,
        ),
    ]


def tournament_patterns() -> List[BingoPattern]:
    return [
        BingoPattern(
            id="tournament-cross",
            name="Tournament Cross",
            description="Complete the cross pattern for tournament play",
            pattern=[
                [F, F, T, F, F],
                [F, F, T, F, F],
                [T, T, T, T, T],
                [F, F, T, F, F],
                [F, F, T, F, F],
            ],
            payout=1500,
            difficulty="medium",
            special=True,
            min_numbers=9,
        ),
        BingoPattern(
            id="tournament-frame",
            name="Tournament Frame",
            description="Complete the outer frame pattern",
            pattern=[
                [T, T, T, T, T],
                [T, F, F, F, T],
                [T, F, F, F, T],
                [T, F, F, F, T],
                [T, T, T, T, T],
            ],
            payout=3000,
            difficulty="hard",
            special=True,
            min_numbers=16,
        ),
    ]


def patterns_for(ball_type: BallType) -> List[BingoPattern]:
    """Every pattern playable on cards of the given ball type"""
    if ball_type == BallType.BALL_75:
        return standard_75_ball_patterns() + special_patterns() + tournament_patterns()
    if ball_type == BallType.BALL_90:
        return standard_90_ball_patterns()
    return standard_30_ball_patterns()


def get_pattern(ball_type: BallType, pattern_id: str = None) -> BingoPattern:
    """Look up a pattern by id, defaulting to the first pattern for the ball type"""
    patterns = patterns_for(ball_type)
    if pattern_id is None:
        return patterns[0]

    by_id: Dict[str, BingoPattern] = {p.id: p for p in patterns}
    if pattern_id not in by_id:
        raise UnknownPattern(f"Pattern '{pattern_id}' is not available for {ball_type.value} bingo")
    return by_id[pattern_id]
