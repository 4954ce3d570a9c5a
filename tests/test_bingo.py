"""
Tests for bingo cards, patterns, the number caller and prizes.
"""

import pytest

from sweeps_engine.domain.entities.bingo import BingoCard
from sweeps_engine.domain.entities.bingo_patterns import get_pattern, patterns_for
from sweeps_engine.domain.enums import BallType
from sweeps_engine.domain.exceptions import UnknownPattern
from sweeps_engine.domain.generators.bingo_generator import BingoCardGenerator, compute_prize
from sweeps_engine.domain.generators.bingo_room import BingoRoom, NumberCaller
from sweeps_engine.domain.generators.random_source import SystemRandomSource


def make_card(cost=100):
    """75-ball card with column c holding 15c+1 .. 15c+5 and a free centre"""
    numbers = [[c * 15 + r + 1 for c in range(5)] for r in range(5)]
    numbers[2][2] = None
    return BingoCard(id="card-1", ball_type=BallType.BALL_75, numbers=numbers, cost=cost)


def mark_cells(card, cells):
    for r, c in cells:
        if card.numbers[r][c] is not None:
            card.marked.add(card.numbers[r][c])


class TestPatterns:
    """Test pattern matching against cards."""

    def test_four_corners_satisfied(self):
        card = make_card()
        mark_cells(card, [(0, 0), (0, 4), (4, 0), (4, 4)])
        assert card.satisfies(get_pattern(BallType.BALL_75, "four-corners"))

    def test_four_corners_missing_one(self):
        card = make_card()
        mark_cells(card, [(0, 0), (0, 4), (4, 0)])
        assert not card.satisfies(get_pattern(BallType.BALL_75, "four-corners"))

    def test_free_centre_counts_as_covered(self):
        card = make_card()
        mark_cells(card, [(i, i) for i in range(5)] + [(i, 4 - i) for i in range(5)])
        assert card.satisfies(get_pattern(BallType.BALL_75, "x-pattern"))

    def test_shape_mismatch(self):
        card = make_card()
        with pytest.raises(ValueError):
            card.satisfies(get_pattern(BallType.BALL_90, "one-line"))

    def test_catalogue(self):
        ids_75 = {p.id for p in patterns_for(BallType.BALL_75)}
        assert {"line-horizontal", "four-corners", "x-pattern", "full-house",
                "diamond", "crown", "progressive-special",
                "tournament-cross", "tournament-frame"} <= ids_75
        assert {p.id for p in patterns_for(BallType.BALL_90)} == {"one-line", "two-lines", "full-house-90"}
        assert get_pattern(BallType.BALL_30).id == "line-30"
        for ball_type in BallType:
            for pattern in patterns_for(ball_type):
                assert len({len(row) for row in pattern.pattern}) == 1

    def test_unknown_pattern(self):
        with pytest.raises(UnknownPattern):
            get_pattern(BallType.BALL_75, "two-lines")


class TestCardMarking:
    """Test manual and automatic marking."""

    def test_toggle_mark(self):
        card = make_card()
        assert card.toggle_mark(1)
        assert 1 in card.marked
        assert card.toggle_mark(1)
        assert 1 not in card.marked

    def test_toggle_number_not_on_card(self):
        card = make_card()
        assert not card.toggle_mark(75)
        assert card.marked == set()

    def test_auto_mark_respects_setting(self):
        card = make_card()
        card.auto_mark = False
        assert not card.auto_mark_number(1)
        card.auto_mark = True
        assert card.auto_mark_number(1)
        assert not card.auto_mark_number(1)


class TestCardGeneration:
    """Test card layouts for every ball type."""

    def test_thousand_75_ball_cards(self):
        generator = BingoCardGenerator(SystemRandomSource(7))
        for _ in range(1000):
            card = generator.generate(BallType.BALL_75)
            assert card.numbers[2][2] is None
            numbers = card.populated_numbers
            assert len(numbers) == 24
            assert len(set(numbers)) == 24
            for r in range(5):
                for c in range(5):
                    value = card.numbers[r][c]
                    if value is not None:
                        assert c * 15 + 1 <= value <= c * 15 + 15

    def test_90_ball_layout(self):
        generator = BingoCardGenerator(SystemRandomSource(11))
        for _ in range(300):
            card = generator.generate(BallType.BALL_90)
            assert card.shape == (3, 9)
            assert len(set(card.populated_numbers)) == 15
            for row in card.numbers:
                assert len([n for n in row if n is not None]) == 5
            for c in range(9):
                column = [card.numbers[r][c] for r in range(3) if card.numbers[r][c] is not None]
                assert column
                assert column == sorted(column)
                low, high = BingoCardGenerator.column_range_90(c)
                assert all(low <= n <= high for n in column)

    def test_30_ball_layout(self):
        card = BingoCardGenerator(SystemRandomSource(5)).generate(BallType.BALL_30)
        assert card.shape == (3, 3)
        assert len(set(card.populated_numbers)) == 9
        assert all(1 <= n <= 30 for n in card.populated_numbers)


class TestNumberCaller:
    """Test unique calls and the recent-call history."""

    def test_calls_every_number_once(self):
        caller = NumberCaller(75, SystemRandomSource(1), history_limit=5)
        called = [caller.call() for _ in range(75)]
        assert sorted(called) == list(range(1, 76))
        assert caller.exhausted
        assert caller.call() is None
        assert len(caller.called) == 75

    def test_recent_history_is_bounded(self):
        caller = NumberCaller(90, SystemRandomSource(2), history_limit=5)
        for _ in range(20):
            caller.call()
            assert len(caller.recent) <= 5
        assert list(caller.recent) == caller.called[-5:]


class TestBingoRoom:
    """Test calling numbers into a room of cards."""

    def test_play_marks_cards_and_finds_winner(self):
        random = SystemRandomSource(9)
        pattern = get_pattern(BallType.BALL_75, "four-corners")
        room = BingoRoom("room-1", BallType.BALL_75, pattern, random)
        generator = BingoCardGenerator(random)
        for _ in range(3):
            room.add_card(generator.generate(BallType.BALL_75, 100))

        winners = room.play(75)

        assert winners
        assert room.game_over
        called = set(room.called_numbers)
        for card in room.cards:
            assert card.marked == {n for n in card.populated_numbers if n in called}
        for card in winners:
            assert card.satisfies(pattern)

    def test_max_calls(self):
        room = BingoRoom("room-1", BallType.BALL_75, get_pattern(BallType.BALL_75, "full-house"),
                         SystemRandomSource(4))
        room.add_card(make_card())
        room.play(10)
        assert len(room.called_numbers) == 10
        assert len(room.recent_calls) == 5

    def test_rejects_card_of_other_ball_type(self):
        room = BingoRoom("room-1", BallType.BALL_90, get_pattern(BallType.BALL_90), SystemRandomSource(4))
        with pytest.raises(ValueError):
            room.add_card(make_card())


class TestPrizes:
    """Test prize computation per completed line and pattern."""

    def test_row_pays_line_prize(self):
        card = make_card()
        mark_cells(card, [(0, c) for c in range(5)])
        prize, lines = compute_prize(card, get_pattern(BallType.BALL_75, "line-horizontal"))
        assert lines == ["Row 1"]
        assert prize == 50

    def test_prize_scales_with_card_cost(self):
        card = make_card(cost=1)
        mark_cells(card, [(0, c) for c in range(5)])
        prize, _ = compute_prize(card, get_pattern(BallType.BALL_75, "line-horizontal"))
        assert prize == pytest.approx(0.5)

    def test_special_pattern_pays_configured_payout(self):
        card = make_card()
        mark_cells(card, [(i, i) for i in range(5)] + [(i, 4 - i) for i in range(5)])
        prize, lines = compute_prize(card, get_pattern(BallType.BALL_75, "x-pattern"))
        assert set(lines) == {"Diagonal 1", "Diagonal 2"}
        assert prize == 500

    def test_pattern_without_line_pays_pattern_payout(self):
        card = make_card()
        mark_cells(card, [(0, 0), (0, 4), (4, 0), (4, 4)])
        prize, lines = compute_prize(card, get_pattern(BallType.BALL_75, "four-corners"))
        assert lines == []
        assert prize == 250

    def test_unsatisfied_pattern_pays_nothing(self):
        prize, lines = compute_prize(make_card(), get_pattern(BallType.BALL_75, "four-corners"))
        assert prize == 0
        assert lines == []
