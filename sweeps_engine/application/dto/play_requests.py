"""Game round request DTOs"""
from dataclasses import dataclass
from typing import Optional

from sweeps_engine.application.dto.session_requests import parse_currency
from sweeps_engine.domain.enums import BallType, Currency, GameCategory, SportsOutcome, TableGameType


@dataclass
class SpinRequest:
    """Request DTO for a slot spin"""

    user_id: str
    game_id: str
    bet: float
    currency: Optional[Currency] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'SpinRequest':
        return cls(
            user_id=str(data['user_id']),
            game_id=str(data.get('game_id', 'slots')),
            bet=float(data['bet']),
            currency=parse_currency(data.get('currency'))
        )


@dataclass
class TableGameRequest:
    """Request DTO for a table or live-dealer round"""

    user_id: str
    game_id: str
    game_type: TableGameType
    bet: float
    currency: Optional[Currency] = None
    category: GameCategory = GameCategory.TABLE

    def __post_init__(self):
        if self.category not in (GameCategory.TABLE, GameCategory.LIVE):
            raise ValueError(f"Table games are played in 'table' or 'live', not '{self.category.value}'")

    @classmethod
    def from_dict(cls, data: dict) -> 'TableGameRequest':
        game_type = TableGameType(data['game_type'])
        return cls(
            user_id=str(data['user_id']),
            game_id=str(data.get('game_id', game_type.value)),
            game_type=game_type,
            bet=float(data['bet']),
            currency=parse_currency(data.get('currency')),
            category=GameCategory(data.get('category', GameCategory.TABLE.value))
        )


@dataclass
class BingoRequest:
    """Request DTO for a bingo game"""

    user_id: str
    game_id: str
    card_count: int
    ball_type: BallType = BallType.BALL_75
    pattern_id: Optional[str] = None
    currency: Optional[Currency] = None

    def __post_init__(self):
        if self.card_count < 1:
            raise ValueError(f"At least one card is required, got {self.card_count}")

    @classmethod
    def from_dict(cls, data: dict) -> 'BingoRequest':
        return cls(
            user_id=str(data['user_id']),
            game_id=str(data.get('game_id', 'bingo')),
            card_count=int(data.get('card_count', 1)),
            ball_type=BallType(data.get('ball_type', BallType.BALL_75.value)),
            pattern_id=data.get('pattern_id'),
            currency=parse_currency(data.get('currency'))
        )


@dataclass
class SportsBetRequest:
    """Request DTO for a sportsbook bet"""

    user_id: str
    game_id: str
    bet_type: str
    selection: str
    odds: float
    amount: float
    currency: Optional[Currency] = None

    def __post_init__(self):
        if not self.odds > 1:
            raise ValueError(f"Decimal odds must be greater than 1, got {self.odds}")

    @classmethod
    def from_dict(cls, data: dict) -> 'SportsBetRequest':
        return cls(
            user_id=str(data['user_id']),
            game_id=str(data['game_id']),
            bet_type=str(data.get('bet_type', 'single')),
            selection=str(data['selection']),
            odds=float(data['odds']),
            amount=float(data['amount']),
            currency=parse_currency(data.get('currency'))
        )


@dataclass
class SettleSportsBetRequest:
    """Request DTO for settling a sportsbook bet once its event is decided"""

    bet_id: str
    outcome: SportsOutcome

    @classmethod
    def from_dict(cls, data: dict) -> 'SettleSportsBetRequest':
        return cls(
            bet_id=str(data['bet_id']),
            outcome=SportsOutcome(data['outcome'])
        )
