"""Session and currency request DTOs"""
from dataclasses import dataclass
from typing import Optional

from sweeps_engine.domain.enums import Currency, GameCategory


def parse_currency(value: Optional[str]) -> Optional[Currency]:
    """Currency from a request field; empty means 'let the engine resolve it'"""
    if value in (None, ''):
        return None
    return Currency(str(value).upper())


@dataclass
class StartSessionRequest:
    """Request DTO for starting a session"""

    user_id: str
    category: GameCategory
    currency: Optional[Currency] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'StartSessionRequest':
        return cls(
            user_id=str(data['user_id']),
            category=GameCategory(data['category']),
            currency=parse_currency(data.get('currency'))
        )


@dataclass
class SetCurrencyRequest:
    """Request DTO for selecting a user's currency in a category"""

    user_id: str
    category: GameCategory
    currency: Currency

    @classmethod
    def from_dict(cls, data: dict) -> 'SetCurrencyRequest':
        return cls(
            user_id=str(data['user_id']),
            category=GameCategory(data['category']),
            currency=Currency(str(data['currency']).upper())
        )
