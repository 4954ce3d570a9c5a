"""Bet limits and currency restrictions per game category"""
import logging
import math
from typing import Dict, Tuple

from sweeps_engine.domain.enums import Currency, GameCategory
from sweeps_engine.domain.exceptions import BetOutOfRange, UnsupportedCurrency

logger = logging.getLogger(__name__)

# Used for any (category, currency) pair missing from the tables below
DEFAULT_MINIMUM_BET = 1
DEFAULT_MAXIMUM_BET = 1000

MINIMUM_BETS: Dict[Tuple[GameCategory, Currency], float] = {
    (GameCategory.SLOTS, Currency.GC): 10,
    (GameCategory.SLOTS, Currency.SC): 0.1,
    (GameCategory.TABLE, Currency.GC): 25,
    (GameCategory.TABLE, Currency.SC): 0.25,
    (GameCategory.LIVE, Currency.GC): 50,
    (GameCategory.LIVE, Currency.SC): 0.5,
    (GameCategory.BINGO, Currency.GC): 5,
    (GameCategory.BINGO, Currency.SC): 0.05,
    (GameCategory.SPORTSBOOK, Currency.SC): 1,
}

MAXIMUM_BETS: Dict[Tuple[GameCategory, Currency], float] = {
    (GameCategory.SLOTS, Currency.GC): 10000,
    (GameCategory.SLOTS, Currency.SC): 100,
    (GameCategory.TABLE, Currency.GC): 25000,
    (GameCategory.TABLE, Currency.SC): 250,
    (GameCategory.LIVE, Currency.GC): 50000,
    (GameCategory.LIVE, Currency.SC): 500,
    (GameCategory.BINGO, Currency.GC): 5000,
    (GameCategory.BINGO, Currency.SC): 50,
    (GameCategory.SPORTSBOOK, Currency.SC): 1000,
}

# Categories restricted to a subset of currencies; absent means every currency
ALLOWED_CURRENCIES: Dict[GameCategory, Tuple[Currency, ...]] = {
    GameCategory.SPORTSBOOK: (Currency.SC,),
}


class CurrencyPolicy:
    """Pure lookup of bet bounds and accepted currencies"""

    def __init__(
        self,
        minimums: Dict[Tuple[GameCategory, Currency], float] = None,
        maximums: Dict[Tuple[GameCategory, Currency], float] = None,
        allowed: Dict[GameCategory, Tuple[Currency, ...]] = None
    ):
        self.minimums = MINIMUM_BETS if minimums is None else minimums
        self.maximums = MAXIMUM_BETS if maximums is None else maximums
        self.allowed = ALLOWED_CURRENCIES if allowed is None else allowed

    def is_currency_allowed(self, category: GameCategory, currency: Currency) -> bool:
        accepted = self.allowed.get(category)
        return accepted is None or currency in accepted

    def ensure_currency_allowed(self, category: GameCategory, currency: Currency) -> None:
        if not self.is_currency_allowed(category, currency):
            raise UnsupportedCurrency(category.value, currency.value)

    def minimum_bet(self, category: GameCategory, currency: Currency) -> float:
        self.ensure_currency_allowed(category, currency)
        limit = self.minimums.get((category, currency))
        if limit is None:
            logger.warning(f"No minimum bet configured for {category.value}/{currency.value}, using {DEFAULT_MINIMUM_BET}")
            return DEFAULT_MINIMUM_BET
        return limit

    def maximum_bet(self, category: GameCategory, currency: Currency) -> float:
        self.ensure_currency_allowed(category, currency)
        limit = self.maximums.get((category, currency))
        if limit is None:
            logger.warning(f"No maximum bet configured for {category.value}/{currency.value}, using {DEFAULT_MAXIMUM_BET}")
            return DEFAULT_MAXIMUM_BET
        return limit

    def validate(self, category: GameCategory, currency: Currency, amount: float) -> None:
        """Check currency first, then the amount against both bounds"""
        self.ensure_currency_allowed(category, currency)

        minimum = self.minimum_bet(category, currency)
        if not math.isfinite(amount) or amount < minimum:
            raise BetOutOfRange(amount, "minimum", minimum, currency.value)

        maximum = self.maximum_bet(category, currency)
        if amount > maximum:
            raise BetOutOfRange(amount, "maximum", maximum, currency.value)
