"""Per-user currency selection"""
from typing import Dict, Optional, Tuple

from sweeps_engine.domain.enums import Currency, GameCategory
from sweeps_engine.domain.policies.currency_policy import CurrencyPolicy


class CurrencyPreferences:
    """Remembers the last currency each user selected for each category"""

    def __init__(self, policy: CurrencyPolicy):
        self.policy = policy
        self._selected: Dict[Tuple[str, GameCategory], Currency] = {}

    def set_user_currency(self, user_id: str, category: GameCategory, currency: Currency) -> None:
        self.policy.ensure_currency_allowed(category, currency)
        self._selected[(user_id, category)] = currency

    def get_user_currency(self, user_id: str, category: GameCategory) -> Currency:
        selected = self._selected.get((user_id, category))
        if selected is not None:
            return selected
        return Currency.SC if category == GameCategory.SPORTSBOOK else Currency.GC

    def resolve(self, user_id: str, category: GameCategory, currency: Optional[Currency] = None) -> Currency:
        """Explicit currency, else the user's last selection, else the category default"""
        return currency or self.get_user_currency(user_id, category)
