"""In-process two-currency wallet"""
from typing import Dict, Tuple

from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.domain.enums import Currency
from sweeps_engine.domain.exceptions import InsufficientFunds


class InMemoryWallet(WalletPort):
    """Balances per (user, currency); unseen users start with the default balances"""

    def __init__(self, default_balances: Dict[Currency, float] = None):
        self.default_balances = default_balances or {Currency.GC: 0, Currency.SC: 0}
        self.balances: Dict[Tuple[str, Currency], float] = {}

    def _balance(self, user_id: str, currency: Currency) -> float:
        return self.balances.setdefault((user_id, currency), self.default_balances.get(currency, 0))

    async def debit(self, user_id: str, currency: Currency, amount: float) -> None:
        if self._balance(user_id, currency) < amount:
            raise InsufficientFunds(user_id, currency.value, amount)
        self.balances[(user_id, currency)] -= amount

    async def credit(self, user_id: str, currency: Currency, amount: float) -> None:
        self.balances[(user_id, currency)] = self._balance(user_id, currency) + amount

    async def get_balance(self, user_id: str, currency: Currency) -> float:
        return self._balance(user_id, currency)
