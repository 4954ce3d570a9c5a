"""Wallet port (interface)"""
from abc import ABC, abstractmethod

from sweeps_engine.domain.enums import Currency


class WalletPort(ABC):
    """Port for the external wallet; each call is transactional on its own"""

    @abstractmethod
    async def debit(self, user_id: str, currency: Currency, amount: float) -> None:
        """Remove funds, raising InsufficientFunds when the balance is too low"""
        pass

    @abstractmethod
    async def credit(self, user_id: str, currency: Currency, amount: float) -> None:
        """Add funds, raising WalletError on failure"""
        pass

    @abstractmethod
    async def get_balance(self, user_id: str, currency: Currency) -> float:
        pass
