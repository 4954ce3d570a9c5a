"""Wallet adapter bounding every round trip with a timeout"""
import asyncio
import logging

from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.domain.enums import Currency
from sweeps_engine.domain.exceptions import WalletError, WalletTimeout

logger = logging.getLogger(__name__)


class TimedWallet(WalletPort):
    """Wraps a wallet so calls fail with WalletTimeout instead of hanging"""

    def __init__(self, wallet: WalletPort, timeout: float = 5.0):
        self.wallet = wallet
        self.timeout = timeout

    async def debit(self, user_id: str, currency: Currency, amount: float) -> None:
        await self._call("debit", self.wallet.debit(user_id, currency, amount))

    async def credit(self, user_id: str, currency: Currency, amount: float) -> None:
        await self._call("credit", self.wallet.credit(user_id, currency, amount))

    async def get_balance(self, user_id: str, currency: Currency) -> float:
        return await self._call("balance", self.wallet.get_balance(user_id, currency))

    async def _call(self, operation: str, call):
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Wallet {operation} timed out after {self.timeout}s")
            raise WalletTimeout(operation, self.timeout) from e
        except WalletError:
            raise
        except Exception as e:
            logger.error(f"Wallet {operation} failed: {e}")
            raise WalletError(f"Wallet {operation} failed: {e}") from e
