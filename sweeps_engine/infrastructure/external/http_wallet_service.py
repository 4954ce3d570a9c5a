"""HTTP client for a remote wallet service"""
import asyncio
import logging
import os
from typing import Any, Dict

import requests

from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.domain.enums import Currency
from sweeps_engine.domain.exceptions import InsufficientFunds, WalletError

logger = logging.getLogger(__name__)

INSUFFICIENT_FUNDS_STATUSES = (402, 409)


class HttpWalletService(WalletPort):
    """HTTP implementation of the wallet collaborator"""

    def __init__(self, base_url: str = None, timeout: float = 5):
        self.base_url = base_url or os.environ.get('WALLET_SERVICE_URL', 'http://wallet-service:8085')
        self.timeout = timeout
        self.session = requests.Session()

    async def debit(self, user_id: str, currency: Currency, amount: float) -> None:
        await self._post("/wallet/debit", user_id, currency, amount)

    async def credit(self, user_id: str, currency: Currency, amount: float) -> None:
        await self._post("/wallet/credit", user_id, currency, amount)

    async def get_balance(self, user_id: str, currency: Currency) -> float:
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(None, self._get_balance, user_id, currency)
        return float(response.get("balance", 0))

    async def _post(self, path: str, user_id: str, currency: Currency, amount: float) -> None:
        # requests blocks, so the round trip runs off the event loop
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._send, path, user_id, currency, amount)

    def _send(self, path: str, user_id: str, currency: Currency, amount: float) -> None:
        try:
            response = self.session.post(
                f"{self.base_url}{path}",
                json={
                    "user_id": user_id,
                    "currency": currency.value,
                    "amount": amount
                },
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Wallet request {path} failed: {e}")
            raise WalletError(f"Wallet request {path} failed: {e}") from e

        if response.status_code in INSUFFICIENT_FUNDS_STATUSES:
            raise InsufficientFunds(user_id, currency.value, amount)
        if response.status_code != 200:
            logger.warning(f"Wallet request {path} rejected: {response.status_code} - {response.text}")
            raise WalletError(f"Wallet request {path} rejected with status {response.status_code}")

    def _get_balance(self, user_id: str, currency: Currency) -> Dict[str, Any]:
        try:
            response = self.session.get(
                f"{self.base_url}/wallet/{user_id}/balance",
                params={"currency": currency.value},
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise WalletError(f"Balance lookup failed: {e}") from e
