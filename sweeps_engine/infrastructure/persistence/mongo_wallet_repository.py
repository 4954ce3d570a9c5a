"""MongoDB wallet implementation"""
import asyncio
import logging
import time
from typing import Dict

from pymongo import ReturnDocument
from pymongo.database import Database

from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.domain.enums import Currency
from sweeps_engine.domain.exceptions import InsufficientFunds

logger = logging.getLogger(__name__)


class MongoWalletRepository(WalletPort):
    """Two-currency balances stored per user; debits are conditional single-document updates"""

    def __init__(self, db: Database, default_balances: Dict[Currency, float] = None):
        self.db = db
        self.collection = db.user_wallets
        self.default_balances = default_balances or {Currency.GC: 0, Currency.SC: 0}

    def _ensure_wallet(self, user_id: str) -> None:
        self.collection.update_one(
            {"user_id": user_id},
            {
                "$setOnInsert": {
                    "user_id": user_id,
                    "balances": {c.value: self.default_balances.get(c, 0) for c in Currency},
                    "created_at": time.time()
                }
            },
            upsert=True
        )

    async def debit(self, user_id: str, currency: Currency, amount: float) -> None:
        await self._run(self._debit, user_id, currency, amount)

    async def credit(self, user_id: str, currency: Currency, amount: float) -> None:
        await self._run(self._credit, user_id, currency, amount)

    async def get_balance(self, user_id: str, currency: Currency) -> float:
        return await self._run(self._get_balance, user_id, currency)

    async def _run(self, call, *args):
        # pymongo blocks, so each round trip runs off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, call, *args)

    def _debit(self, user_id: str, currency: Currency, amount: float) -> None:
        self._ensure_wallet(user_id)
        field = f"balances.{currency.value}"
        result = self.collection.find_one_and_update(
            {"user_id": user_id, field: {"$gte": amount}},
            {
                "$inc": {field: -amount},
                "$set": {"updated_at": time.time()}
            },
            return_document=ReturnDocument.AFTER
        )
        if result is None:
            raise InsufficientFunds(user_id, currency.value, amount)

    def _credit(self, user_id: str, currency: Currency, amount: float) -> None:
        self._ensure_wallet(user_id)
        self.collection.update_one(
            {"user_id": user_id},
            {
                "$inc": {f"balances.{currency.value}": amount},
                "$set": {"updated_at": time.time()}
            }
        )

    def _get_balance(self, user_id: str, currency: Currency) -> float:
        self._ensure_wallet(user_id)
        wallet = self.collection.find_one({"user_id": user_id})
        return wallet.get("balances", {}).get(currency.value, 0)
