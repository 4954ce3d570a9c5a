import asyncio
import itertools

import pytest

from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.currency_preferences import CurrencyPreferences
from sweeps_engine.application.services.result_notifier import ResultNotifier
from sweeps_engine.application.services.session_manager import SessionManager
from sweeps_engine.application.services.settlement_retry_queue import SettlementRetryQueue
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.domain.enums import Currency
from sweeps_engine.domain.exceptions import WalletError
from sweeps_engine.domain.generators.random_source import RandomSource
from sweeps_engine.domain.policies.currency_policy import CurrencyPolicy
from sweeps_engine.infrastructure.memory import InMemorySessionRepository, InMemoryWallet


class ScriptedRandom(RandomSource):
    """Replays fixed draws, then returns the default forever"""

    def __init__(self, values=None, default=0.99):
        self.values = list(values or [])
        self.default = default
        self.draws = 0

    def next(self) -> float:
        self.draws += 1
        if self.values:
            return self.values.pop(0)
        return self.default


class FlakyWallet(WalletPort):
    """Wraps a wallet; credits fail while fail_credits is set"""

    def __init__(self, wallet: WalletPort):
        self.wallet = wallet
        self.fail_credits = False
        self.credits = []

    async def debit(self, user_id, currency, amount):
        await self.wallet.debit(user_id, currency, amount)

    async def credit(self, user_id, currency, amount):
        if self.fail_credits:
            raise WalletError("wallet unavailable")
        await self.wallet.credit(user_id, currency, amount)
        self.credits.append((user_id, currency, amount))

    async def get_balance(self, user_id, currency):
        return await self.wallet.get_balance(user_id, currency)


class SlowWallet(InMemoryWallet):
    """Debits and credits never return within a test timeout"""

    async def debit(self, user_id, currency, amount):
        await asyncio.sleep(10)

    async def credit(self, user_id, currency, amount):
        await asyncio.sleep(10)


def counter_clock(start: float = 1000.0):
    ticks = itertools.count()
    return lambda: start + next(ticks)


def sequential_ids(prefix: str):
    ids = itertools.count(1)
    return lambda: f"{prefix}-{next(ids)}"


@pytest.fixture()
def policy():
    return CurrencyPolicy()


@pytest.fixture()
def preferences(policy):
    return CurrencyPreferences(policy)


@pytest.fixture()
def repository():
    return InMemorySessionRepository()


@pytest.fixture()
def wallet():
    return FlakyWallet(InMemoryWallet({Currency.GC: 10000, Currency.SC: 20}))


@pytest.fixture()
def session_manager(repository, policy):
    return SessionManager(repository, policy, clock=counter_clock(), id_factory=sequential_ids("session"))


@pytest.fixture()
def ledger(policy, session_manager, wallet, preferences):
    return BetLedger(policy, session_manager, wallet, preferences,
                     clock=counter_clock(), id_factory=sequential_ids("bet"))


@pytest.fixture()
def notifier():
    return ResultNotifier()


@pytest.fixture()
def retry_queue():
    return SettlementRetryQueue()


@pytest.fixture()
def settlement(ledger, session_manager, wallet, notifier, retry_queue):
    return SettlementService(ledger, session_manager, wallet, notifier, retry_queue,
                             clock=counter_clock(), id_factory=sequential_ids("result"))
