"""Dependency Injection Container"""
import logging
from typing import Optional

from pymongo import MongoClient

from sweeps_engine.application.ports.result_publisher_port import ResultPublisherPort
from sweeps_engine.application.ports.session_repository_port import SessionRepositoryPort
from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.currency_preferences import CurrencyPreferences
from sweeps_engine.application.services.result_notifier import ResultNotifier
from sweeps_engine.application.services.session_manager import SessionManager
from sweeps_engine.application.services.settlement_retry_queue import SettlementRetryQueue
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.application.services.timed_wallet import TimedWallet
from sweeps_engine.application.use_cases.play_bingo_use_case import PlayBingoUseCase
from sweeps_engine.application.use_cases.play_slots_use_case import PlaySlotsUseCase
from sweeps_engine.application.use_cases.play_table_game_use_case import PlayTableGameUseCase
from sweeps_engine.application.use_cases.retry_settlements_use_case import RetrySettlementsUseCase
from sweeps_engine.application.use_cases.session_lifecycle_use_case import SessionLifecycleUseCase
from sweeps_engine.application.use_cases.sports_bet_use_case import PlaceSportsBetUseCase, SettleSportsBetUseCase
from sweeps_engine.config.settings import Settings
from sweeps_engine.domain.enums import Currency
from sweeps_engine.domain.generators.bingo_generator import BingoCardGenerator
from sweeps_engine.domain.generators.random_source import RandomSource, SystemRandomSource
from sweeps_engine.domain.generators.slot_generator import SlotGenerator
from sweeps_engine.domain.generators.table_generator import SimplifiedTableStrategy, TableGenerator
from sweeps_engine.domain.policies.currency_policy import CurrencyPolicy
from sweeps_engine.infrastructure.external.http_wallet_service import HttpWalletService
from sweeps_engine.infrastructure.memory.in_memory_session_repository import InMemorySessionRepository
from sweeps_engine.infrastructure.memory.in_memory_wallet import InMemoryWallet
from sweeps_engine.infrastructure.messaging.rabbitmq_result_publisher import RabbitMQResultPublisher
from sweeps_engine.infrastructure.persistence.mongo_session_repository import MongoSessionRepository
from sweeps_engine.infrastructure.persistence.mongo_wallet_repository import MongoWalletRepository

logger = logging.getLogger(__name__)


class Container:
    """Wires the engine from settings; collaborators can be overridden for tests"""

    _instance = None

    @classmethod
    def get_instance(cls, settings: Optional[Settings] = None) -> 'Container':
        """Process-wide container built from the environment"""
        if cls._instance is None:
            cls._instance = cls(settings or Settings.from_env())
        return cls._instance

    def __init__(
        self,
        settings: Settings,
        session_repository: Optional[SessionRepositoryPort] = None,
        wallet: Optional[WalletPort] = None,
        publisher: Optional[ResultPublisherPort] = None,
        random_source: Optional[RandomSource] = None
    ):
        self.settings = settings
        self.mongo_client = None

        if settings.storage_backend == 'mongo' and (session_repository is None or wallet is None):
            self.mongo_client = MongoClient(settings.mongodb_url)
            self.db = self.mongo_client[settings.mongodb_database]

        default_balances = {
            Currency.GC: settings.default_balance_gc,
            Currency.SC: settings.default_balance_sc
        }

        # Repositories and external collaborators
        self.session_repository = session_repository or self._build_session_repository()
        raw_wallet = wallet or self._build_wallet(default_balances)
        self.wallet = TimedWallet(raw_wallet, settings.wallet_timeout_seconds)
        if publisher is None and settings.rabbitmq_url:
            publisher = RabbitMQResultPublisher(settings.rabbitmq_url)
        self.publisher = publisher
        self.random_source = random_source or SystemRandomSource(settings.random_seed)

        # Services
        self.policy = CurrencyPolicy()
        self.preferences = CurrencyPreferences(self.policy)
        self.session_manager = SessionManager(self.session_repository, self.policy)
        self.session_manager.load()
        self.notifier = ResultNotifier()
        self.retry_queue = SettlementRetryQueue()
        self.ledger = BetLedger(self.policy, self.session_manager, self.wallet, self.preferences)
        self.settlement = SettlementService(
            self.ledger,
            self.session_manager,
            self.wallet,
            self.notifier,
            self.retry_queue,
            self.publisher
        )

        # Generators
        self.slot_generator = SlotGenerator(self.random_source)
        self.table_generator = TableGenerator(
            SimplifiedTableStrategy(self.random_source, settings.table_win_probability)
        )
        self.card_generator = BingoCardGenerator(self.random_source)

        # Use cases
        self.sessions_use_case = SessionLifecycleUseCase(self.session_manager, self.preferences)
        self.slots_use_case = PlaySlotsUseCase(self.ledger, self.settlement, self.slot_generator)
        self.table_use_case = PlayTableGameUseCase(self.ledger, self.settlement, self.table_generator)
        self.bingo_use_case = PlayBingoUseCase(
            self.ledger,
            self.settlement,
            self.card_generator,
            self.random_source,
            settings.bingo_recent_calls
        )
        self.sports_bet_use_case = PlaceSportsBetUseCase(self.ledger)
        self.settle_sports_bet_use_case = SettleSportsBetUseCase(self.ledger, self.settlement)
        self.retry_settlements_use_case = RetrySettlementsUseCase(self.settlement)

    def _build_session_repository(self) -> SessionRepositoryPort:
        if self.settings.storage_backend == 'mongo':
            return MongoSessionRepository(self.db)
        logger.warning("Using in-memory session storage; sessions are lost on restart")
        return InMemorySessionRepository()

    def _build_wallet(self, default_balances) -> WalletPort:
        if self.settings.wallet_service_url:
            return HttpWalletService(self.settings.wallet_service_url, self.settings.wallet_timeout_seconds)
        if self.settings.storage_backend == 'mongo':
            return MongoWalletRepository(self.db, default_balances)
        return InMemoryWallet(default_balances)

    def close(self) -> None:
        if isinstance(self.publisher, RabbitMQResultPublisher):
            self.publisher.close()
        if self.mongo_client is not None:
            self.mongo_client.close()
