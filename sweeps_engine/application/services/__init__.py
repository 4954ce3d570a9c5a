from .bet_ledger import BetLedger
from .currency_preferences import CurrencyPreferences
from .result_notifier import ResultNotifier
from .session_manager import SessionManager
from .settlement_retry_queue import SettlementRetryQueue
from .settlement_service import SettlementService
from .timed_wallet import TimedWallet

__all__ = [
    'BetLedger',
    'CurrencyPreferences',
    'ResultNotifier',
    'SessionManager',
    'SettlementRetryQueue',
    'SettlementService',
    'TimedWallet'
]
