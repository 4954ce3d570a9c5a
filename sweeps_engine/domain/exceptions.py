"""Wagering engine error taxonomy"""
from typing import Any, Optional


class WageringError(Exception):
    """Base class for every error raised by the engine"""

    code = "internal"


class UnsupportedCurrency(WageringError):
    """Category does not accept the requested currency"""

    code = "unsupported_currency"

    def __init__(self, category: str, currency: str):
        self.category = category
        self.currency = currency
        super().__init__(f"{category} does not accept {currency}")


class BetOutOfRange(WageringError):
    """Bet amount violates the category/currency bounds"""

    code = "bet_out_of_range"

    def __init__(self, amount: float, bound: str, limit: float, currency: str):
        self.amount = amount
        self.bound = bound  # 'minimum' or 'maximum'
        self.limit = limit
        self.currency = currency
        super().__init__(f"{bound.capitalize()} bet is {limit} {currency} (got {amount})")


class WalletError(WageringError):
    """Wallet collaborator rejected or failed a call"""

    code = "wallet_error"


class InsufficientFunds(WalletError):
    code = "insufficient_funds"

    def __init__(self, user_id: str, currency: str, amount: float):
        self.user_id = user_id
        self.currency = currency
        self.amount = amount
        super().__init__(f"Insufficient {currency} balance for {amount}")


class WalletTimeout(WalletError):
    code = "timeout"

    def __init__(self, operation: str, seconds: float):
        self.operation = operation
        self.seconds = seconds
        super().__init__(f"Wallet {operation} timed out after {seconds}s")


class NoActiveSession(WageringError):
    code = "no_active_session"

    def __init__(self, user_id: str, category: str):
        self.user_id = user_id
        self.category = category
        super().__init__(f"No active {category} session for user {user_id}")


class SessionClosed(WageringError):
    """Mutation attempted on a session that is not active"""

    code = "session_closed"


class InvalidBetState(WageringError):
    code = "invalid_bet_state"


class BetNotFound(WageringError):
    code = "not_found"


class UnknownPattern(WageringError):
    code = "unknown_pattern"


class InvalidGeneratorOutput(WageringError):
    """Generator produced a result that cannot be settled"""

    code = "invalid_generator_output"


class SettlementFailure(WageringError):
    """Winnings could not be credited after an outcome was generated"""

    code = "settlement_failure"

    def __init__(self, bet: Any, result: Any, cause: Optional[BaseException] = None):
        self.bet = bet
        self.result = result
        self.cause = cause
        super().__init__(f"Settlement of bet {getattr(bet, 'id', '?')} failed: {cause}")


class CorruptPersistedState(WageringError):
    """A stored record could not be parsed"""

    code = "corrupt_persisted_state"


class SessionNotFound(WageringError):
    code = "not_found"


class SessionCurrencyMismatch(WageringError):
    """Bet currency differs from the currency of the active session"""

    code = "session_currency_mismatch"

    def __init__(self, session_id: str, session_currency: str, currency: str):
        self.session_id = session_id
        self.session_currency = session_currency
        self.currency = currency
        super().__init__(f"Session {session_id} plays {session_currency}, bet is {currency}")
