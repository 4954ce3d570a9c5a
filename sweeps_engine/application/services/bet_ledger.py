"""Bet placement and lifecycle"""
import logging
import time
import uuid
from typing import Callable, Dict, List, Optional

from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.application.services.currency_preferences import CurrencyPreferences
from sweeps_engine.application.services.session_manager import SessionManager
from sweeps_engine.domain.entities.game_bet import GameBet
from sweeps_engine.domain.entities.game_result import GameResult
from sweeps_engine.domain.enums import Currency, GameCategory
from sweeps_engine.domain.exceptions import BetNotFound, NoActiveSession, SessionCurrencyMismatch, WageringError
from sweeps_engine.domain.policies.currency_policy import CurrencyPolicy
from sweeps_engine.metrics import AMOUNT_WAGERED, BETS_PLACED, BETS_REJECTED

logger = logging.getLogger(__name__)


def _new_bet_id() -> str:
    return f"bet-{uuid.uuid4().hex[:12]}"


class BetLedger:
    """Validates, funds and records bets

    Every check runs before the wallet debit, so a rejected bet never moves funds
    and never produces a GameBet.
    """

    def __init__(
        self,
        policy: CurrencyPolicy,
        session_manager: SessionManager,
        wallet: WalletPort,
        preferences: CurrencyPreferences,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _new_bet_id
    ):
        self.policy = policy
        self.session_manager = session_manager
        self.wallet = wallet
        self.preferences = preferences
        self.clock = clock
        self.id_factory = id_factory
        self.bets: Dict[str, GameBet] = {}

    async def place_bet(
        self,
        user_id: str,
        game_id: str,
        category: GameCategory,
        amount: float,
        currency: Optional[Currency] = None
    ) -> GameBet:
        currency = self.preferences.resolve(user_id, category, currency)

        try:
            self.policy.validate(category, currency, amount)
            session = self.session_manager.get_active_session(user_id, category)
            if session is None:
                raise NoActiveSession(user_id, category.value)
            if session.currency != currency:
                raise SessionCurrencyMismatch(session.id, session.currency.value, currency.value)
            await self.wallet.debit(user_id, currency, amount)
        except WageringError as e:
            BETS_REJECTED.labels(category=category.value, reason=e.code).inc()
            logger.info(f"Rejected {category.value} bet of {amount} {currency.value} for user {user_id}: {e}")
            raise

        bet = GameBet(
            id=self.id_factory(),
            user_id=user_id,
            game_id=game_id,
            category=category,
            currency=currency,
            amount=amount,
            timestamp=self.clock(),
            session_id=session.id
        )
        self.bets[bet.id] = bet
        self.session_manager.record_bet(session.id, amount)

        BETS_PLACED.labels(category=category.value, currency=currency.value).inc()
        AMOUNT_WAGERED.labels(category=category.value, currency=currency.value).inc(amount)
        logger.info(f"Placed bet {bet.id}: {amount} {currency.value} on {game_id} for user {user_id}")
        return bet

    def get_bet(self, bet_id: str) -> GameBet:
        bet = self.bets.get(bet_id)
        if bet is None:
            raise BetNotFound(f"Bet {bet_id} not found")
        return bet

    def bets_for_user(self, user_id: str) -> List[GameBet]:
        return [b for b in self.bets.values() if b.user_id == user_id]

    def settle(self, bet: GameBet, result: GameResult) -> GameBet:
        """Attach the result and complete the bet"""
        bet.complete(result)
        return bet

    def fail(self, bet: GameBet) -> GameBet:
        bet.fail()
        logger.warning(f"Bet {bet.id} marked failed")
        return bet
