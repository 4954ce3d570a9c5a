"""Settlement: credit winnings, finalise bets, update sessions, notify"""
import logging
import math
import time
import uuid
from typing import Any, Callable, Dict, List, Optional

import sentry_sdk
from sentry_sdk import start_span

from sweeps_engine.application.ports.result_publisher_port import ResultPublisherPort
from sweeps_engine.application.ports.wallet_port import WalletPort
from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.result_notifier import ResultNotifier
from sweeps_engine.application.services.session_manager import SessionManager
from sweeps_engine.application.services.settlement_retry_queue import SettlementRetryQueue
from sweeps_engine.domain.entities.game_bet import GameBet
from sweeps_engine.domain.entities.game_result import GameResult
from sweeps_engine.domain.enums import BetStatus, Outcome
from sweeps_engine.domain.exceptions import (
    InvalidBetState,
    InvalidGeneratorOutput,
    SettlementFailure,
    WageringError,
    WalletError,
)
from sweeps_engine.metrics import AMOUNT_PAID, SETTLEMENT_FAILURES

logger = logging.getLogger(__name__)


def _new_result_id() -> str:
    return f"result-{uuid.uuid4().hex[:12]}"


class SettlementService:
    """Applies generator output to bets

    Malformed output is rejected before the wallet is touched. A failed credit
    fails the bet, queues the win for retry and raises SettlementFailure.
    """

    def __init__(
        self,
        ledger: BetLedger,
        session_manager: SessionManager,
        wallet: WalletPort,
        notifier: ResultNotifier,
        retry_queue: SettlementRetryQueue = None,
        publisher: Optional[ResultPublisherPort] = None,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _new_result_id
    ):
        self.ledger = ledger
        self.session_manager = session_manager
        self.wallet = wallet
        self.notifier = notifier
        self.retry_queue = retry_queue if retry_queue is not None else SettlementRetryQueue()
        self.publisher = publisher
        self.clock = clock
        self.id_factory = id_factory

    def build_result(
        self,
        bet: GameBet,
        win_amount: float,
        details: Dict[str, Any] = None,
        push: bool = False
    ) -> GameResult:
        """Turn raw generator output into a GameResult, rejecting malformed values"""
        try:
            return GameResult.create(
                result_id=self.id_factory(),
                bet_id=bet.id,
                bet_amount=bet.amount,
                win_amount=win_amount,
                timestamp=self.clock(),
                details=details,
                push=push
            )
        except InvalidGeneratorOutput:
            self.ledger.fail(bet)
            raise

    async def settle(self, bet: GameBet, result: GameResult, trace_headers: Dict[str, str] = None) -> GameResult:
        self._validate(bet, result)

        if result.win_amount > 0:
            with start_span(op="wallet.credit", name="Credit winnings") as span:
                span.set_data("amount", result.win_amount)
                await self._credit(bet, result)

        self._finalise(bet, result, trace_headers)
        return result

    async def retry_pending(self) -> List[GameResult]:
        """Re-attempt queued credits; returns the results settled this round"""
        settled = []
        for entry in self.retry_queue.pending():
            if entry.bet.status == BetStatus.COMPLETED:
                # Completed through settle() after the credit failure was queued
                self.retry_queue.remove(entry.bet.id)
                logger.warning(f"Dropping queued credit for bet {entry.bet.id}: already completed")
                continue
            try:
                await self._credit(entry.bet, entry.result)
                self._finalise(entry.bet, entry.result, None)
            except SettlementFailure:
                continue
            except WageringError as e:
                logger.error(f"Retry of bet {entry.bet.id} failed: {e}")
                sentry_sdk.capture_exception(e)
                continue
            settled.append(entry.result)
            logger.info(f"Settled bet {entry.bet.id} after {entry.attempts} failed attempt(s)")
        return settled

    def _validate(self, bet: GameBet, result: GameResult) -> None:
        if bet.status == BetStatus.COMPLETED:
            raise InvalidBetState(f"Bet {bet.id} is already completed")

        problem = None
        if result.bet_id != bet.id:
            problem = f"result {result.id} belongs to bet {result.bet_id}"
        elif not math.isfinite(result.win_amount) or result.win_amount < 0:
            problem = f"invalid win amount {result.win_amount}"
        elif (result.outcome == Outcome.WIN) != (result.win_amount > 0):
            problem = f"outcome {result.outcome.value} with win amount {result.win_amount}"

        if problem:
            self.ledger.fail(bet)
            raise InvalidGeneratorOutput(f"Cannot settle bet {bet.id}: {problem}")

    async def _credit(self, bet: GameBet, result: GameResult) -> None:
        try:
            await self.wallet.credit(bet.user_id, bet.currency, result.win_amount)
        except WalletError as e:
            if bet.status != BetStatus.FAILED:
                self.ledger.fail(bet)
            self.retry_queue.add(bet, result, str(e))
            SETTLEMENT_FAILURES.labels(category=bet.category.value).inc()
            logger.error(f"Failed to credit {result.win_amount} {bet.currency.value} for bet {bet.id}: {e}")
            sentry_sdk.capture_exception(e)
            raise SettlementFailure(bet, result, e) from e

        AMOUNT_PAID.labels(category=bet.category.value, currency=bet.currency.value).inc(result.win_amount)

    def _finalise(self, bet: GameBet, result: GameResult, trace_headers: Optional[Dict[str, str]]) -> None:
        # The credit has gone through, so nothing may stay queued for this bet
        self.retry_queue.remove(bet.id)
        self.ledger.settle(bet, result)

        session = self.session_manager.sessions.get(bet.session_id)
        if session is not None and session.is_active:
            self.session_manager.record_win(session.id, result.win_amount)
        elif result.win_amount > 0:
            logger.warning(f"Session {bet.session_id} closed before bet {bet.id} settled; win not aggregated")

        self.notifier.publish(bet.user_id, bet.category, result)

        if self.publisher:
            try:
                payload = dict(result.to_dict(), user_id=bet.user_id, category=bet.category.value,
                               currency=bet.currency.value, bet_amount=bet.amount)
                self.publisher.publish_result(payload, trace_headers or {})
            except Exception as e:
                logger.error(f"Failed to publish result {result.id}: {e}")
