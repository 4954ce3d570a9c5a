"""Shared place-generate-settle flow for game use cases"""
import logging
from typing import Callable, TypeVar

import sentry_sdk
from sentry_sdk import start_span

from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.domain.entities.game_bet import GameBet

logger = logging.getLogger(__name__)

T = TypeVar('T')


class GameRoundUseCase:
    """Base for use cases that place a bet, generate an outcome and settle it"""

    def __init__(self, ledger: BetLedger, settlement: SettlementService):
        self.ledger = ledger
        self.settlement = settlement

    def _generate(self, bet: GameBet, generate: Callable[[], T]) -> T:
        """Run a generator; an internal error fails the bet and propagates"""
        with start_span(op="game.rng", name=f"Generate {bet.category.value} outcome") as span:
            span.set_data("bet_amount", bet.amount)
            try:
                return generate()
            except Exception as e:
                logger.error(f"Outcome generation failed for bet {bet.id}: {e}")
                sentry_sdk.capture_exception(e)
                self.ledger.fail(bet)
                raise
