"""Sportsbook bet placement and settlement use cases"""
from typing import Dict, Optional

from sweeps_engine.application.dto.play_requests import SettleSportsBetRequest, SportsBetRequest
from sweeps_engine.application.dto.play_response import PlayResponse
from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.domain.enums import BetStatus, GameCategory, SportsOutcome
from sweeps_engine.domain.exceptions import InvalidBetState


class PlaceSportsBetUseCase:
    """Places a bet that stays pending until its event is settled; the policy keeps it SC-only"""

    def __init__(self, ledger: BetLedger):
        self.ledger = ledger

    async def execute(self, request: SportsBetRequest) -> PlayResponse:
        bet = await self.ledger.place_bet(
            request.user_id, request.game_id, GameCategory.SPORTSBOOK, request.amount, request.currency
        )
        bet.game_data.update({
            "bet_type": request.bet_type,
            "selection": request.selection,
            "odds": request.odds,
            "potential_payout": request.amount * request.odds
        })
        bet.await_event()
        return PlayResponse(bet=bet, game={"pending": True})


class SettleSportsBetUseCase:
    """Settles a pending sportsbook bet once the event outcome is known"""

    def __init__(self, ledger: BetLedger, settlement: SettlementService):
        self.ledger = ledger
        self.settlement = settlement

    async def execute(self, request: SettleSportsBetRequest, trace_headers: Optional[Dict[str, str]] = None) -> PlayResponse:
        bet = self.ledger.get_bet(request.bet_id)
        if bet.category != GameCategory.SPORTSBOOK or bet.status != BetStatus.PENDING:
            raise InvalidBetState(f"Bet {bet.id} is not a pending sportsbook bet")

        win_amount = bet.amount * bet.game_data["odds"] if request.outcome == SportsOutcome.WIN else 0
        settlement = {
            "bet_type": bet.game_data.get("bet_type"),
            "selection": bet.game_data.get("selection"),
            "odds": bet.game_data["odds"],
            "outcome": request.outcome.value,
            "settlement": win_amount
        }
        result = self.settlement.build_result(
            bet, win_amount, {"sports_result": settlement}, push=request.outcome == SportsOutcome.VOID
        )
        await self.settlement.settle(bet, result, trace_headers)
        return PlayResponse(bet=bet, result=result, game=settlement)
