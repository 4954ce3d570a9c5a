"""Play slots use case"""
from typing import Dict, Optional

from sweeps_engine.application.dto.play_requests import SpinRequest
from sweeps_engine.application.dto.play_response import PlayResponse
from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.application.use_cases.game_round import GameRoundUseCase
from sweeps_engine.domain.enums import GameCategory
from sweeps_engine.domain.generators.slot_generator import SlotGenerator


class PlaySlotsUseCase(GameRoundUseCase):
    """Use case for one slot spin"""

    def __init__(self, ledger: BetLedger, settlement: SettlementService, generator: SlotGenerator):
        super().__init__(ledger, settlement)
        self.generator = generator

    async def execute(self, request: SpinRequest, trace_headers: Optional[Dict[str, str]] = None) -> PlayResponse:
        bet = await self.ledger.place_bet(
            request.user_id, request.game_id, GameCategory.SLOTS, request.bet, request.currency
        )

        spin = self._generate(bet, lambda: self.generator.spin(bet.amount))
        result = self.settlement.build_result(bet, spin.total_win, {"slot_result": spin.to_dict()})
        await self.settlement.settle(bet, result, trace_headers)

        return PlayResponse(bet=bet, result=result, game=spin.to_dict())
