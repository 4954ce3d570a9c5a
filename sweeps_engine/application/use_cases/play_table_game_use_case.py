"""Play table game use case"""
from typing import Dict, Optional

from sweeps_engine.application.dto.play_requests import TableGameRequest
from sweeps_engine.application.dto.play_response import PlayResponse
from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.application.use_cases.game_round import GameRoundUseCase
from sweeps_engine.domain.generators.table_generator import TableGenerator


class PlayTableGameUseCase(GameRoundUseCase):
    """Use case for a blackjack, roulette, baccarat or poker round"""

    def __init__(self, ledger: BetLedger, settlement: SettlementService, generator: TableGenerator):
        super().__init__(ledger, settlement)
        self.generator = generator

    async def execute(self, request: TableGameRequest, trace_headers: Optional[Dict[str, str]] = None) -> PlayResponse:
        bet = await self.ledger.place_bet(
            request.user_id, request.game_id, request.category, request.bet, request.currency
        )
        bet.game_data["game_type"] = request.game_type.value

        table_round = self._generate(bet, lambda: self.generator.resolve(request.game_type, bet.amount))
        result = self.settlement.build_result(
            bet,
            table_round.win_amount,
            {"table_result": table_round.to_dict()},
            push=table_round.is_push
        )
        await self.settlement.settle(bet, result, trace_headers)

        return PlayResponse(bet=bet, result=result, game=table_round.to_dict())
