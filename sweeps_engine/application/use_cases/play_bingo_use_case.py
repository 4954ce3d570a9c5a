"""Play bingo use case"""
import logging
from typing import Dict, Optional

from sweeps_engine.application.dto.play_requests import BingoRequest
from sweeps_engine.application.dto.play_response import PlayResponse
from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.application.use_cases.game_round import GameRoundUseCase
from sweeps_engine.domain.entities.bingo_patterns import get_pattern
from sweeps_engine.domain.enums import Currency, GameCategory
from sweeps_engine.domain.generators.bingo_generator import BingoCardGenerator, compute_prize
from sweeps_engine.domain.generators.bingo_room import DEFAULT_RECENT_CALLS, BingoRoom
from sweeps_engine.domain.generators.random_source import RandomSource

logger = logging.getLogger(__name__)

CARD_COSTS: Dict[Currency, float] = {
    Currency.GC: 100,
    Currency.SC: 1,
}

# Share of the number pool called in one game, as (minimum, maximum)
CALL_SHARE = (0.4, 0.8)


class PlayBingoUseCase(GameRoundUseCase):
    """Use case for a single-player bingo game on one or more cards"""

    def __init__(
        self,
        ledger: BetLedger,
        settlement: SettlementService,
        card_generator: BingoCardGenerator,
        random_source: RandomSource,
        recent_calls: int = DEFAULT_RECENT_CALLS
    ):
        super().__init__(ledger, settlement)
        self.card_generator = card_generator
        self.random_source = random_source
        self.recent_calls = recent_calls

    async def execute(self, request: BingoRequest, trace_headers: Optional[Dict[str, str]] = None) -> PlayResponse:
        # Unknown patterns are rejected before any funds move
        pattern = get_pattern(request.ball_type, request.pattern_id)

        currency = self.ledger.preferences.resolve(request.user_id, GameCategory.BINGO, request.currency)
        card_cost = CARD_COSTS[currency]
        bet = await self.ledger.place_bet(
            request.user_id, request.game_id, GameCategory.BINGO, request.card_count * card_cost, currency
        )
        bet.game_data.update({
            "card_count": request.card_count,
            "ball_type": request.ball_type.value,
            "pattern_id": pattern.id
        })

        def play() -> BingoRoom:
            room = BingoRoom(bet.id, request.ball_type, pattern, self.random_source, self.recent_calls)
            for _ in range(request.card_count):
                room.add_card(self.card_generator.generate(request.ball_type, card_cost))
            max_number = request.ball_type.max_number
            room.play(self.random_source.randint(int(max_number * CALL_SHARE[0]), int(max_number * CALL_SHARE[1])))
            return room

        room = self._generate(bet, play)

        prize = 0
        completed_lines = {}
        for card in room.winners:
            card_prize, lines = compute_prize(card, pattern)
            prize += card_prize
            completed_lines[card.id] = lines

        game = {
            "cards": [card.to_dict() for card in room.cards],
            "called_numbers": room.called_numbers,
            "recent_calls": room.recent_calls,
            "pattern": pattern.id,
            "winning_cards": [card.id for card in room.winners],
            "completed_lines": completed_lines,
            "prize": prize,
            "game_ended": room.game_over
        }
        logger.info(f"Bingo game {bet.id}: {len(room.called_numbers)} calls, {len(room.winners)} winning card(s)")

        result = self.settlement.build_result(bet, prize, {"bingo_result": game})
        await self.settlement.settle(bet, result, trace_headers)

        return PlayResponse(bet=bet, result=result, game=game)
