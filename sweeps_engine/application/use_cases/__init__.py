from .play_slots_use_case import PlaySlotsUseCase
from .play_table_game_use_case import PlayTableGameUseCase
from .play_bingo_use_case import PlayBingoUseCase
from .sports_bet_use_case import PlaceSportsBetUseCase, SettleSportsBetUseCase
from .session_lifecycle_use_case import SessionLifecycleUseCase
from .retry_settlements_use_case import RetrySettlementsUseCase

__all__ = [
    'PlaySlotsUseCase',
    'PlayTableGameUseCase',
    'PlayBingoUseCase',
    'PlaceSportsBetUseCase',
    'SettleSportsBetUseCase',
    'SessionLifecycleUseCase',
    'RetrySettlementsUseCase'
]
