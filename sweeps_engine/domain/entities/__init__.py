from .game_session import GameSession
from .game_bet import GameBet
from .game_result import GameResult
from .slot_symbols import SlotSymbols
from .bingo import BingoCard, BingoPattern

__all__ = [
    'GameSession',
    'GameBet',
    'GameResult',
    'SlotSymbols',
    'BingoCard',
    'BingoPattern'
]
