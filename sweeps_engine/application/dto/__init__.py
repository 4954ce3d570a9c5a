from .session_requests import SetCurrencyRequest, StartSessionRequest
from .play_requests import BingoRequest, SettleSportsBetRequest, SpinRequest, SportsBetRequest, TableGameRequest
from .play_response import PlayResponse

__all__ = [
    'StartSessionRequest',
    'SetCurrencyRequest',
    'SpinRequest',
    'TableGameRequest',
    'BingoRequest',
    'SportsBetRequest',
    'SettleSportsBetRequest',
    'PlayResponse'
]
