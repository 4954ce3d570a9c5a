from .random_source import RandomSource, SystemRandomSource
from .slot_generator import SlotGenerator, SlotSpin
from .table_generator import SimplifiedTableStrategy, TableGenerator, TableRound, TableStrategy
from .bingo_generator import BingoCardGenerator, compute_prize
from .bingo_room import BingoRoom, NumberCaller

__all__ = [
    'RandomSource',
    'SystemRandomSource',
    'SlotGenerator',
    'SlotSpin',
    'SimplifiedTableStrategy',
    'TableGenerator',
    'TableRound',
    'TableStrategy',
    'BingoCardGenerator',
    'compute_prize',
    'BingoRoom',
    'NumberCaller'
]
