"""Domain enumerations"""
from enum import Enum


class Currency(str, Enum):
    """Wallet currencies"""

    GC = "GC"  # play-money, no cash-out value
    SC = "SC"  # sweepstakes-redeemable


class GameCategory(str, Enum):
    """Game families a bet or session belongs to"""

    SLOTS = "slots"
    TABLE = "table"
    LIVE = "live"
    BINGO = "bingo"
    SPORTSBOOK = "sportsbook"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    ENDED = "ended"


class BetStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Outcome(str, Enum):
    WIN = "win"
    LOSE = "lose"
    PUSH = "push"


class TableGameType(str, Enum):
    BLACKJACK = "blackjack"
    ROULETTE = "roulette"
    BACCARAT = "baccarat"
    POKER = "poker"


class BallType(str, Enum):
    """Bingo variants by the size of the number pool"""

    BALL_30 = "30-ball"
    BALL_75 = "75-ball"
    BALL_90 = "90-ball"

    @property
    def max_number(self) -> int:
        return {"30-ball": 30, "75-ball": 75, "90-ball": 90}[self.value]


class SportsOutcome(str, Enum):
    WIN = "win"
    LOSE = "lose"
    VOID = "void"
