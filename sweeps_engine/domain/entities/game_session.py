"""Game session entity"""
from dataclasses import dataclass
from typing import Optional

from sweeps_engine.domain.enums import Currency, GameCategory, SessionStatus
from sweeps_engine.domain.exceptions import CorruptPersistedState, SessionClosed


@dataclass
class GameSession:
    """Aggregate record of one continuous play period in a category and currency"""

    id: str
    user_id: str
    category: GameCategory
    currency: Currency
    start_time: float
    end_time: Optional[float] = None
    total_wagered: float = 0
    total_won: float = 0
    net_result: float = 0
    bet_count: int = 0
    status: SessionStatus = SessionStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    def record_bet(self, amount: float) -> None:
        """Speculatively debit a stake before its outcome is known"""
        self._ensure_active()
        self.total_wagered += amount
        self.bet_count += 1
        self.net_result -= amount

    def record_win(self, amount: float) -> None:
        self._ensure_active()
        self.total_won += amount
        self.net_result += amount

    def pause(self) -> None:
        self._ensure_active()
        self.status = SessionStatus.PAUSED

    def resume(self) -> None:
        if self.status != SessionStatus.PAUSED:
            raise SessionClosed(f"Session {self.id} is {self.status.value}, not paused")
        self.status = SessionStatus.ACTIVE

    def end(self, now: float) -> None:
        if self.status == SessionStatus.ENDED:
            return
        self.status = SessionStatus.ENDED
        self.end_time = now

    def _ensure_active(self) -> None:
        if self.status != SessionStatus.ACTIVE:
            raise SessionClosed(f"Session {self.id} is {self.status.value}")

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category": self.category.value,
            "currency": self.currency.value,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "total_wagered": self.total_wagered,
            "total_won": self.total_won,
            "net_result": self.net_result,
            "bet_count": self.bet_count,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'GameSession':
        """Create from a stored record, raising CorruptPersistedState on bad data"""
        try:
            session = cls(
                id=str(data["id"]),
                user_id=str(data["user_id"]),
                category=GameCategory(data["category"]),
                currency=Currency(data["currency"]),
                start_time=float(data["start_time"]),
                end_time=float(data["end_time"]) if data.get("end_time") is not None else None,
                total_wagered=float(data.get("total_wagered", 0)),
                total_won=float(data.get("total_won", 0)),
                net_result=float(data.get("net_result", 0)),
                bet_count=int(data.get("bet_count", 0)),
                status=SessionStatus(data.get("status", SessionStatus.ACTIVE.value)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptPersistedState(f"Invalid session record: {e}") from e

        if session.bet_count < 0 or session.total_wagered < 0 or session.total_won < 0:
            raise CorruptPersistedState(f"Negative aggregates in session {session.id}")
        return session
