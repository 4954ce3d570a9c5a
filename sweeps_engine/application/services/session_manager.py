"""Session lifecycle and aggregates"""
import logging
import time
import uuid
from typing import Callable, Dict, List, Optional

from sweeps_engine.application.ports.session_repository_port import SessionRepositoryPort
from sweeps_engine.domain.entities.game_session import GameSession
from sweeps_engine.domain.enums import Currency, GameCategory, SessionStatus
from sweeps_engine.domain.exceptions import CorruptPersistedState, SessionClosed, SessionNotFound
from sweeps_engine.domain.policies.currency_policy import CurrencyPolicy
from sweeps_engine.metrics import ACTIVE_SESSIONS

logger = logging.getLogger(__name__)


def _new_session_id() -> str:
    return f"session-{uuid.uuid4().hex[:12]}"


class SessionManager:
    """Tracks at most one active session per (user, category)

    Every mutation is followed by a full snapshot through the repository.
    """

    def __init__(
        self,
        repository: SessionRepositoryPort,
        policy: CurrencyPolicy = None,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _new_session_id
    ):
        self.repository = repository
        self.policy = policy or CurrencyPolicy()
        self.clock = clock
        self.id_factory = id_factory
        self.sessions: Dict[str, GameSession] = {}

    def load(self) -> int:
        """Reload the snapshot, skipping records that fail to parse"""
        loaded = 0
        for record in self.repository.load_all():
            try:
                session = GameSession.from_dict(record)
            except CorruptPersistedState as e:
                logger.warning(f"Skipping stored session: {e}")
                continue
            self.sessions[session.id] = session
            loaded += 1

        ACTIVE_SESSIONS.set(len(self.all_active_sessions()))
        logger.info(f"Loaded {loaded} sessions")
        return loaded

    def start_session(self, user_id: str, category: GameCategory, currency: Currency) -> GameSession:
        self.policy.ensure_currency_allowed(category, currency)

        now = self.clock()
        previous = self.get_active_session(user_id, category)
        if previous:
            # Superseded sessions are closed so only one stays active
            previous.end(now)
            logger.info(f"Session {previous.id} superseded for user {user_id} in {category.value}")

        session = GameSession(
            id=self.id_factory(),
            user_id=user_id,
            category=category,
            currency=currency,
            start_time=now
        )
        self.sessions[session.id] = session
        self._persist()
        return session

    def end_session(self, session_id: str) -> Optional[GameSession]:
        session = self.sessions.get(session_id)
        if session is None:
            return None
        session.end(self.clock())
        self._persist()
        return session

    def pause_session(self, session_id: str) -> GameSession:
        session = self.get_session(session_id)
        session.pause()
        self._persist()
        return session

    def resume_session(self, session_id: str) -> GameSession:
        session = self.get_session(session_id)
        other = self.get_active_session(session.user_id, session.category)
        if other is not None:
            raise SessionClosed(
                f"Cannot resume {session.id}: session {other.id} is already active"
            )
        session.resume()
        self._persist()
        return session

    def get_session(self, session_id: str) -> GameSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def get_active_session(self, user_id: str, category: GameCategory) -> Optional[GameSession]:
        """Most recently started active session for the pair"""
        active = [
            s for s in self.sessions.values()
            if s.user_id == user_id and s.category == category and s.status == SessionStatus.ACTIVE
        ]
        if not active:
            return None
        return max(active, key=lambda s: s.start_time)

    def record_bet(self, session_id: str, amount: float) -> GameSession:
        session = self.get_session(session_id)
        session.record_bet(amount)
        self._persist()
        return session

    def record_win(self, session_id: str, amount: float) -> GameSession:
        session = self.get_session(session_id)
        session.record_win(amount)
        self._persist()
        return session

    def all_active_sessions(self) -> List[GameSession]:
        return [s for s in self.sessions.values() if s.is_active]

    def session_stats(self) -> Dict[str, float]:
        sessions = list(self.sessions.values())
        return {
            "total_sessions": len(sessions),
            "active_sessions": len([s for s in sessions if s.is_active]),
            "total_wagered": sum(s.total_wagered for s in sessions),
            "total_won": sum(s.total_won for s in sessions),
            "net_result": sum(s.net_result for s in sessions),
        }

    def _persist(self) -> None:
        self.repository.save_all(list(self.sessions.values()))
        ACTIVE_SESSIONS.set(len(self.all_active_sessions()))
