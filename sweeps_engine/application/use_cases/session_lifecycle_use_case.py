"""Session lifecycle, currency selection and statistics use case"""
from typing import Any, Dict, Optional

from sweeps_engine.application.dto.session_requests import SetCurrencyRequest, StartSessionRequest
from sweeps_engine.application.services.currency_preferences import CurrencyPreferences
from sweeps_engine.application.services.session_manager import SessionManager
from sweeps_engine.domain.entities.game_session import GameSession
from sweeps_engine.domain.enums import GameCategory
from sweeps_engine.domain.exceptions import SessionNotFound


class SessionLifecycleUseCase:
    """Front door for session operations used by the presentation layer"""

    def __init__(self, session_manager: SessionManager, preferences: CurrencyPreferences):
        self.session_manager = session_manager
        self.preferences = preferences

    def start(self, request: StartSessionRequest) -> GameSession:
        currency = self.preferences.resolve(request.user_id, request.category, request.currency)
        return self.session_manager.start_session(request.user_id, request.category, currency)

    def end(self, session_id: str) -> GameSession:
        session = self.session_manager.end_session(session_id)
        if session is None:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def pause(self, session_id: str) -> GameSession:
        return self.session_manager.pause_session(session_id)

    def resume(self, session_id: str) -> GameSession:
        return self.session_manager.resume_session(session_id)

    def active(self, user_id: str, category: GameCategory) -> Optional[GameSession]:
        return self.session_manager.get_active_session(user_id, category)

    def set_currency(self, request: SetCurrencyRequest) -> None:
        self.preferences.set_user_currency(request.user_id, request.category, request.currency)

    def stats(self) -> Dict[str, Any]:
        stats = self.session_manager.session_stats()
        stats["sessions"] = [s.to_dict() for s in self.session_manager.all_active_sessions()]
        return stats
