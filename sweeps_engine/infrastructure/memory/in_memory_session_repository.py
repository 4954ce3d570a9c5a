"""In-process session snapshot store"""
import copy
from typing import Any, Dict, Iterable, List

from sweeps_engine.application.ports.session_repository_port import SessionRepositoryPort
from sweeps_engine.domain.entities.game_session import GameSession


class InMemorySessionRepository(SessionRepositoryPort):
    """Keeps the snapshot as plain records, as a document store would"""

    def __init__(self, records: List[Dict[str, Any]] = None):
        self.records: List[Dict[str, Any]] = list(records or [])
        self.save_count = 0

    def load_all(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.records)

    def save_all(self, sessions: Iterable[GameSession]) -> None:
        self.records = [session.to_dict() for session in sessions]
        self.save_count += 1
