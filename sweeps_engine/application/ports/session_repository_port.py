"""Session repository port (interface)"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from sweeps_engine.domain.entities.game_session import GameSession


class SessionRepositoryPort(ABC):
    """Port for the persisted session snapshot"""

    @abstractmethod
    def load_all(self) -> List[Dict[str, Any]]:
        """Raw session records in stored order; parsing happens in the caller"""
        pass

    @abstractmethod
    def save_all(self, sessions: Iterable[GameSession]) -> None:
        """Replace the snapshot with the given sessions"""
        pass
