"""MongoDB session snapshot repository"""
import logging
from typing import Any, Dict, Iterable, List

from pymongo import ASCENDING, ReplaceOne
from pymongo.database import Database

from sweeps_engine.application.ports.session_repository_port import SessionRepositoryPort
from sweeps_engine.domain.entities.game_session import GameSession

logger = logging.getLogger(__name__)


class MongoSessionRepository(SessionRepositoryPort):
    """MongoDB implementation of the session snapshot, one document per session"""

    def __init__(self, db: Database):
        self.db = db
        self.collection = db.game_sessions

    def load_all(self) -> List[Dict[str, Any]]:
        """Stored session documents in snapshot order"""
        return list(self.collection.find({}, {"_id": 0}).sort("position", ASCENDING))

    def save_all(self, sessions: Iterable[GameSession]) -> None:
        """Upsert every session and drop documents no longer in the snapshot"""
        operations = []
        ids = []
        for position, session in enumerate(sessions):
            data = session.to_dict()
            data["position"] = position
            operations.append(ReplaceOne({"id": session.id}, data, upsert=True))
            ids.append(session.id)

        if operations:
            self.collection.bulk_write(operations, ordered=True)
        self.collection.delete_many({"id": {"$nin": ids}})
        logger.debug(f"Saved snapshot of {len(ids)} sessions")
