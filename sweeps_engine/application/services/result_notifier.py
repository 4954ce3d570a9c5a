"""In-process result subscriptions keyed by user and category"""
import itertools
import logging
from typing import Callable, Dict, List, Tuple

from sweeps_engine.domain.entities.game_result import GameResult
from sweeps_engine.domain.enums import GameCategory

logger = logging.getLogger(__name__)

ResultCallback = Callable[[GameResult], None]


class ResultNotifier:
    """Delivers settled results to every subscriber of a (user, category) key"""

    def __init__(self):
        self._subscribers: Dict[Tuple[str, GameCategory], List[Tuple[int, ResultCallback]]] = {}
        self._tokens = itertools.count()

    def subscribe(self, user_id: str, category: GameCategory, callback: ResultCallback) -> Callable[[], None]:
        """Register a callback; the returned function removes exactly this registration"""
        key = (user_id, category)
        token = next(self._tokens)
        self._subscribers.setdefault(key, []).append((token, callback))

        def unsubscribe() -> None:
            registrations = self._subscribers.get(key, [])
            self._subscribers[key] = [r for r in registrations if r[0] != token]
            if not self._subscribers[key]:
                del self._subscribers[key]

        return unsubscribe

    def subscriber_count(self, user_id: str, category: GameCategory) -> int:
        return len(self._subscribers.get((user_id, category), []))

    def publish(self, user_id: str, category: GameCategory, result: GameResult) -> None:
        for _, callback in list(self._subscribers.get((user_id, category), [])):
            try:
                callback(result)
            except Exception as e:
                # One broken subscriber must not starve the others
                logger.exception(f"Result subscriber failed for {user_id}/{category.value}: {e}")
