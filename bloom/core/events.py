"""
Per-user change feed.

Every write to a user's entries, metrics or goals bumps that user's version.
Readers compare the version a snapshot was computed at against the current
one to decide whether a recompute is needed.
"""

import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List
from uuid import UUID

logger = logging.getLogger(__name__)

Listener = Callable[[UUID, str, int], None]


class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._versions: Dict[UUID, int] = defaultdict(int)
        self._listeners: List[Listener] = []

    def publish(self, user_id: UUID, source: str) -> int:
        """
        Records a change to one of the user's stores and notifies listeners.

        Args:
            user_id (UUID): Owner of the changed rows.
            source (str): Store that changed ("entries", "metrics", "goals", "account").

        Returns:
            int: The user's new version.
        """
        with self._lock:
            self._versions[user_id] += 1
            version = self._versions[user_id]
            listeners = list(self._listeners)

        logger.debug(f"Change on {source} for user {user_id}, version {version}")
        for listener in listeners:
            try:
                listener(user_id, source, version)
            except Exception as e:
                logger.error(f"Change listener failed for user {user_id}: {e}")
        return version

    def version(self, user_id: UUID) -> int:
        with self._lock:
            return self._versions.get(user_id, 0)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe


change_feed = ChangeFeed()


def get_change_feed() -> ChangeFeed:
    return change_feed
