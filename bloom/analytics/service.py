import asyncio
import datetime
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from bloom.analytics.aggregator import build_analytics
from bloom.analytics.schemas import AnalyticsSnapshot
from bloom.core.clock import Zone, local_now, resolve_zone, window_start
from bloom.core.config import ANALYTICS_WINDOW_DAYS
from bloom.core.events import ChangeFeed
from bloom.goals.db import get_user_goals
from bloom.journals.db import get_user_entries
from bloom.metrics.db import get_user_metrics

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


class AnalyticsFetchError(Exception):
    """Raised when the stores could not be read; the previous snapshot stays in place."""

    def __init__(self, user_id: UUID, source: str, cause: Exception):
        super().__init__(f"Failed to load {source} for analytics: {cause}")
        self.user_id = user_id
        self.source = source
        self.cause = cause


# (user, window_days, zone name)
StateKey = Tuple[UUID, int, str]


@dataclass
class _WindowState:
    snapshot: Optional[AnalyticsSnapshot] = None
    applied: Tuple[int, int] = (-1, -1)  # (version, generation) of the snapshot
    last_error: Optional[str] = None
    generation: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock)


def _read(session_factory: SessionFactory, reader: Callable[..., List[Any]], *args, **kwargs) -> List[Any]:
    db = session_factory()
    try:
        return reader(db, *args, **kwargs)
    finally:
        db.close()


class AnalyticsTracker:
    """
    Keeps the latest analytics snapshot per user, window length and zone.

    A refresh reads entries, metrics and goals concurrently, each on its own
    session, and waits for all three. The result is applied only when its
    (change version, generation) is newer than what is already applied for
    the same window, so a slow refresh that finishes after a newer one is
    dropped. A failed read leaves the previous snapshot untouched.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        feed: ChangeFeed,
        window_days: int = ANALYTICS_WINDOW_DAYS,
    ):
        self.session_factory = session_factory
        self.feed = feed
        self.window_days = window_days
        self._states: Dict[StateKey, _WindowState] = {}
        self._states_lock = threading.Lock()
        self._unsubscribe = feed.subscribe(self._on_change)

    def _on_change(self, user_id: UUID, source: str, version: int):
        # Erased accounts keep nothing cached
        if source == "account":
            self.forget(user_id)

    def _key(self, user_id: UUID, window_days: Optional[int], tz: Zone) -> StateKey:
        return (user_id, window_days or self.window_days, str(resolve_zone(tz)))

    def _state(self, key: StateKey) -> _WindowState:
        with self._states_lock:
            return self._states.setdefault(key, _WindowState())

    def cached(self, user_id: UUID, window_days: Optional[int] = None, tz: Zone = None) -> Optional[AnalyticsSnapshot]:
        return self._state(self._key(user_id, window_days, tz)).snapshot

    def last_error(self, user_id: UUID, window_days: Optional[int] = None, tz: Zone = None) -> Optional[str]:
        return self._state(self._key(user_id, window_days, tz)).last_error

    def is_current(self, user_id: UUID, window_days: Optional[int] = None, tz: Zone = None) -> bool:
        state = self._state(self._key(user_id, window_days, tz))
        return state.snapshot is not None and state.applied[0] == self.feed.version(user_id)

    async def _fetch(self, user_id: UUID, since: datetime.datetime):
        sources = ("entries", "metrics", "goals")
        results = await asyncio.gather(
            asyncio.to_thread(
                _read, self.session_factory, get_user_entries, user_id, since=since, ascending=True
            ),
            asyncio.to_thread(_read, self.session_factory, get_user_metrics, user_id, since=since.date()),
            asyncio.to_thread(_read, self.session_factory, get_user_goals, user_id),
            return_exceptions=True,
        )
        for source, result in zip(sources, results):
            if isinstance(result, Exception):
                raise AnalyticsFetchError(user_id, source, result)
        return results

    async def refresh(
        self,
        user_id: UUID,
        window_days: Optional[int] = None,
        tz: Zone = None,
    ) -> AnalyticsSnapshot:
        """
        Recomputes the user's snapshot for one window and zone.

        Returns:
            AnalyticsSnapshot: The applied snapshot for this window and zone,
            which is the newer of this refresh's result and whatever a
            concurrent refresh of the same window applied.

        Raises:
            AnalyticsFetchError: If any store read failed. The previous
            snapshot, if any, is kept.
        """
        window_days = window_days or self.window_days
        key = self._key(user_id, window_days, tz)
        state = self._state(key)
        with state.lock:
            state.generation += 1
            generation = state.generation
        version = self.feed.version(user_id)

        now = local_now(tz)
        since = window_start(window_days, tz, now=now)

        try:
            entries, metrics, goals = await self._fetch(user_id, since)
        except AnalyticsFetchError as e:
            logger.error(f"Analytics refresh {generation} failed for user {user_id}: {e}")
            with state.lock:
                state.last_error = str(e)
            raise

        snapshot = build_analytics(
            entries, metrics, goals, window_days=window_days, tz=tz, now=now, version=version
        )

        with state.lock:
            if (version, generation) > state.applied:
                state.snapshot = snapshot
                state.applied = (version, generation)
                state.last_error = None
            else:
                logger.info(
                    f"Discarding stale {window_days}-day analytics for user {user_id} "
                    f"(version {version}, generation {generation} <= {state.applied})"
                )
            return state.snapshot

    async def get(self, user_id: UUID, window_days: Optional[int] = None, tz: Zone = None) -> AnalyticsSnapshot:
        if self.is_current(user_id, window_days, tz):
            return self.cached(user_id, window_days, tz)
        return await self.refresh(user_id, window_days, tz)

    def forget(self, user_id: UUID):
        with self._states_lock:
            for key in [k for k in self._states if k[0] == user_id]:
                del self._states[key]

    def close(self):
        self._unsubscribe()
