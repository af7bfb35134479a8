"""In-process lookup of the trackers that own live question sessions."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from vocabcoach.application.questions.services.session_tracker import QuestionSessionTracker
from vocabcoach.domain.common.value_objects import QuestionSessionId, UserId
from vocabcoach.exceptions import QuestionSessionConflictError, QuestionSessionNotFoundError

logger = structlog.get_logger(__name__)

DEFAULT_IDLE_TIMEOUT_SECONDS = 3600.0


@dataclass
class _Entry:
    user_id: UserId
    tracker: QuestionSessionTracker
    last_used: float


class QuestionSessionTrackerRegistry:
    """
    Maps session ids to their trackers so that separate requests reach the
    same in-memory session state.

    Trackers are only handed back to the user that started them. A tracker
    that has not been used for ``idle_timeout`` seconds is dropped; its
    session can no longer be tracked, but whatever was stored stays stored.
    """

    def __init__(
        self,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_timeout = idle_timeout
        self.clock = clock
        self._trackers: dict[QuestionSessionId, _Entry] = {}
        self._lock = threading.Lock()

    def register(
        self, session_id: QuestionSessionId, user_id: UserId, tracker: QuestionSessionTracker
    ) -> None:
        """
        Register or replace the tracker of a session.

        Raises:
            QuestionSessionConflictError: If another user owns the session id
        """
        with self._lock:
            now = self.clock()
            self._evict_idle(now)
            entry = self._trackers.get(session_id)
            if entry is not None and entry.user_id != user_id:
                raise QuestionSessionConflictError(session_id.value)
            self._trackers[session_id] = _Entry(user_id, tracker, now)
        logger.debug("question_session_tracker_registered", session_id=session_id.value)

    def get(self, session_id: QuestionSessionId, user_id: UserId) -> QuestionSessionTracker:
        """
        Raises:
            QuestionSessionNotFoundError: If no tracker is registered for the
                session, it has been idle too long or it belongs to another user
        """
        with self._lock:
            now = self.clock()
            self._evict_idle(now)
            entry = self._trackers.get(session_id)
            if entry is None or entry.user_id != user_id:
                raise QuestionSessionNotFoundError(session_id.value)
            entry.last_used = now
            return entry.tracker

    def owner(self, session_id: QuestionSessionId) -> UserId | None:
        with self._lock:
            self._evict_idle(self.clock())
            entry = self._trackers.get(session_id)
        return entry.user_id if entry is not None else None

    def remove(self, session_id: QuestionSessionId) -> None:
        with self._lock:
            self._trackers.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._trackers)

    def _evict_idle(self, now: float) -> None:
        # Caller holds the lock
        idle = [
            session_id
            for session_id, entry in self._trackers.items()
            if now - entry.last_used >= self.idle_timeout
        ]
        for session_id in idle:
            del self._trackers[session_id]
        if idle:
            logger.info(
                "idle_question_session_trackers_evicted",
                count=len(idle),
                session_ids=[session_id.value for session_id in idle],
            )
