"""
In-process registry of live practice sessions.

Sessions are never persisted while in progress; an abandoned session is
simply dropped. Sessions nobody has touched for ``idle_timeout`` are evicted
on the next access to the store, so sessions left without complete or delete
do not accumulate. Each session belongs to one user interaction, the lock only
protects the registry itself.
"""
import logging
import threading
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional
from pydantic import BaseModel

from flashdeck.core.clock import SessionClock, system_clock
from flashdeck.core.config import settings
from flashdeck.core.exceptions import NotFoundError
from flashdeck.models.enums import PracticeDirection
from flashdeck.models.practice_session import PracticeSession

logger = logging.getLogger(__name__)


class StoredPractice(BaseModel):
    session_id: str
    user_id: int
    direction: PracticeDirection
    practice: PracticeSession
    touched_at: datetime


class PracticeSessionStore:
    def __init__(
        self,
        idle_timeout: Optional[timedelta] = None,
        clock: SessionClock = system_clock
    ):
        self.idle_timeout = idle_timeout or timedelta(minutes=settings.practice_session_idle_minutes)
        self.clock = clock
        self._sessions: Dict[str, StoredPractice] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def add(self, user_id: int, direction: PracticeDirection, practice: PracticeSession) -> StoredPractice:
        stored = StoredPractice(
            session_id=str(uuid.uuid4()),
            user_id=user_id,
            direction=direction,
            practice=practice,
            touched_at=self.clock.now(),
        )
        with self._lock:
            self._evict_idle_locked()
            self._sessions[stored.session_id] = stored
        logger.info(f"New practice session: {stored.session_id} [deck={practice.deck_id}, user={user_id}]")
        return stored

    def get(self, session_id: str) -> StoredPractice:
        """
        Raises:
            NotFoundError: If the session is unknown, was discarded or expired
        """
        with self._lock:
            self._evict_idle_locked()
            stored = self._sessions.get(session_id)
            if stored is not None:
                stored = stored.model_copy(update={"touched_at": self.clock.now()})
                self._sessions[session_id] = stored
        if stored is None:
            raise NotFoundError(f"Practice session not found: {session_id}")
        return stored

    def update(self, session_id: str, practice: PracticeSession) -> StoredPractice:
        with self._lock:
            self._evict_idle_locked()
            stored = self._sessions.get(session_id)
            if stored is None:
                raise NotFoundError(f"Practice session not found: {session_id}")
            stored = stored.model_copy(update={"practice": practice, "touched_at": self.clock.now()})
            self._sessions[session_id] = stored
        return stored

    def discard(self, session_id: str) -> Optional[StoredPractice]:
        with self._lock:
            stored = self._sessions.pop(session_id, None)
        if stored is not None:
            logger.info(f"Discarded practice session: {session_id}")
        return stored

    def evict_idle(self) -> int:
        """Drop every session idle for longer than idle_timeout; returns how many."""
        with self._lock:
            return self._evict_idle_locked()

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def _evict_idle_locked(self) -> int:
        cutoff = self.clock.now() - self.idle_timeout
        expired = [sid for sid, stored in self._sessions.items() if stored.touched_at < cutoff]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info(f"Evicted {len(expired)} idle practice session(s)")
        return len(expired)


practice_store = PracticeSessionStore()
