"""
Registry of live chooser sessions addressed by opaque ids.
"""

import logging
import time
import uuid
from collections import OrderedDict
from collections.abc import Callable
from typing import Optional

from vault_chooser.exceptions import SessionNotFoundError
from vault_chooser.use_cases.navigation.chooser_session import ChooserSession

DEFAULT_SESSION_TTL = 1800.0
DEFAULT_MAX_SESSIONS = 100


class ChooserSessionRegistry:
    """
    Keeps independent chooser sessions alive between requests of an HTTP host.

    Sessions are kept in least-recently-used order. Creating a session first
    evicts every session idle for longer than ``session_ttl`` seconds, then the
    least recently used ones while the registry is full. Evicted sessions are
    aborted.
    """

    def __init__(
        self,
        session_factory: Callable[[], ChooserSession],
        session_ttl: float = DEFAULT_SESSION_TTL,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize an empty registry.

        Args:
            session_factory: Builds a fresh, uninitialized session
            session_ttl: Seconds a session may stay unused before it is evicted
            max_sessions: Upper bound on live sessions
            clock: Monotonic time source
            logger: Logger instance to use for logging
        """
        self._session_factory = session_factory
        self._session_ttl = session_ttl
        self._max_sessions = max_sessions
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._sessions: OrderedDict[str, ChooserSession] = OrderedDict()
        self._last_access: dict[str, float] = {}

    def _touch(self, session_id: str) -> None:
        self._sessions.move_to_end(session_id)
        self._last_access[session_id] = self._clock()

    def _evict(self, session_id: str, reason: str) -> None:
        session = self._sessions.pop(session_id)
        del self._last_access[session_id]
        if not session.completed:
            session.abort()
        self._logger.info(f"Evicted chooser session {session_id} ({reason})")

    def evict_idle(self) -> int:
        """
        Evict expired sessions, then the least recently used ones beyond capacity.

        Leaves room for one more session.

        Returns:
            Number of evicted sessions
        """
        evicted = 0
        now = self._clock()
        for session_id in list(self._sessions):
            if now - self._last_access[session_id] < self._session_ttl:
                # the remaining sessions were used more recently
                break
            self._evict(session_id, "idle")
            evicted += 1
        while len(self._sessions) >= self._max_sessions:
            self._evict(next(iter(self._sessions)), "capacity")
            evicted += 1
        return evicted

    def create(self) -> tuple[str, ChooserSession]:
        self.evict_idle()
        session_id = uuid.uuid4().hex
        session = self._session_factory()
        self._sessions[session_id] = session
        self._touch(session_id)
        self._logger.info(f"Created chooser session {session_id}")
        return session_id, session

    def get(self, session_id: str) -> ChooserSession:
        """
        Look up a live session and mark it as used.

        Raises:
            SessionNotFoundError: If no session has this id
        """
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Unknown chooser session: {session_id}")
        self._touch(session_id)
        return session

    def remove(self, session_id: str) -> ChooserSession:
        session = self.get(session_id)
        del self._sessions[session_id]
        del self._last_access[session_id]
        self._logger.info(f"Removed chooser session {session_id}")
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
