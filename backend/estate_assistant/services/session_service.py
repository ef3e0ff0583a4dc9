"""
Session management service for maintaining chat state across requests.
"""

from typing import Dict, Any, List, Optional
from datetime import datetime, timedelta
import threading
from dataclasses import dataclass, field

from ..config import get_settings
from .response_cache import ResponseCache


def _default_cache() -> ResponseCache:
    settings = get_settings()
    return ResponseCache(
        max_entries=settings.CACHE_MAX_ENTRIES,
        ttl_seconds=settings.CACHE_TTL_SECONDS,
    )


@dataclass
class ChatSession:
    """
    Per-conversation state owned by the caller.

    Holds the capped conversation history, the response cache and the
    listings returned by the last property search.
    """

    session_id: str
    history_limit: int = 10
    created_at: datetime = field(default_factory=datetime.now)
    last_accessed: datetime = field(default_factory=datetime.now)
    history: List[Dict[str, str]] = field(default_factory=list)
    cache: ResponseCache = field(default_factory=_default_cache)
    known_listings: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def touch(self):
        """Update last accessed time."""
        self.last_accessed = datetime.now()

    def add_to_history(self, role: str, content: str):
        """Add a message to conversation history, dropping the oldest past the limit."""
        self.history.append({"role": role, "content": content})
        if len(self.history) > self.history_limit:
            self.history = self.history[-self.history_limit:]

    def add_turn(self, user_message: str, assistant_response: str):
        self.add_to_history("user", user_message)
        self.add_to_history("assistant", assistant_response)

    def recent_history(self, limit: int) -> List[Dict[str, str]]:
        if limit <= 0:
            return []
        return list(self.history[-limit:])

    def remember_listings(self, listings: List[Dict[str, Any]]):
        """Replace the remembered listings with the results of a new search."""
        self.known_listings = {listing["id"]: listing for listing in listings}


def session_key(broker_id: Optional[str], client_id: Optional[str]) -> str:
    """Default session id for a broker/client pair."""
    return f"{broker_id or 'anonymous'}:{client_id or 'new'}"


class SessionService:
    """
    Service for managing chat sessions.

    Maintains session data in memory with optional cleanup of stale sessions.
    """

    def __init__(self, session_timeout_hours: int = 24, history_limit: int = 10):
        self._sessions: Dict[str, ChatSession] = {}
        self._lock = threading.Lock()
        self._session_timeout = timedelta(hours=session_timeout_hours)
        self._history_limit = history_limit

    def get_or_create_session(self, session_id: str) -> ChatSession:
        """
        Get existing session or create a new one.

        Args:
            session_id: Session identifier

        Returns:
            ChatSession object
        """
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = ChatSession(
                    session_id=session_id,
                    history_limit=self._history_limit,
                )

            session = self._sessions[session_id]
            session.touch()
            return session

    def get_session(self, session_id: str) -> Optional[ChatSession]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session:
                session.touch()
            return session

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session.

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            if session_id in self._sessions:
                del self._sessions[session_id]
                return True
            return False

    def cleanup_stale_sessions(self) -> int:
        """
        Remove sessions that have been inactive for too long.

        Returns:
            Number of sessions removed
        """
        now = datetime.now()

        with self._lock:
            stale_ids = [
                sid for sid, session in self._sessions.items()
                if now - session.last_accessed > self._session_timeout
            ]

            for sid in stale_ids:
                del self._sessions[sid]

        return len(stale_ids)

    def get_active_session_count(self) -> int:
        """Get the number of active sessions."""
        with self._lock:
            return len(self._sessions)


# Singleton instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """
    Get or create the session service singleton.

    Returns:
        SessionService instance
    """
    global _session_service

    if _session_service is None:
        settings = get_settings()
        _session_service = SessionService(
            session_timeout_hours=settings.SESSION_TIMEOUT_HOURS,
            history_limit=settings.HISTORY_LIMIT,
        )

    return _session_service
