"""
In-memory session store for hint sessions.

Single process, not durable. Each session id gets its own asyncio.Lock so
that turns against the same session run one at a time.
"""

import asyncio
from typing import Optional

from lib.models.session import HintSession


class SessionStore:
    """Keyed map from session id to HintSession with per-session locks."""

    def __init__(self):
        self._sessions: dict[str, HintSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def create(self, session: HintSession) -> str:
        """Store a new session under its own id and return the id."""
        if session.session_id in self._sessions:
            raise KeyError(f"Session id already in use: {session.session_id}")
        self._sessions[session.session_id] = session
        return session.session_id

    def get(self, session_id: str) -> Optional[HintSession]:
        """Return the session if it exists."""
        return self._sessions.get(session_id)

    def put(self, session_id: str, session: HintSession) -> None:
        """Store or replace the session for an id."""
        self._sessions[session_id] = session

    def delete(self, session_id: str) -> None:
        """Remove a session and its lock. Unknown ids are ignored."""
        self._sessions.pop(session_id, None)
        self._locks.pop(session_id, None)

    def lock(self, session_id: str) -> asyncio.Lock:
        """Lock guarding every mutation of one session."""
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
