"""In-process session table.

Sessions map an unguessable token to one user id. They live until the
process exits: there is no logout and no expiry.
"""

import secrets
import threading

SESSION_TOKEN_BYTES = 32


class SessionTable:
    def __init__(self) -> None:
        self._sessions: dict[str, int] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> str:
        """Start a session for user_id and return its token."""
        session_id = secrets.token_urlsafe(SESSION_TOKEN_BYTES)
        with self._lock:
            self._sessions[session_id] = user_id
        return session_id

    def lookup(self, session_id: str | None) -> int | None:
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
