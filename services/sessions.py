"""In-process registry of live training sessions."""
from __future__ import annotations

import threading
from typing import Dict

from training_session import TrainingSession

_SESSIONS: Dict[str, TrainingSession] = {}
_GUARD = threading.Lock()


def register_session(session: TrainingSession) -> TrainingSession:
    """Track ``session`` under its session id."""

    with _GUARD:
        _SESSIONS[session.session_id] = session
    return session


def load_session(session_id: str) -> TrainingSession:
    """Return the live session for ``session_id``.

    Raises:
        KeyError: If no such session is registered.
    """

    with _GUARD:
        if session_id not in _SESSIONS:
            raise KeyError(f"Session '{session_id}' not found")
        return _SESSIONS[session_id]


def drop_session(session_id: str) -> None:
    with _GUARD:
        _SESSIONS.pop(session_id, None)


def clear_sessions() -> None:
    with _GUARD:
        _SESSIONS.clear()
