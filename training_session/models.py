from __future__ import annotations  # Training session lifecycle types

from enum import Enum


class SessionState(str, Enum):  # Controller lifecycle states
    IDLE = "idle"
    ACTIVE = "active"
    EVALUATING = "evaluating"
    CONCLUDED = "concluded"


class SessionStateError(RuntimeError):  # Operation not allowed in the current state
    pass


class SessionBusy(SessionStateError):  # A completion call for this session is still outstanding
    pass


class TranscriptTooShort(SessionStateError):  # Evaluation requested before enough turns were exchanged
    def __init__(self, length: int, required: int) -> None:
        super().__init__(f"Conversation too short to evaluate: {length} messages, need at least {required}")
        self.length = length
        self.required = required


__all__ = ["SessionBusy", "SessionState", "SessionStateError", "TranscriptTooShort"]
