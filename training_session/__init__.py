"""Session controller for trainee conversations."""
from .controller import ConversationRecorder, TrainingSession
from .models import SessionBusy, SessionState, SessionStateError, TranscriptTooShort

__all__ = [
    "ConversationRecorder",
    "SessionBusy",
    "SessionState",
    "SessionStateError",
    "TrainingSession",
    "TranscriptTooShort",
]
