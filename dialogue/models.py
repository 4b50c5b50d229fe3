from __future__ import annotations  # Conversation domain models shared by prompts and sessions

from typing import Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict

SPEAKER_LABELS = {"user": "ATENDENTE", "assistant": "CLIENTE"}


class Message(BaseModel):  # One transcript entry; "user" is the attendant, "assistant" the simulated customer
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class ScenarioContext(BaseModel):  # Scenario framing fixed for a session's lifetime
    model_config = ConfigDict(frozen=True)

    scenario: str
    customer_profile: str
    reference_process: Optional[str] = None


def format_transcript(messages: Iterable[Message]) -> str:  # Render "ATENDENTE:/CLIENTE:" lines
    return "\n".join(f"{SPEAKER_LABELS[msg.role]}: {msg.content}" for msg in messages)


__all__ = ["Message", "ScenarioContext", "SPEAKER_LABELS", "format_transcript"]
