"""Write-only persistence of training conversations and their evaluations."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, Optional, Sequence

from pydantic import BaseModel

from call_evaluation import EvaluationResult
from dialogue import Message, ScenarioContext

from .sqlite import get_conn


class ConversationPayload(BaseModel):
    id: str
    scenario: str
    customer_profile: str
    rubric: str


def _now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def _transcript_json(messages: Sequence[Message]) -> str:
    return json.dumps([message.model_dump() for message in messages], ensure_ascii=False)


def insert_conversation(**data: Any) -> str:
    """Insert a conversation row with an empty transcript and return its id."""

    payload = ConversationPayload(**data)
    with get_conn() as conn:
        conn.execute(
            """INSERT INTO conversations
               (id, scenario, customer_profile, rubric, transcript, created_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (payload.id, payload.scenario, payload.customer_profile, payload.rubric, "[]", _now()),
        )
    return payload.id


def update_transcript(conversation_id: str, messages: Sequence[Message]) -> None:
    """Overwrite the stored transcript blob."""

    with get_conn() as conn:
        cur = conn.execute(
            "UPDATE conversations SET transcript = ? WHERE id = ?",
            (_transcript_json(messages), conversation_id),
        )
        if cur.rowcount == 0:
            raise KeyError(f"Conversation '{conversation_id}' not found")


def conclude_conversation(conversation_id: str, evaluation: EvaluationResult) -> None:
    """Store the evaluation blob and mark the conversation as ended."""

    with get_conn() as conn:
        cur = conn.execute(
            """UPDATE conversations
               SET evaluation = ?, acceptance_probability = ?, ended_at = ?
               WHERE id = ?""",
            (
                evaluation.model_dump_json(by_alias=True),
                evaluation.acceptance_probability,
                _now(),
                conversation_id,
            ),
        )
        if cur.rowcount == 0:
            raise KeyError(f"Conversation '{conversation_id}' not found")


def fetch_conversation(conversation_id: str) -> Optional[Dict[str, Any]]:
    """Return the raw row for audits and tests."""

    with get_conn() as conn:
        row = conn.execute("SELECT * FROM conversations WHERE id = ?", (conversation_id,)).fetchone()
    return dict(row) if row is not None else None


class SqliteConversationRecorder:  # Recorder backed by the conversations table
    def open(self, session_id: str, context: ScenarioContext, rubric: str) -> None:
        insert_conversation(
            id=session_id,
            scenario=context.scenario,
            customer_profile=context.customer_profile,
            rubric=rubric,
        )

    def save_transcript(self, session_id: str, messages: Sequence[Message]) -> None:
        update_transcript(session_id, messages)

    def save_evaluation(self, session_id: str, evaluation: EvaluationResult) -> None:
        conclude_conversation(session_id, evaluation)


__all__ = [
    "ConversationPayload",
    "SqliteConversationRecorder",
    "conclude_conversation",
    "fetch_conversation",
    "insert_conversation",
    "update_transcript",
]
