"""Reference operational processes the simulated customer can be grounded on."""
from __future__ import annotations

import datetime as dt
import uuid
from typing import Optional

from pydantic import BaseModel, Field

from .sqlite import get_conn


class ProcessPayload(BaseModel):
    title: str = Field(min_length=1)
    content: str


def insert_process(**data: str) -> str:
    """Insert a process document and return its generated id."""

    payload = ProcessPayload(**data)
    process_id = str(uuid.uuid4())
    with get_conn() as conn:
        conn.execute(
            "INSERT INTO knowledge_base (id, title, content, created_at) VALUES (?, ?, ?, ?)",
            (process_id, payload.title, payload.content, dt.datetime.now(dt.timezone.utc).isoformat()),
        )
    return process_id


def get_process_content(process_id: str) -> Optional[str]:
    """Return the process text, or ``None`` when the id is unknown."""

    with get_conn() as conn:
        row = conn.execute("SELECT content FROM knowledge_base WHERE id = ?", (process_id,)).fetchone()
    return row["content"] if row is not None else None


__all__ = ["ProcessPayload", "get_process_content", "insert_process"]
