import json
import sqlite3

import pytest

from call_evaluation import map_evaluation
from conftest import PRINCIPLES_PAYLOAD
from dialogue import Message
from storage.conversations import (
    conclude_conversation,
    fetch_conversation,
    insert_conversation,
    update_transcript,
)
from storage.knowledge_base import get_process_content, insert_process


def _conversation(conversation_id="c-1"):
    return insert_conversation(
        id=conversation_id,
        scenario="Contestação de Cobrança",
        customer_profile="Cliente Confuso",
        rubric="principles",
    )


def test_migrate_creates_tables(tmp_db):
    conn = sqlite3.connect(tmp_db)
    names = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    conn.close()
    assert {"conversations", "knowledge_base"} <= names


def test_conversation_lifecycle():
    _conversation()
    row = fetch_conversation("c-1")
    assert row["transcript"] == "[]"
    assert row["ended_at"] is None

    update_transcript("c-1", [Message(role="assistant", content="Não reconheço essa compra.")])
    conclude_conversation("c-1", map_evaluation(PRINCIPLES_PAYLOAD, "principles"))

    row = fetch_conversation("c-1")
    assert json.loads(row["transcript"]) == [{"role": "assistant", "content": "Não reconheço essa compra."}]
    assert json.loads(row["evaluation"])["rubric"] == "principles"
    assert row["acceptance_probability"] == 55


def test_updates_for_unknown_conversation_raise():
    with pytest.raises(KeyError):
        update_transcript("missing", [])
    with pytest.raises(KeyError):
        conclude_conversation("missing", map_evaluation(PRINCIPLES_PAYLOAD, "principles"))


def test_fetch_unknown_conversation_returns_none():
    assert fetch_conversation("missing") is None


def test_knowledge_base_round_trip():
    pid = insert_process(title="Contestação", content="1. Ouvir o cliente")
    assert get_process_content(pid) == "1. Ouvir o cliente"
    assert get_process_content("missing") is None
