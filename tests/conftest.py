import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import LlmRoute
from config.settings import settings
from llm_gateway import CompletionClient
from services.sessions import clear_sessions
from storage.migrate import migrate


class FakeResponse:
    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self._body = body

    def json(self) -> Any:
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body

    @property
    def text(self) -> str:
        return self._body if isinstance(self._body, str) else json.dumps(self._body)


class FakeHttpClient:
    """Scripted stand-in for the completion endpoint."""

    def __init__(self, *replies: Any) -> None:
        self.replies: List[Any] = list(replies)
        self.requests: List[Dict[str, Any]] = []

    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: Any) -> FakeResponse:
        self.requests.append({"url": url, "json": json, "headers": headers})
        if not self.replies:
            raise AssertionError("FakeHttpClient ran out of scripted replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply()
        if isinstance(reply, FakeResponse):
            return reply
        return FakeResponse(200, completion_body(reply))


def completion_body(content: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def make_route(**overrides: Any) -> LlmRoute:
    data: Dict[str, Any] = {
        "name": "fake",
        "base_url": "http://llm.test",
        "endpoint": "/v1/chat/completions",
        "model": "fake-model",
        "api_key": "test-key",
    }
    data.update(overrides)
    return LlmRoute(**data)


def make_client(*replies: Any) -> tuple[CompletionClient, FakeHttpClient]:
    http = FakeHttpClient(*replies)
    return CompletionClient(make_route(), http_client=http), http


PRINCIPLES_PAYLOAD: Dict[str, Any] = {
    "principios": {
        "acolhimento": {"nota": 8, "observacao": "Cumprimentou com cordialidade."},
        "empatia": {"nota": 7, "observacao": "Reconheceu a preocupação do cliente."},
        "resolutividade": {"nota": 9, "observacao": "Desbloqueou o cartão."},
        "argumentacao": {"nota": 6, "observacao": "Benefícios pouco explorados."},
        "contra_argumentacao": {"nota": 5, "observacao": "Aceitou a primeira objeção."},
    },
    "abordagem_venda": {"classificacao": "Boa", "justificativa": "Ofertou depois de resolver a demanda."},
    "probabilidade_aceitacao": 55,
    "justificativa_probabilidade": "Cliente pediu detalhes mas adiou a decisão.",
    "feedbacks": [
        {
            "principio": "Contra-argumentação",
            "observacao": "Não explorou a objeção de preço.",
            "sugestao": "Apresente o custo-benefício em números.",
            "trecho_exemplo": "CLIENTE: Tá caro isso.",
        }
    ],
    "resumo_geral": "Atendimento resolutivo com oferta no momento certo.",
}

SALES_CRITERIA_PAYLOAD: Dict[str, Any] = {
    "criterios": {
        "resolucao_demanda": {"nota": 9, "observacao": "Resolveu o bloqueio."},
        "timing_abordagem": {"nota": 4, "observacao": "Ofertou cedo demais."},
        "identificacao_necessidades": {"nota": 5, "observacao": "Poucas perguntas."},
        "tecnica_apresentacao": {"nota": 6, "observacao": "Apresentação genérica."},
        "tratamento_objecoes": {"nota": 3, "observacao": "Insistiu após a recusa."},
    },
    "timing_classificacao": "Prematura",
    "timing_justificativa": "A oferta veio antes do desbloqueio.",
    "probabilidade_aceitacao": 20,
    "justificativa_probabilidade": "Cliente demonstrou irritação com a oferta.",
    "dores_nao_exploradas": [
        {
            "dor_identificada": "Viaja com frequência",
            "produto_sugerido": "Cartão com milhas",
            "momento_ideal": "Após confirmar o desbloqueio",
        }
    ],
    "feedbacks": [
        {
            "area": "Timing",
            "observacao": "Ofertou antes de resolver.",
            "impacto": "Cliente ficou irritado.",
            "sugestao": "Resolva a demanda antes de ofertar.",
        }
    ],
    "resumo_geral": "Demanda resolvida, venda prematura.",
}


def fenced(payload: Dict[str, Any], prose: str = "Segue a avaliação:") -> str:
    return f"{prose}\n```json\n{json.dumps(payload, ensure_ascii=False)}\n```\nEspero ter ajudado!"


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    clear_sessions()
    try:
        yield db_path
    finally:
        clear_sessions()
        td.cleanup()
