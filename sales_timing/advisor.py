"""Live hint telling the attendant whether now is a good moment to offer a product."""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from call_evaluation import SchemaMismatch, clamp_score
from config.settings import settings
from dialogue import Message, ScenarioContext, format_transcript
from llm_gateway import CompletionClient, extract_json_object

logger = logging.getLogger(__name__)


class TimingAdvice(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    should_suggest: bool = False
    timing_score: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    suggestion: Optional[str] = None
    reasoning: str = ""

    @field_validator("timing_score", mode="before")
    @classmethod
    def _bound_score(cls, value: Any) -> Any:
        return clamp_score(value, 100.0)

    @field_validator("reasoning", mode="before")
    @classmethod
    def _empty_reasoning(cls, value: Any) -> Any:
        return "" if value is None else value


def build_timing_prompt(recent: Sequence[Message], context: ScenarioContext) -> str:
    return "\n\n".join(
        [
            "Você é um assistente que ajuda atendentes a identificar o melhor momento para abordar vendas.",
            f"CENÁRIO: {context.scenario}\nPERFIL DO CLIENTE: {context.customer_profile}",
            f"ÚLTIMAS MENSAGENS DA CONVERSA:\n{format_transcript(recent)}",
            "\n".join(
                [
                    "Analise se este é um BOM MOMENTO para o atendente fazer uma oferta/venda baseado em:",
                    "1. O cliente demonstrou alguma necessidade ou interesse?",
                    "2. Há um bom rapport estabelecido?",
                    "3. O atendente já entendeu a situação do cliente?",
                    "4. O timing parece adequado?",
                ]
            ),
            "IMPORTANTE: Só sugira se realmente for um momento oportuno. Não force vendas.",
            "\n".join(
                [
                    "Responda APENAS com um JSON no formato:",
                    "{",
                    '  "should_suggest": true ou false,',
                    '  "timing_score": 0-100 (quão bom é o momento),',
                    '  "suggestion": "texto da sugestão para o atendente (ou null se should_suggest = false)",',
                    '  "reasoning": "breve explicação do porquê sugerir ou não"',
                    "}",
                ]
            ),
        ]
    )


def suggest_timing(
    transcript: Sequence[Message],
    context: ScenarioContext,
    *,
    client: CompletionClient,
) -> TimingAdvice:
    """Ask the model whether the attendant should make an offer now.

    Short conversations are answered locally with ``should_suggest=False``.

    Raises:
        LlmGatewayError: Completion or extraction failure.
        SchemaMismatch: The reply does not fit :class:`TimingAdvice`.
    """

    if len(transcript) < settings.TIMING_MIN_MESSAGES:
        return TimingAdvice(should_suggest=False)
    recent = list(transcript)[-settings.TIMING_WINDOW :]
    raw = client.ask(build_timing_prompt(recent, context))
    parsed = extract_json_object(raw)
    try:
        advice = TimingAdvice.model_validate(parsed)
    except ValidationError as exc:
        logger.warning("Timing advice failed validation: %s", exc)
        raise SchemaMismatch("Timing advice failed validation") from exc
    if not advice.should_suggest and advice.suggestion is not None:
        advice = advice.model_copy(update={"suggestion": None})
    return advice


__all__ = ["TimingAdvice", "build_timing_prompt", "suggest_timing"]
