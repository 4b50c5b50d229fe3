"""Validation of parsed model output into the evaluation schema."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import ValidationError

from .models import EVALUATION_ADAPTER, EvaluationResult, Rubric

logger = logging.getLogger(__name__)

PRINCIPLE_KEYS: Tuple[str, ...] = (
    "acolhimento",
    "empatia",
    "resolutividade",
    "argumentacao",
    "contra_argumentacao",
)
CRITERION_KEYS: Tuple[str, ...] = (
    "resolucao_demanda",
    "timing_abordagem",
    "identificacao_necessidades",
    "tecnica_apresentacao",
    "tratamento_objecoes",
)

_REQUIRED: Dict[str, Tuple[Tuple[str, ...], str, Tuple[str, ...]]] = {
    "principles": (
        (
            "principios",
            "abordagem_venda",
            "probabilidade_aceitacao",
            "justificativa_probabilidade",
            "feedbacks",
            "resumo_geral",
        ),
        "principios",
        PRINCIPLE_KEYS,
    ),
    "sales_criteria": (
        (
            "criterios",
            "timing_classificacao",
            "timing_justificativa",
            "probabilidade_aceitacao",
            "justificativa_probabilidade",
            "feedbacks",
            "resumo_geral",
        ),
        "criterios",
        CRITERION_KEYS,
    ),
}


class SchemaMismatch(ValueError):
    """Parsed output is missing required keys or carries unusable values."""

    def __init__(self, message: str, *, missing: List[str] | None = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


def missing_keys(parsed: Mapping[str, Any], rubric: Rubric) -> List[str]:
    """List required keys absent from ``parsed``; nested keys use dotted paths."""

    if rubric not in _REQUIRED:
        raise ValueError(f"Unknown rubric '{rubric}'")
    top_level, group_key, dimension_keys = _REQUIRED[rubric]
    missing = [key for key in top_level if key not in parsed]
    group = parsed.get(group_key)
    if isinstance(group, Mapping):
        missing.extend(f"{group_key}.{key}" for key in dimension_keys if key not in group)
    return missing


def map_evaluation(parsed: Mapping[str, Any], rubric: Rubric) -> EvaluationResult:
    """Validate and coerce a parsed object into an evaluation result.

    Scores are taken from the model as given apart from numeric coercion and
    clamping to their ranges. Unknown keys are ignored.

    Raises:
        SchemaMismatch: Required keys are absent or a value cannot be coerced.
    """

    if not isinstance(parsed, Mapping):
        raise SchemaMismatch("Evaluation payload must be a JSON object")
    missing = missing_keys(parsed, rubric)
    if missing:
        logger.warning("Evaluation payload missing keys rubric=%s missing=%s", rubric, missing)
        raise SchemaMismatch(f"Evaluation payload missing keys: {', '.join(missing)}", missing=missing)
    payload = dict(parsed)
    payload["rubric"] = rubric
    try:
        return EVALUATION_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        logger.warning("Evaluation payload failed validation rubric=%s: %s", rubric, exc)
        raise SchemaMismatch(f"Evaluation payload failed validation: {exc.error_count()} error(s)") from exc


def fallback_evaluation(rubric: Rubric, reason: str) -> Dict[str, Any]:
    """Minimal renderable evaluation in wire shape for a failed pipeline."""

    neutral = {"nota": 0, "observacao": "Não avaliado"}
    _, group_key, dimension_keys = _REQUIRED[rubric]
    body: Dict[str, Any] = {
        group_key: {key: dict(neutral) for key in dimension_keys},
        "probabilidade_aceitacao": 0,
        "justificativa_probabilidade": "Não foi possível estimar a probabilidade.",
        "feedbacks": [],
        "resumo_geral": "Ocorreu um erro ao processar a avaliação.",
        "erro": reason,
    }
    if rubric == "principles":
        body["abordagem_venda"] = {"classificacao": "Não se aplica", "justificativa": "Avaliação indisponível."}
    else:
        body["timing_classificacao"] = "Ausente"
        body["timing_justificativa"] = "Avaliação indisponível."
        body["dores_nao_exploradas"] = []
    return body


__all__ = ["CRITERION_KEYS", "PRINCIPLE_KEYS", "SchemaMismatch", "fallback_evaluation", "map_evaluation", "missing_keys"]
