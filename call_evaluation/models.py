from __future__ import annotations  # Evaluation result schemas (tagged by rubric)

import math
import unicodedata
from typing import Annotated, Any, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

Rubric = Literal["principles", "sales_criteria"]

SALES_APPROACH_CLASSES: Tuple[str, ...] = ("Excelente", "Boa", "Aceitável", "Inadequada", "Não se aplica")
TIMING_CLASSES: Tuple[str, ...] = ("Prematura", "Adequada", "Tardia", "Ausente")


def _fold(text: str) -> str:  # Case and accent insensitive comparison key
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def coerce_number(value: Any) -> Any:  # Accept "8", "7,5" and "75%" from the model
    if isinstance(value, str):
        cleaned = value.strip().rstrip("%").strip().replace(",", ".")
        try:
            return float(cleaned)
        except ValueError:
            return value
    return value


def clamp_score(value: Any, upper: float) -> Any:  # Bound numeric model output to [0, upper]
    value = coerce_number(value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    if not math.isfinite(value):
        raise ValueError("score must be a finite number")
    return max(0.0, min(upper, float(value)))


def _match_choice(value: Any, choices: Sequence[str]) -> Any:
    if not isinstance(value, str):
        return value
    key = _fold(value)
    for choice in choices:
        if _fold(choice) == key:
            return choice
    return value


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class DimensionScore(_Record):  # Score for one principle or criterion
    score: float = Field(alias="nota", ge=0.0, le=10.0)
    note: str = Field(alias="observacao")

    @field_validator("score", mode="before")
    @classmethod
    def _bound_score(cls, value: Any) -> Any:
        return clamp_score(value, 10.0)


class PrincipleScores(_Record):
    welcoming: DimensionScore = Field(alias="acolhimento")
    empathy: DimensionScore = Field(alias="empatia")
    resolution: DimensionScore = Field(alias="resolutividade")
    argumentation: DimensionScore = Field(alias="argumentacao")
    counter_argumentation: DimensionScore = Field(alias="contra_argumentacao")


class SalesApproach(_Record):
    classification: Literal["Excelente", "Boa", "Aceitável", "Inadequada", "Não se aplica"] = Field(
        alias="classificacao"
    )
    justification: str = Field(alias="justificativa")

    @field_validator("classification", mode="before")
    @classmethod
    def _normalize_classification(cls, value: Any) -> Any:
        return _match_choice(value, SALES_APPROACH_CLASSES)


class PrincipleFeedback(_Record):
    principle: str = Field(alias="principio")
    observation: str = Field(alias="observacao")
    suggestion: str = Field(alias="sugestao")
    example_quote: Optional[str] = Field(default=None, alias="trecho_exemplo")


class CriteriaScores(_Record):
    demand_resolution: DimensionScore = Field(alias="resolucao_demanda")
    approach_timing: DimensionScore = Field(alias="timing_abordagem")
    needs_identification: DimensionScore = Field(alias="identificacao_necessidades")
    presentation_technique: DimensionScore = Field(alias="tecnica_apresentacao")
    objection_handling: DimensionScore = Field(alias="tratamento_objecoes")


class UnexploredNeed(_Record):
    pain_point: str = Field(alias="dor_identificada")
    suggested_product: str = Field(alias="produto_sugerido")
    ideal_moment: str = Field(alias="momento_ideal")


class CriterionFeedback(_Record):
    area: str
    observation: str = Field(alias="observacao")
    impact: str = Field(alias="impacto")
    suggestion: str = Field(alias="sugestao")


class _EvaluationBase(_Record):
    acceptance_probability: float = Field(alias="probabilidade_aceitacao", ge=0.0, le=100.0)
    probability_justification: str = Field(alias="justificativa_probabilidade")
    summary: str = Field(alias="resumo_geral")

    @field_validator("acceptance_probability", mode="before")
    @classmethod
    def _bound_probability(cls, value: Any) -> Any:
        return clamp_score(value, 100.0)


class PrinciplesEvaluation(_EvaluationBase):  # Five service principles plus sales-approach rating
    rubric: Literal["principles"] = "principles"
    principles: PrincipleScores = Field(alias="principios")
    sales_approach: SalesApproach = Field(alias="abordagem_venda")
    feedbacks: Tuple[PrincipleFeedback, ...]


class SalesCriteriaEvaluation(_EvaluationBase):  # Five sales criteria plus sales-timing classification
    rubric: Literal["sales_criteria"] = "sales_criteria"
    criteria: CriteriaScores = Field(alias="criterios")
    timing_classification: Literal["Prematura", "Adequada", "Tardia", "Ausente"] = Field(alias="timing_classificacao")
    timing_justification: str = Field(alias="timing_justificativa")
    unexplored_needs: Tuple[UnexploredNeed, ...] = Field(default=(), alias="dores_nao_exploradas")
    feedbacks: Tuple[CriterionFeedback, ...]

    @field_validator("timing_classification", mode="before")
    @classmethod
    def _normalize_timing(cls, value: Any) -> Any:
        return _match_choice(value, TIMING_CLASSES)

    @field_validator("unexplored_needs", mode="before")
    @classmethod
    def _default_needs(cls, value: Any) -> Any:
        return () if value is None else value


EvaluationResult = Annotated[Union[PrinciplesEvaluation, SalesCriteriaEvaluation], Field(discriminator="rubric")]

EVALUATION_ADAPTER: TypeAdapter[Any] = TypeAdapter(EvaluationResult)


__all__ = [
    "CriteriaScores",
    "CriterionFeedback",
    "DimensionScore",
    "EVALUATION_ADAPTER",
    "EvaluationResult",
    "PrincipleFeedback",
    "PrincipleScores",
    "PrinciplesEvaluation",
    "Rubric",
    "SALES_APPROACH_CLASSES",
    "SalesApproach",
    "SalesCriteriaEvaluation",
    "TIMING_CLASSES",
    "UnexploredNeed",
    "clamp_score",
    "coerce_number",
]
