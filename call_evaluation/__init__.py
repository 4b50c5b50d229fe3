from .evaluation import evaluate_transcript
from .mapping import SchemaMismatch, fallback_evaluation, map_evaluation
from .models import (
    DimensionScore,
    EvaluationResult,
    PrinciplesEvaluation,
    Rubric,
    SalesCriteriaEvaluation,
    clamp_score,
)
from .prompts import build_evaluation_prompt

__all__ = [
    "DimensionScore",
    "EvaluationResult",
    "PrinciplesEvaluation",
    "Rubric",
    "SalesCriteriaEvaluation",
    "SchemaMismatch",
    "build_evaluation_prompt",
    "clamp_score",
    "evaluate_transcript",
    "fallback_evaluation",
    "map_evaluation",
]
