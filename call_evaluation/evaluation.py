from __future__ import annotations

import logging
from typing import Sequence

from dialogue import Message, ScenarioContext
from llm_gateway import CompletionClient, extract_json_object

from .mapping import map_evaluation
from .models import EvaluationResult, Rubric
from .prompts import build_evaluation_prompt

logger = logging.getLogger(__name__)


def evaluate_transcript(
    transcript: Sequence[Message],
    context: ScenarioContext,
    *,
    client: CompletionClient,
    rubric: Rubric = "principles",
) -> EvaluationResult:  # Prompt, one completion call, extraction and mapping
    prompt = build_evaluation_prompt(transcript, context, rubric)
    logger.info("Evaluating transcript rubric=%s messages=%d", rubric, len(transcript))
    raw = client.ask(prompt)
    parsed = extract_json_object(raw)
    return map_evaluation(parsed, rubric)

