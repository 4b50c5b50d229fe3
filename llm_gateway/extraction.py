"""Best-effort recovery of a JSON object embedded in model prose."""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict

from .llm_gateway import LlmGatewayError

logger = logging.getLogger(__name__)

_FENCED_OBJECT = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", re.IGNORECASE)


class MalformedResponse(LlmGatewayError):
    """Model output did not contain a parseable JSON object."""

    def __init__(self, message: str, *, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


def extract_json_object(raw_text: str) -> Dict[str, Any]:
    """Locate and parse the JSON object inside ``raw_text``.

    A fenced code block wins when it wraps an object; otherwise the span from
    the first ``{`` to the last ``}`` is used. Anything after the last closing
    brace is dropped before parsing.

    Raises:
        MalformedResponse: No object could be parsed. The offending text is
            kept on ``raw_text``.
    """

    text = raw_text or ""
    candidate = text
    fenced = _FENCED_OBJECT.search(text)
    if fenced:
        candidate = fenced.group(1)
    else:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end < start:
            logger.warning("No JSON object found in model output (%d chars)", len(text))
            raise MalformedResponse("Model output contains no JSON object", raw_text=text)
        candidate = text[start : end + 1]

    last_brace = candidate.rfind("}")
    if last_brace != -1:
        candidate = candidate[: last_brace + 1]

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("Model output JSON failed to parse: %s", exc)
        raise MalformedResponse(f"Model output is not valid JSON: {exc.msg}", raw_text=text) from exc
    if not isinstance(parsed, dict):
        raise MalformedResponse("Model output JSON is not an object", raw_text=text)
    return parsed


__all__ = ["MalformedResponse", "extract_json_object"]
