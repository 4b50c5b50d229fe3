from __future__ import annotations  # Re-export llm_gateway public API

from .extraction import MalformedResponse, extract_json_object
from .llm_gateway import (
    CompletionClient,
    ConfigError,
    HttpClient,
    HttpResponse,
    LlmGatewayError,
    QuotaExceeded,
    RateLimited,
    TransportFailure,
    chat,
)

__all__ = [
    "CompletionClient",
    "ConfigError",
    "HttpClient",
    "HttpResponse",
    "LlmGatewayError",
    "MalformedResponse",
    "QuotaExceeded",
    "RateLimited",
    "TransportFailure",
    "chat",
    "extract_json_object",
]
