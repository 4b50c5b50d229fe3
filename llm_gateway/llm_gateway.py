from __future__ import annotations  # Chat-completion gateway module

import logging
import os
from typing import Any, Dict, Optional, Protocol, Sequence

import httpx

from config import LlmRoute


logger = logging.getLogger(__name__)  # Module logger setup


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: Any) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


class ConfigError(LlmGatewayError):  # Missing credential or unusable route
    pass


class RateLimited(LlmGatewayError):  # Endpoint reported throttling (HTTP 429)
    pass


class QuotaExceeded(LlmGatewayError):  # Endpoint reported exhausted credits (HTTP 402)
    pass


class TransportFailure(LlmGatewayError):  # Network failure or unusable endpoint reply
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CompletionClient:  # Single-attempt client bound to one configured route
    def __init__(self, route: LlmRoute, *, http_client: Optional[HttpClient] = None) -> None:
        self.route = route
        self._http_client = http_client

    def complete(self, system_prompt: str, transcript: Sequence[Any]) -> str:  # System prompt plus role-tagged transcript
        messages: list[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.extend(_normalize_messages(transcript))
        return chat(messages, cfg=self.route, client=self._http_client)

    def ask(self, prompt: str) -> str:  # Single user-role prompt
        return chat([{"role": "user", "content": prompt}], cfg=self.route, client=self._http_client)


def chat(
    messages: Sequence[Dict[str, str]],
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
) -> str:
    """Send one chat-completion request and return the reply text.

    A single attempt is made; callers decide whether to retry.

    Raises:
        ConfigError: No credential is configured for the route.
        RateLimited: The endpoint answered 429.
        QuotaExceeded: The endpoint answered 402.
        TransportFailure: Any other transport or payload failure.
    """

    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {_api_key(cfg)}"}
    headers.update(cfg.extra_headers)
    payload: Dict[str, Any] = {"model": cfg.model, "messages": list(messages)}
    preview = _preview(messages)
    if len(preview) > 120:
        preview = preview[:117] + "..."
    logger.info(
        "LLM request send route=%s model=%s messages=%d preview=%s",
        cfg.name,
        cfg.model,
        len(messages),
        preview,
    )
    try:
        response = _post(cfg, payload, headers, client)
    except Exception as exc:  # noqa: BLE001
        logger.error("LLM transport failure: %s", exc)
        raise TransportFailure("LLM transport failed") from exc
    status = response.status_code
    if status == 429:
        logger.warning("LLM rate limited route=%s", cfg.name)
        raise RateLimited("Rate limit exceeded, try again in a few moments")
    if status == 402:
        logger.warning("LLM credits exhausted route=%s", cfg.name)
        raise QuotaExceeded("Insufficient credits for the AI gateway")
    if status >= 400:
        logger.error("LLM error status: %s body=%s", status, _safe_text(response))
        raise TransportFailure(f"LLM returned status {status}", status_code=status)
    try:
        data = response.json()
    except Exception as exc:  # noqa: BLE001
        logger.error("Invalid JSON payload from LLM: %s", exc)
        raise TransportFailure("LLM payload was not JSON", status_code=status) from exc
    content = _extract_content(data)
    logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
    return content


def _api_key(cfg: LlmRoute) -> str:  # Resolve the route credential
    if cfg.api_key:
        return cfg.api_key
    if cfg.api_key_env:
        value = os.getenv(cfg.api_key_env)
        if value:
            return value
        raise ConfigError(f"{cfg.api_key_env} is not configured")
    raise ConfigError(f"Route '{cfg.name}' has no credential configured")


def _post(
    cfg: LlmRoute,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    client: Optional[HttpClient],
) -> HttpResponse:  # Dispatch HTTP request
    timeout: Any = cfg.timeout_s if cfg.timeout_s is not None else httpx.USE_CLIENT_DEFAULT
    if client is not None:
        return client.post(cfg.url, json=payload, headers=headers, timeout=timeout)
    with httpx.Client() as http_client:
        return http_client.post(cfg.url, json=payload, headers=headers, timeout=timeout)


def _normalize_messages(messages: Sequence[Any]) -> list[Dict[str, str]]:  # Ensure message payload shape
    normalized: list[Dict[str, str]] = []
    for item in messages:
        if hasattr(item, "model_dump"):
            item = item.model_dump()
        if not isinstance(item, dict):
            raise TypeError("Each chat message must be a dict with role/content")
        role = str(item.get("role", "")).strip()
        content = str(item.get("content", ""))
        if not role:
            raise ValueError("Chat message missing role")
        normalized.append({"role": role, "content": content})
    return normalized


def _preview(messages: Sequence[Dict[str, str]]) -> str:  # Build preview string for logging
    for message in reversed(messages):
        text = message.get("content", "").strip()
        if text:
            return text.splitlines()[0]
    return ""


def _safe_text(response: HttpResponse) -> str:
    try:
        return response.text[:200]
    except Exception:  # noqa: BLE001
        return ""


def _extract_content(data: Any) -> str:  # Extract message content from completion payload
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
    logger.error("LLM response missing content")
    raise TransportFailure("LLM response missing content")
