"""FastAPI routes for the customer simulator, evaluation and training sessions."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from api.schemas import (
    ChatReq,
    ChatResp,
    EvaluateReq,
    SessionReq,
    SessionResp,
    StartReq,
    TimingReq,
    TurnReq,
)
from call_evaluation import Rubric, SchemaMismatch, evaluate_transcript, fallback_evaluation
from config import CHAT_ROUTE_KEY, EVALUATION_ROUTE_KEY, TIMING_ROUTE_KEY, load_route
from config.settings import settings
from customer_persona import build_chat_prompt
from dialogue import ScenarioContext, build_context
from llm_gateway import (
    CompletionClient,
    ConfigError,
    LlmGatewayError,
    QuotaExceeded,
    RateLimited,
)
from sales_timing import suggest_timing
from services.sessions import drop_session, load_session, register_session
from storage.conversations import SqliteConversationRecorder
from storage.knowledge_base import get_process_content
from training_session import (
    ConversationRecorder,
    SessionStateError,
    TrainingSession,
    TranscriptTooShort,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _client_for(target: str) -> CompletionClient:
    return CompletionClient(load_route(Path(settings.APP_CONFIG_PATH), target))


def get_chat_client() -> CompletionClient:
    return _client_for(CHAT_ROUTE_KEY)


def get_evaluation_client() -> CompletionClient:
    return _client_for(EVALUATION_ROUTE_KEY)


def get_timing_client() -> CompletionClient:
    return _client_for(TIMING_ROUTE_KEY)


def get_recorder() -> Optional[ConversationRecorder]:
    return SqliteConversationRecorder()


def _status_for(exc: Exception) -> int:
    if isinstance(exc, RateLimited):
        return 429
    if isinstance(exc, QuotaExceeded):
        return 402
    if isinstance(exc, ConfigError):
        return 500
    return 502


def _pipeline_error(exc: Exception) -> HTTPException:
    logger.error("Completion pipeline failed: %s", exc)
    return HTTPException(status_code=_status_for(exc), detail=str(exc))


def _evaluation_failure(exc: Exception, rubric: Rubric, **extra: Any) -> JSONResponse:
    logger.error("Evaluation failed rubric=%s: %s", rubric, exc)
    content: Dict[str, Any] = {"error": str(exc), "evaluation": fallback_evaluation(rubric, str(exc))}
    content.update(extra)
    return JSONResponse(status_code=_status_for(exc), content=content)


def _resolve_process(process_id: Optional[str]) -> Optional[str]:
    if not process_id:
        return None
    content = get_process_content(process_id)
    if content is None:
        raise HTTPException(status_code=404, detail="process not found")
    return content


def _session_payload(session: TrainingSession) -> SessionResp:
    evaluation = session.evaluation
    return SessionResp(
        session_id=session.session_id,
        state=session.state.value,
        scenario=session.context.scenario,
        customer_profile=session.context.customer_profile,
        rubric=session.rubric,
        messages=list(session.transcript),
        evaluation=evaluation.model_dump(mode="json", by_alias=True) if evaluation is not None else None,
    )


def _session_or_404(session_id: str) -> TrainingSession:
    try:
        return load_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="session not found") from exc


@router.post("/chat", response_model=ChatResp)
def chat(req: ChatReq, client: CompletionClient = Depends(get_chat_client)) -> ChatResp:
    context = ScenarioContext(
        scenario=req.scenario,
        customer_profile=req.customer_profile,
        reference_process=_resolve_process(req.process_id),
    )
    try:
        message = client.complete(build_chat_prompt(context), req.messages)
    except LlmGatewayError as exc:
        raise _pipeline_error(exc) from exc
    return ChatResp(message=message)


@router.post("/evaluate")
def evaluate(req: EvaluateReq, client: CompletionClient = Depends(get_evaluation_client)):
    required = settings.MIN_EVALUATION_MESSAGES
    if len(req.transcript) < required:
        raise HTTPException(status_code=400, detail=str(TranscriptTooShort(len(req.transcript), required)))
    context = ScenarioContext(scenario=req.scenario, customer_profile=req.customer_profile)
    try:
        result = evaluate_transcript(req.transcript, context, client=client, rubric=req.rubric)
    except (LlmGatewayError, SchemaMismatch) as exc:
        return _evaluation_failure(exc, req.rubric)
    return result.model_dump(mode="json", by_alias=True)


@router.post("/suggest-timing")
def timing(req: TimingReq, client: CompletionClient = Depends(get_timing_client)) -> Dict[str, Any]:
    context = ScenarioContext(scenario=req.scenario, customer_profile=req.customer_profile)
    try:
        advice = suggest_timing(req.messages, context, client=client)
    except (LlmGatewayError, SchemaMismatch) as exc:
        logger.warning("Timing analysis failed: %s", exc)
        return {"should_suggest": False, "suggestion": None, "error": str(exc)}
    return advice.model_dump()


@router.post("/training-sessions/start", response_model=SessionResp)
def start_session(
    req: StartReq,
    client: CompletionClient = Depends(get_chat_client),
    evaluation_client: CompletionClient = Depends(get_evaluation_client),
    recorder: Optional[ConversationRecorder] = Depends(get_recorder),
) -> SessionResp:
    try:
        context = build_context(req.scenario_id, req.profile_id, _resolve_process(req.process_id))
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
    session = TrainingSession(
        context,
        client=client,
        evaluation_client=evaluation_client,
        recorder=recorder,
        rubric=req.rubric,
    )
    try:
        session.start()
    except LlmGatewayError as exc:
        raise _pipeline_error(exc) from exc
    register_session(session)
    return _session_payload(session)


@router.post("/training-sessions/turn", response_model=SessionResp)
def session_turn(req: TurnReq) -> SessionResp:
    session = _session_or_404(req.session_id)
    try:
        session.submit(req.user_msg)
    except SessionStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except LlmGatewayError as exc:
        raise _pipeline_error(exc) from exc
    return _session_payload(session)


@router.post("/training-sessions/finish")
def finish_session(req: SessionReq):
    session = _session_or_404(req.session_id)
    try:
        session.request_evaluation()
    except TranscriptTooShort as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SessionStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except (LlmGatewayError, SchemaMismatch) as exc:
        return _evaluation_failure(exc, session.rubric, session_id=session.session_id, state=session.state.value)
    payload = _session_payload(session)
    drop_session(session.session_id)
    return payload


@router.post("/training-sessions/suggest-timing")
def session_timing(req: SessionReq, client: CompletionClient = Depends(get_timing_client)) -> Dict[str, Any]:
    session = _session_or_404(req.session_id)
    try:
        advice = session.suggest_timing(client)
    except SessionStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except (LlmGatewayError, SchemaMismatch) as exc:
        logger.warning("Timing analysis failed session=%s: %s", session.session_id, exc)
        return {"should_suggest": False, "suggestion": None, "error": str(exc)}
    return advice.model_dump()


@router.get("/training-sessions/{session_id}", response_model=SessionResp)
def get_session(session_id: str) -> SessionResp:
    return _session_payload(_session_or_404(session_id))


__all__ = [
    "get_chat_client",
    "get_evaluation_client",
    "get_recorder",
    "get_timing_client",
    "router",
]
