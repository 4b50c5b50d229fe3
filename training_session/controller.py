from __future__ import annotations  # Turn-taking and evaluation state machine for one training session

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, Sequence, Tuple

from call_evaluation import EvaluationResult, Rubric, evaluate_transcript
from config.settings import settings
from customer_persona import build_chat_prompt
from dialogue import Message, ScenarioContext
from llm_gateway import CompletionClient
from observability import log_event, span
from sales_timing import TimingAdvice, suggest_timing

from .models import SessionBusy, SessionState, SessionStateError, TranscriptTooShort

logger = logging.getLogger(__name__)


class ConversationRecorder(Protocol):  # Write-only storage collaborator
    def open(self, session_id: str, context: ScenarioContext, rubric: str) -> None: ...

    def save_transcript(self, session_id: str, messages: Sequence[Message]) -> None: ...

    def save_evaluation(self, session_id: str, evaluation: EvaluationResult) -> None: ...


class TrainingSession:
    """Drives one trainee conversation from the opening line to its evaluation.

    Idle -> Active on :meth:`start`, Active -> Active on :meth:`submit`,
    Active -> Evaluating -> Concluded on :meth:`request_evaluation`. A failed
    call discards only the in-flight turn and returns to the prior stable
    state. Only one completion call may be outstanding at a time.
    """

    def __init__(
        self,
        context: ScenarioContext,
        *,
        client: CompletionClient,
        evaluation_client: Optional[CompletionClient] = None,
        recorder: Optional[ConversationRecorder] = None,
        rubric: Optional[Rubric] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.context = context
        self.rubric: Rubric = rubric or settings.DEFAULT_RUBRIC
        self.session_id = session_id or str(uuid.uuid4())
        self._client = client
        self._evaluation_client = evaluation_client or client
        self._recorder = recorder
        self._messages: list[Message] = []
        self._state = SessionState.IDLE
        self._evaluation: Optional[EvaluationResult] = None
        self._in_flight = threading.Lock()
        self._recorded = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def transcript(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def evaluation(self) -> Optional[EvaluationResult]:
        return self._evaluation

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def start(self) -> Message:
        """Request the customer's opening line."""

        with self._exclusive("start"):
            self._require(SessionState.IDLE, "start")
            if self._recorder is not None and not self._recorded:
                self._recorder.open(self.session_id, self.context, self.rubric)
                self._recorded = True
            log_event(
                "session_start",
                self.session_id,
                scenario=self.context.scenario,
                profile=self.context.customer_profile,
                rubric=self.rubric,
            )
            opening = self._customer_reply(self._messages)
            self._append(opening)
            self._state = SessionState.ACTIVE
            return opening

    def submit(self, text: str) -> Message:
        """Send the attendant's message and return the customer's reply."""

        with self._exclusive("submit"):
            self._require(SessionState.ACTIVE, "submit")
            if not text or not text.strip():
                raise ValueError("Message text must not be empty")
            user_message = Message(role="user", content=text)
            reply = self._customer_reply([*self._messages, user_message])
            self._append(user_message, reply)
            return reply

    def request_evaluation(self) -> EvaluationResult:
        """Evaluate the conversation and conclude the session.

        Raises:
            TranscriptTooShort: Fewer messages than required; state unchanged.
            LlmGatewayError: Completion or extraction failure; back to Active.
            SchemaMismatch: Unusable evaluation payload; back to Active.
        """

        with self._exclusive("evaluate"):
            self._require(SessionState.ACTIVE, "evaluate")
            required = settings.MIN_EVALUATION_MESSAGES
            if len(self._messages) < required:
                log_event("evaluation_rejected", self.session_id, messages=len(self._messages))
                raise TranscriptTooShort(len(self._messages), required)
            self._state = SessionState.EVALUATING
            try:
                with span(self.session_id, "evaluate", rubric=self.rubric):
                    result = evaluate_transcript(
                        self.transcript,
                        self.context,
                        client=self._evaluation_client,
                        rubric=self.rubric,
                    )
                if self._recorder is not None:
                    self._recorder.save_evaluation(self.session_id, result)
            except Exception as exc:
                self._state = SessionState.ACTIVE
                log_event("evaluation_failed", self.session_id, level=logging.WARNING, error=str(exc))
                raise
            self._evaluation = result
            self._state = SessionState.CONCLUDED
            log_event(
                "session_concluded",
                self.session_id,
                state=self._state.value,
                probability=result.acceptance_probability,
            )
            return result

    def suggest_timing(self, client: Optional[CompletionClient] = None) -> TimingAdvice:
        """Ask whether now is a good moment for an offer; the transcript is untouched."""

        with self._exclusive("suggest_timing"):
            self._require(SessionState.ACTIVE, "suggest timing")
            with span(self.session_id, "suggest_timing"):
                return suggest_timing(self.transcript, self.context, client=client or self._client)

    @contextmanager
    def _exclusive(self, action: str) -> Iterator[None]:
        if not self._in_flight.acquire(blocking=False):
            logger.warning("Rejected %s while a call is outstanding session=%s", action, self.session_id)
            raise SessionBusy(f"Cannot {action}: a previous request is still in progress")
        try:
            yield
        finally:
            self._in_flight.release()

    def _require(self, expected: SessionState, action: str) -> None:
        if self._state is not expected:
            raise SessionStateError(f"Cannot {action} while session is {self._state.value}")

    def _customer_reply(self, messages: Sequence[Message]) -> Message:
        prompt = build_chat_prompt(self.context)
        try:
            with span(self.session_id, "chat", messages=len(messages)):
                content = self._client.complete(prompt, messages)
        except Exception as exc:
            log_event("turn_failed", self.session_id, level=logging.WARNING, error=str(exc))
            raise
        return Message(role="assistant", content=content)

    def _append(self, *messages: Message) -> None:
        # The in-memory transcript only grows once the recorder accepted it
        candidate = [*self._messages, *messages]
        if self._recorder is not None:
            self._recorder.save_transcript(self.session_id, candidate)
        self._messages = candidate
        for message in messages:
            log_event("turn", self.session_id, role=message.role, messages=len(self._messages))


__all__ = ["ConversationRecorder", "TrainingSession"]
