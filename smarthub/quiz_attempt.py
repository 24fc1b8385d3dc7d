"""Timed quiz attempt: events, a pure reducer and the orchestrator driving it.

Client-observed lifecycle::

    NOT_STARTED -> IN_PROGRESS -> SUBMITTING -> COMPLETED
                        ^              |
                        +-- failure ---+

The reducer never talks to the network. The orchestrator sends the
submission whenever a transition enters SUBMITTING, so a timeout and a
manual submit share one path and only one request can be in flight.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Mapping, Union

from smarthub import quiz as quiz_service
from smarthub.api_client import GENERIC_ERROR, ApiClient, ApiError
from smarthub.config import get_settings
from smarthub.models import AnswerResult, AnswerSubmission, Question, QuestionType, Quiz, QuizAttempt

logger = logging.getLogger(__name__)

MULTI_SEPARATOR = ";"

AnswerValue = Union[str, frozenset]


class Phase(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTING = "SUBMITTING"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class AttemptState:
    phase: Phase = Phase.NOT_STARTED
    quiz: Quiz | None = None
    attempt_id: int | None = None
    answers: Mapping[int, AnswerValue] = field(default_factory=dict)
    remaining: int = 0
    timed_out: bool = False
    error: str | None = None
    result: QuizAttempt | None = None

    @property
    def can_submit(self) -> bool:
        return self.phase == Phase.IN_PROGRESS

    @property
    def answered_count(self) -> int:
        return sum(1 for v in self.answers.values() if _is_answered(v))


# --- events ----------------------------------------------------------------


@dataclass(frozen=True)
class Started:
    quiz: Quiz
    attempt_id: int
    answers: Mapping[int, AnswerValue]
    time_limit: int


@dataclass(frozen=True)
class AnswerRecorded:
    question_id: int
    value: str
    question_type: QuestionType


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class Tick:
    seconds: int = 1


@dataclass(frozen=True)
class SubmitSucceeded:
    attempt: QuizAttempt


@dataclass(frozen=True)
class SubmitFailed:
    message: str


@dataclass(frozen=True)
class ErrorDismissed:
    pass


Event = Union[Started, AnswerRecorded, SubmitRequested, Tick, SubmitSucceeded, SubmitFailed, ErrorDismissed]


# --- answers ---------------------------------------------------------------


def _is_answered(value) -> bool:
    if value is None:
        return False
    if isinstance(value, frozenset):
        return len(value) > 0
    return value != ""


def apply_answer(answers: Mapping[int, AnswerValue], question_id: int, value: str, question_type: QuestionType) -> dict:
    """Multiple-choice toggles ``value``; every other type replaces the answer."""
    updated = dict(answers)
    if question_type == QuestionType.MULTIPLE_CHOICE:
        current = updated.get(question_id)
        selected = current if isinstance(current, frozenset) else frozenset()
        if value in selected:
            selected = selected - {value}
        else:
            selected = selected | {value}
        updated[question_id] = selected
    else:
        updated[question_id] = value
    return updated


def initial_answers(quiz: Quiz, saved: list[AnswerResult]) -> dict:
    """Rebuild the local answer map from answers saved on the attempt."""
    answers = {}
    for saved_answer in saved:
        question = quiz.question(saved_answer.question_id)
        if question is None:
            logger.warning("Saved answer for unknown question %s on quiz %s", saved_answer.question_id, quiz.id)
            continue
        text = saved_answer.answer_text or ""
        if question.type == QuestionType.MULTIPLE_CHOICE:
            answers[question.id] = frozenset(p for p in text.split(MULTI_SEPARATOR) if p)
        elif text:
            answers[question.id] = text
    return answers


def _join_selection(question: Question, selected: frozenset) -> str:
    # option order first, then anything the quiz no longer lists
    ordered = [o for o in question.options if o in selected]
    ordered += sorted(v for v in selected if v not in question.options)
    if any(MULTI_SEPARATOR in v for v in ordered):
        logger.warning(
            "Question %s has an option containing %r; the submitted answer cannot be split unambiguously",
            question.id,
            MULTI_SEPARATOR,
        )
    return MULTI_SEPARATOR.join(ordered)


def serialize_answers(quiz: Quiz, answers: Mapping[int, AnswerValue]) -> list[AnswerSubmission]:
    """One entry per answered question, in quiz question order."""
    payload = []
    for question in quiz.questions:
        value = answers.get(question.id)
        if not _is_answered(value):
            continue
        if isinstance(value, frozenset):
            text = _join_selection(question, value)
        else:
            text = str(value)
        payload.append(AnswerSubmission(question_id=question.id, answer_text=text))
    return payload


# --- reducer ---------------------------------------------------------------


def reduce(state: AttemptState, event: Event) -> AttemptState:
    if isinstance(event, Started):
        return AttemptState(
            phase=Phase.IN_PROGRESS,
            quiz=event.quiz,
            attempt_id=event.attempt_id,
            answers=dict(event.answers),
            remaining=max(0, event.time_limit),
        )

    if isinstance(event, AnswerRecorded):
        if state.phase != Phase.IN_PROGRESS:
            return state
        answers = apply_answer(state.answers, event.question_id, event.value, event.question_type)
        return replace(state, answers=answers)

    if isinstance(event, SubmitRequested):
        if state.phase != Phase.IN_PROGRESS:
            return state
        return replace(state, phase=Phase.SUBMITTING, error=None)

    if isinstance(event, Tick):
        if state.phase not in (Phase.IN_PROGRESS, Phase.SUBMITTING) or state.remaining <= 0:
            return state
        remaining = max(0, state.remaining - max(0, event.seconds))
        if remaining > 0:
            return replace(state, remaining=remaining)
        if state.phase == Phase.SUBMITTING:
            # a submission is already in flight
            return replace(state, remaining=0, timed_out=True)
        return replace(state, remaining=0, timed_out=True, phase=Phase.SUBMITTING, error=None)

    if isinstance(event, SubmitSucceeded):
        if state.phase != Phase.SUBMITTING:
            return state
        return replace(state, phase=Phase.COMPLETED, result=event.attempt, error=None)

    if isinstance(event, SubmitFailed):
        if state.phase != Phase.SUBMITTING:
            return state
        return replace(state, phase=Phase.IN_PROGRESS, error=event.message)

    if isinstance(event, ErrorDismissed):
        return replace(state, error=None)

    raise TypeError(f"Unknown attempt event: {event!r}")


# --- orchestrator ----------------------------------------------------------


class QuizAttemptOrchestrator:
    """Drives one quiz-taking session from load to submission."""

    def __init__(
        self,
        client: ApiClient,
        time_limit_seconds: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        if time_limit_seconds is None:
            time_limit_seconds = get_settings().quiz_time_limit_minutes * 60
        self.time_limit_seconds = time_limit_seconds
        self.clock = clock
        self.state = AttemptState()
        self.closed = False
        self._last_tick: float | None = None

    def dispatch(self, event: Event) -> AttemptState:
        if self.closed:
            logger.debug("Ignoring %s on a closed attempt", type(event).__name__)
            return self.state
        previous = self.state.phase
        self.state = reduce(self.state, event)
        if self.state.phase != previous:
            logger.info("Attempt %s: %s -> %s", self.state.attempt_id, previous.value, self.state.phase.value)
            if self.state.phase == Phase.SUBMITTING:
                self._send()
        return self.state

    def begin(self, quiz_id: int, user_id: int) -> AttemptState:
        quiz = quiz_service.get_quiz(self.client, quiz_id)
        attempt = quiz_service.resume_or_start_attempt(self.client, user_id, quiz_id)
        self._last_tick = self.clock()
        return self.dispatch(
            Started(
                quiz=quiz,
                attempt_id=attempt.id,
                answers=initial_answers(quiz, attempt.answers),
                time_limit=self.time_limit_seconds,
            )
        )

    def record_answer(self, question_id: int, value: str, question_type: QuestionType) -> AttemptState:
        return self.dispatch(AnswerRecorded(question_id, value, question_type))

    def submit(self) -> AttemptState:
        return self.dispatch(SubmitRequested())

    def tick(self, seconds: int = 1) -> AttemptState:
        return self.dispatch(Tick(seconds))

    def sync_clock(self) -> AttemptState:
        """Turn wall time elapsed since the last tick into whole-second ticks."""
        if self._last_tick is None or self.state.phase not in (Phase.IN_PROGRESS, Phase.SUBMITTING):
            return self.state
        elapsed = int(self.clock() - self._last_tick)
        if elapsed < 1:
            return self.state
        self._last_tick += elapsed
        return self.tick(elapsed)

    def dismiss_error(self) -> AttemptState:
        return self.dispatch(ErrorDismissed())

    def close(self):
        self.closed = True
        self._last_tick = None

    def _send(self):
        state = self.state
        try:
            payload = serialize_answers(state.quiz, state.answers)
            logger.info(
                "Submitting attempt %s (%d answers%s)",
                state.attempt_id,
                len(payload),
                ", timed out" if state.timed_out else "",
            )
            result = quiz_service.submit_attempt(self.client, state.quiz.id, state.attempt_id, payload)
        except ApiError as exc:
            logger.warning("Submission of attempt %s failed: %s", state.attempt_id, exc.message)
            self.dispatch(SubmitFailed(exc.message))
        except Exception:
            logger.exception("Submission of attempt %s failed unexpectedly", state.attempt_id)
            self.dispatch(SubmitFailed(GENERIC_ERROR))
        else:
            self.dispatch(SubmitSucceeded(result))
