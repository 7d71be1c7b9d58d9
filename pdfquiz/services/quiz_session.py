"""Timed quiz session state machine.

A session is an immutable value. Every transition takes a session and returns a
new one, so the same functions back the JSON session API (where the browser tab
holds the state) and the terminal runner (where ``SessionClock`` holds it).

Timer expiry (``tick``) and the explicit "Next" action both go through
``advance`` so a question is scored exactly once whatever triggered it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping

from pdfquiz.domain import AnswerRecord, Question
from pdfquiz.services.errors import SessionError, ValidationError

QUIZ_LENGTH = 10
QUESTION_TIME_LIMIT = 30


class Phase(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class QuizSession:
    """State of one quiz attempt. ``selected_answers`` is never mutated in place."""

    questions: tuple[Question, ...] = ()
    current_index: int = 0
    selected_answers: Mapping[int, str] = field(default_factory=dict)
    score: int = 0
    time_remaining: int = QUESTION_TIME_LIMIT
    time_limit: int = QUESTION_TIME_LIMIT
    phase: Phase = Phase.IN_PROGRESS

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_loaded(self) -> bool:
        return bool(self.questions)

    @property
    def is_completed(self) -> bool:
        return self.phase is Phase.COMPLETED

    @property
    def current_question(self) -> Question | None:
        if not self.questions or self.is_completed:
            return None
        return self.questions[self.current_index]

    def selected_for(self, index: int | None = None) -> str | None:
        if index is None:
            index = self.current_index
        return self.selected_answers.get(index)


def start_session(
    questions,
    time_limit: int = QUESTION_TIME_LIMIT,
    expected_length: int | None = QUIZ_LENGTH,
) -> QuizSession:
    """Create the initial IN_PROGRESS session for a freshly extracted quiz."""
    questions = tuple(questions)
    if not questions:
        raise ValidationError("A quiz needs at least one question.", code="NO_QUESTIONS")
    if expected_length is not None and len(questions) != expected_length:
        raise ValidationError(
            f"A quiz must have exactly {expected_length} questions (got {len(questions)}).",
            code="INVALID_QUIZ_LENGTH",
        )
    if time_limit <= 0:
        raise ValidationError("Time limit must be positive.")
    return QuizSession(
        questions=questions,
        time_remaining=time_limit,
        time_limit=time_limit,
    )


def _require_active(session: QuizSession) -> None:
    if not session.is_loaded:
        raise SessionError(
            "No questions loaded. Start a new quiz first.", code="NO_QUESTIONS"
        )
    if session.is_completed:
        raise SessionError(
            "The quiz is already completed.", code="SESSION_COMPLETED", status=409
        )


def select_option(session: QuizSession, option: str) -> QuizSession:
    """Record ``option`` for the current question, replacing any earlier choice."""
    _require_active(session)
    question = session.questions[session.current_index]
    if option not in question.options:
        raise ValidationError("Selected option is not one of the question's options.")
    selected = dict(session.selected_answers)
    selected[session.current_index] = option
    return replace(session, selected_answers=selected)


def advance(session: QuizSession) -> QuizSession:
    """Score the current question, then move on or complete the quiz."""
    _require_active(session)
    question = session.questions[session.current_index]
    score = session.score
    if session.selected_answers.get(session.current_index) == question.correct_answer:
        score += 1

    if session.current_index + 1 < session.total_questions:
        return replace(
            session,
            current_index=session.current_index + 1,
            score=score,
            time_remaining=session.time_limit,
        )
    return replace(session, score=score, phase=Phase.COMPLETED)


def tick(session: QuizSession) -> QuizSession:
    """One second of the countdown. Reaching zero forces ``advance``."""
    _require_active(session)
    if session.time_remaining - 1 <= 0:
        return replace(advance(session), time_remaining=session.time_limit)
    return replace(session, time_remaining=session.time_remaining - 1)


def restart(session: QuizSession | None = None) -> QuizSession:
    """Back to the initial state with no questions loaded."""
    time_limit = session.time_limit if session is not None else QUESTION_TIME_LIMIT
    return QuizSession(time_remaining=time_limit, time_limit=time_limit)


def answer_log(session: QuizSession) -> list[AnswerRecord]:
    records = []
    for index, question in enumerate(session.questions):
        selected = session.selected_answers.get(index)
        records.append(
            AnswerRecord(
                index=index,
                question=question.text,
                selected=selected,
                correct_answer=question.correct_answer,
                is_correct=selected == question.correct_answer,
            )
        )
    return records


# ============================================================
# JSON form
# ============================================================

def session_to_dict(session: QuizSession) -> dict[str, Any]:
    return {
        "questions": [q.to_dict() for q in session.questions],
        "currentIndex": session.current_index,
        "selectedAnswers": {str(k): v for k, v in session.selected_answers.items()},
        "score": session.score,
        "timeRemaining": session.time_remaining,
        "timeLimit": session.time_limit,
        "phase": session.phase.value,
    }


def _as_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Invalid {name}.")
    return value


def questions_from_payload(raw) -> tuple[Question, ...]:
    if not isinstance(raw, list):
        raise ValidationError("Invalid questions.")
    questions = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Invalid question item.")
        text = item.get("question")
        options = item.get("options")
        answer = item.get("answer")
        if not isinstance(text, str) or not isinstance(answer, str):
            raise ValidationError("Invalid question item.")
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise ValidationError("Invalid question options.")
        questions.append(Question.from_dict(item))
    return tuple(questions)


def session_from_dict(data) -> QuizSession:
    """Rebuild a session posted back by a client.

    Raises:
        ValidationError: the payload is not a well-formed session
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid session payload.")

    questions = questions_from_payload(data.get("questions", []))
    current_index = _as_int(data.get("currentIndex", 0), "currentIndex")
    score = _as_int(data.get("score", 0), "score")
    time_limit = _as_int(data.get("timeLimit", QUESTION_TIME_LIMIT), "timeLimit")
    time_remaining = _as_int(data.get("timeRemaining", time_limit), "timeRemaining")

    try:
        phase = Phase(data.get("phase", Phase.IN_PROGRESS.value))
    except ValueError:
        raise ValidationError("Invalid phase.") from None

    raw_selected = data.get("selectedAnswers") or {}
    if not isinstance(raw_selected, dict):
        raise ValidationError("Invalid selectedAnswers.")
    selected = {}
    for key, value in raw_selected.items():
        if not str(key).isdigit() or not isinstance(value, str):
            raise ValidationError("Invalid selectedAnswers.")
        selected[int(key)] = value

    if questions and not 0 <= current_index < len(questions):
        raise ValidationError("currentIndex out of range.")
    if not 0 <= score <= len(questions):
        raise ValidationError("score out of range.")
    if time_limit <= 0 or not 0 <= time_remaining <= time_limit:
        raise ValidationError("Invalid timer values.")
    if any(index >= len(questions) for index in selected):
        raise ValidationError("selectedAnswers out of range.")

    return QuizSession(
        questions=questions,
        current_index=current_index,
        selected_answers=selected,
        score=score,
        time_remaining=time_remaining,
        time_limit=time_limit,
        phase=phase,
    )


__all__ = [
    "QUIZ_LENGTH",
    "QUESTION_TIME_LIMIT",
    "Phase",
    "QuizSession",
    "start_session",
    "select_option",
    "advance",
    "tick",
    "restart",
    "answer_log",
    "session_to_dict",
    "session_from_dict",
    "questions_from_payload",
]
