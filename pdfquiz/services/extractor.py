#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Regex line classifier that turns raw document text into Question records.

Expected layout, one item per line:

    1. What is the capital of France?
    a) Berlin
    b) Paris
    c) Rome
    d) Madrid
    Correct Answer: b) Paris

Documents that do not follow this convention under-extract; there is no
semantic understanding of the text.
"""

import logging
import re
from typing import Iterable, List, Optional

from pdfquiz.services.errors import ValidationError
from pdfquiz.domain import Question

logger = logging.getLogger(__name__)

MIN_QUESTIONS = 10

Q_HEADER = re.compile(r"^\d+\.\s")
Q_NUMBER_PREFIX = re.compile(r"^\d+\.\s+")
OPTION_LINE = re.compile(r"^([a-d])\)\s*(.*)$", re.IGNORECASE)
ANSWER_LINE = re.compile(r"^Correct Answer:\s*(.*)$", re.IGNORECASE)
BARE_LABEL = re.compile(r"^([a-d])\)?$", re.IGNORECASE)

OPTION_LABELS = "abcd"


def split_lines(text: str) -> List[str]:
    """Split text into trimmed, non-empty lines."""
    if not text:
        return []
    lines = []
    for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        line = raw.strip()
        if line:
            lines.append(line)
    return lines


def match_option_line(line: str) -> Optional[tuple]:
    """Return ``(label, text)`` for an ``a)``-``d)`` option line."""
    m = OPTION_LINE.match(line)
    if not m:
        return None
    return m.group(1).lower(), m.group(2).strip()


def strip_question_number(line: str) -> str:
    return Q_NUMBER_PREFIX.sub("", line, count=1).strip()


def resolve_answer(raw_answer: str, options: List[str]) -> str:
    """Map an answer given as a label (``b``, ``b)``, ``b) Paris``) to option text.

    Answers that are already option text, or that name a label with no
    matching option, are returned stripped and otherwise unchanged.
    """
    answer = (raw_answer or "").strip()
    if not answer or answer in options:
        return answer

    label = None
    m = BARE_LABEL.match(answer)
    if m:
        label = m.group(1).lower()
    else:
        opt = match_option_line(answer)
        if opt:
            label, text = opt
            if text in options:
                return text
    if label is not None:
        index = OPTION_LABELS.index(label)
        if index < len(options):
            return options[index]
    return answer


def _build_question(cur: dict) -> Question:
    options = cur["options"]
    return Question(
        text=cur["text"],
        options=tuple(options),
        correct_answer=resolve_answer(cur["answer"], options),
    )


def parse_questions(text: str) -> List[Question]:
    """Classify every line of ``text`` and return the questions found, in order.

    No minimum is enforced here; see ``extract_questions``.
    """
    questions: List[Question] = []
    cur = None

    for line in split_lines(text):
        if Q_HEADER.match(line):
            if cur:
                questions.append(_build_question(cur))
            cur = {"text": strip_question_number(line), "options": [], "answer": ""}
            continue

        opt = match_option_line(line)
        if opt:
            # Options before the first header have no target.
            if cur:
                cur["options"].append(opt[1])
            continue

        m_answer = ANSWER_LINE.match(line)
        if m_answer:
            if cur:
                cur["answer"] = m_answer.group(1).strip()
            continue

    if cur:
        questions.append(_build_question(cur))

    return questions


def keep_complete(questions: Iterable[Question]) -> List[Question]:
    return [q for q in questions if q.is_complete]


def require_minimum(questions: List[Question], minimum: int = MIN_QUESTIONS) -> List[Question]:
    if len(questions) < minimum:
        raise ValidationError(
            f"The PDF must contain at least {minimum} questions "
            f"(found {len(questions)}).",
            code="TOO_FEW_QUESTIONS",
        )
    return questions


def extract_questions(text: str, minimum: int = MIN_QUESTIONS) -> List[Question]:
    """Parse ``text`` and fail with ValidationError when fewer than ``minimum`` questions exist."""
    questions = parse_questions(text)
    logger.info("Extracted %d questions", len(questions))
    return require_minimum(questions, minimum)


def extract_complete_questions(text: str, minimum: int = MIN_QUESTIONS) -> List[Question]:
    """Like ``extract_questions`` but drops records that are not playable."""
    questions = parse_questions(text)
    complete = keep_complete(questions)
    if len(complete) != len(questions):
        logger.info(
            "Dropped %d incomplete questions", len(questions) - len(complete)
        )
    return require_minimum(complete, minimum)


__all__ = [
    "MIN_QUESTIONS",
    "Q_HEADER",
    "OPTION_LINE",
    "ANSWER_LINE",
    "split_lines",
    "match_option_line",
    "strip_question_number",
    "resolve_answer",
    "parse_questions",
    "extract_questions",
    "extract_complete_questions",
]
