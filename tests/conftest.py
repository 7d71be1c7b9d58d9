from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pdfquiz import create_app, db  # noqa: E402
from pdfquiz.domain import Question  # noqa: E402


def build_document(count: int, answer_style: str = "label") -> str:
    """Text in the "N. / a)-d) / Correct Answer:" layout with ``count`` questions.

    Question ``i`` has options ``A{i}``..``D{i}`` and the correct answer ``B{i}``.
    """
    lines = ["Practice Exam", ""]
    for i in range(1, count + 1):
        lines.append(f"{i}. Question number {i}?")
        for label in "abcd":
            lines.append(f"{label}) {label.upper()}{i}")
        if answer_style == "label":
            lines.append(f"Correct Answer: b) B{i}")
        elif answer_style == "bare":
            lines.append("Correct Answer: b")
        else:
            lines.append(f"Correct Answer: B{i}")
        lines.append("")
    return "\n".join(lines)


def build_questions(count: int = 10) -> list[Question]:
    return [
        Question(
            text=f"Question number {i}?",
            options=(f"A{i}", f"B{i}", f"C{i}", f"D{i}"),
            correct_answer=f"B{i}",
        )
        for i in range(1, count + 1)
    ]


GENERATED_TEXT = """**Question:** Which planet is known as the Red Planet?
a) Venus
b) Mars
c) Jupiter
d) Saturn
**Correct answer: b)**
"""


class FakeGenerator:
    """Stands in for GeminiQuestionGenerator; replies are keyed by source text."""

    def __init__(self, replies=None, default=GENERATED_TEXT):
        self.replies = replies or {}
        self.default = default
        self.calls = []

    def generate_similar(self, question_text):
        from pdfquiz.services.question_generator import parse_generated_question

        self.calls.append(question_text)
        reply = self.replies.get(question_text, self.default)
        if isinstance(reply, Exception):
            raise reply
        return parse_generated_question(reply)


@pytest.fixture
def document():
    return build_document


@pytest.fixture
def questions():
    return build_questions(10)


@pytest.fixture
def fake_generator():
    return FakeGenerator


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
