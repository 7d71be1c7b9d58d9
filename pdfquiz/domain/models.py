"""Domain models for application core concepts.

Lightweight dataclasses representing Question and AnswerRecord.
No dependencies on Flask, DB, or AI libraries.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Any


@dataclass(frozen=True)
class Question:
    """A multiple-choice question with option text as the correct answer."""

    text: str
    options: Tuple[str, ...] = field(default_factory=tuple)
    correct_answer: str = ""

    def __post_init__(self):
        # Accept any sequence but always hold an immutable tuple.
        object.__setattr__(self, "options", tuple(self.options))

    @property
    def is_complete(self) -> bool:
        """Four options and an answer that is one of them."""
        return len(self.options) == 4 and self.correct_answer in self.options

    def with_options(self, options) -> "Question":
        """Return a copy presenting ``options`` in a different order."""
        return Question(
            text=self.text, options=tuple(options), correct_answer=self.correct_answer
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the flat wire/storage record."""
        return {
            "question": self.text,
            "options": list(self.options),
            "answer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        return cls(
            text=data["question"],
            options=tuple(data["options"]),
            correct_answer=data["answer"],
        )


@dataclass(frozen=True)
class AnswerRecord:
    """One line of the answer log shown when a quiz is completed."""

    index: int
    question: str
    selected: Optional[str]
    correct_answer: str
    is_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "index": self.index,
            "question": self.question,
            "selected": self.selected,
            "correctAnswer": self.correct_answer,
            "isCorrect": self.is_correct,
        }
