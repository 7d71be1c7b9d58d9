"""Domain models package."""

from .models import (
    Question,
    AnswerRecord,
)

__all__ = [
    "Question",
    "AnswerRecord",
]
