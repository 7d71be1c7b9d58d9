"""Quiz assembly: extract, augment, merge, select."""

import logging
import random
from typing import List, Optional, Sequence

from pdfquiz.domain import Question
from pdfquiz.services.errors import ValidationError
from pdfquiz.services.extractor_factory import extract
from pdfquiz.services.question_generator import generate_similar_questions

logger = logging.getLogger(__name__)

QUIZ_SIZE = 10
AUGMENTATION_SOURCE_COUNT = 3


def shuffle_options(question: Question, rng: Optional[random.Random] = None) -> Question:
    """Return a copy with options in random order. The answer text is untouched."""
    rng = rng or random
    options = list(question.options)
    rng.shuffle(options)
    return question.with_options(options)


def select_quiz_questions(
    pool: Sequence[Question],
    size: int = QUIZ_SIZE,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """Pick ``size`` questions uniformly at random and shuffle each one's options."""
    rng = rng or random
    if len(pool) < size:
        raise ValidationError(
            f"At least {size} questions are required to build a quiz (have {len(pool)}).",
            code="TOO_FEW_QUESTIONS",
        )
    return [shuffle_options(q, rng) for q in rng.sample(list(pool), size)]


def build_quiz(
    text: str,
    generator=None,
    *,
    mode: str = "regex",
    size: int = QUIZ_SIZE,
    minimum: Optional[int] = None,
    source_count: int = AUGMENTATION_SOURCE_COUNT,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """
    Build one quiz from raw document text.

    Args:
        text: Raw document text
        generator: Object with ``generate_similar(question_text)``; None skips augmentation
        mode: Extractor mode (see ``extractor_factory``)
        size: Number of questions delivered
        minimum: Minimum extracted questions (defaults to ``size``)
        source_count: How many extracted questions seed augmentation
        rng: Random source, for reproducible selection

    Raises:
        ValidationError: fewer than ``minimum`` questions were extracted
    """
    minimum = size if minimum is None else minimum
    questions = extract(text, mode=mode, minimum=minimum)

    generated = []
    if generator is not None and source_count > 0:
        generated = generate_similar_questions(questions[:source_count], generator)

    pool = questions + generated
    selected = select_quiz_questions(pool, size=size, rng=rng)
    logger.info(
        "Selected %d of %d questions (%d generated)", len(selected), len(pool), len(generated)
    )
    return selected


__all__ = ["QUIZ_SIZE", "shuffle_options", "select_quiz_questions", "build_quiz"]
