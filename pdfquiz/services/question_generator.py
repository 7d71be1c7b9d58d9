"""Similar-question generation service.

Asks Google Gemini for a new multiple-choice question in the scope of an
extracted one, then scrapes the free-text reply with the same line rules the
extractor uses. Every generated item is best effort: a failure drops that item
and never the batch.
"""
import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence

from google import genai
from google.genai import types

from pdfquiz.domain import Question
from pdfquiz.services.errors import GenerationError
from pdfquiz.services.extractor import (
    ANSWER_LINE,
    match_option_line,
    split_lines,
    strip_question_number,
)

logger = logging.getLogger(__name__)

CORRECT_MARKER = re.compile(r"\*\*Correct answer:\s*([a-d])\)", re.IGNORECASE)
QUESTION_PREFIX = re.compile(r"^(?:\*\*)?(?:question\s*\d*\s*:\s*)?(?:\*\*)?", re.IGNORECASE)

DEFAULT_MAX_WORKERS = 3


def build_similar_question_prompt(question_text: str) -> str:
    """Build the generation prompt. Deterministic for a given question text."""
    return f"""Generate one new multiple-choice question with four options and indicate the correct one.
The question should be similar in scope to this one: "{question_text.strip()}".

Write the question on the first line.
Provide exactly 4 options on their own lines, labeled a), b), c), d).
On the last line, explicitly indicate the correct option as "**Correct answer: <label>)**", for example "**Correct answer: b)**".
Do not add explanations.
"""


def _clean_question_line(line: str) -> str:
    text = strip_question_number(line)
    text = QUESTION_PREFIX.sub("", text, count=1)
    return text.strip().strip("*").strip()


def parse_generated_question(text: str) -> Question:
    """Parse model output into a Question.

    Raises:
        GenerationError: empty output, not exactly 4 options, missing or
            dangling correct-answer marker, or no question line
    """
    if not text or not text.strip():
        raise GenerationError("No valid response text received from Gemini.")

    question_text = None
    options = {}
    ordered = []
    for line in split_lines(text):
        opt = match_option_line(line)
        if opt:
            label, option_text = opt
            option_text = option_text.strip("*").strip()
            options.setdefault(label, option_text)
            ordered.append(option_text)
            continue
        if CORRECT_MARKER.search(line) or ANSWER_LINE.match(line):
            continue
        if question_text is None:
            cleaned = _clean_question_line(line)
            if cleaned:
                question_text = cleaned

    if len(ordered) != 4:
        raise GenerationError(
            f"Response does not contain exactly 4 options (found {len(ordered)})."
        )

    marker = CORRECT_MARKER.search(text)
    if not marker:
        raise GenerationError("Correct answer not found in generated text.")

    label = marker.group(1).lower()
    if label not in options:
        raise GenerationError(f"Correct answer option {label}) not found among options.")

    if not question_text:
        raise GenerationError("Question line not found in generated text.")

    return Question(
        text=question_text,
        options=tuple(ordered),
        correct_answer=options[label],
    )


class GeminiQuestionGenerator:
    """Generates similar questions through the google-genai SDK."""

    def __init__(self, api_key: str, model_name: str = "gemini-1.5-flash",
                 max_output_tokens: int = 1024, client=None):
        if client is None:
            if not api_key:
                raise RuntimeError("GEMINI_API_KEY is not set. Check the .env file.")
            client = genai.Client(api_key=api_key)
        self.client = client
        self.model_name = model_name
        self.max_output_tokens = max_output_tokens

    @classmethod
    def from_config(cls, runtime) -> Optional["GeminiQuestionGenerator"]:
        """Build a generator from RuntimeConfig, or None when augmentation is off."""
        if not runtime.augmentation_available:
            return None
        return cls(
            api_key=runtime.gemini_api_key,
            model_name=runtime.gemini_model_name,
            max_output_tokens=runtime.gemini_max_output_tokens,
        )

    def generate_text(self, prompt: str) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=0.7,
                    max_output_tokens=self.max_output_tokens,
                ),
            )
        except Exception as exc:
            raise GenerationError(f"Gemini API request failed: {exc}") from exc
        return (response.text or "").strip()

    def generate_similar(self, question_text: str) -> Question:
        """One outbound call, no retry."""
        prompt = build_similar_question_prompt(question_text)
        text = self.generate_text(prompt)
        logger.debug("Gemini generated text: %s", text)
        return parse_generated_question(text)


def generate_similar_questions(
    sources: Sequence[Question],
    generator,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[Question]:
    """Generate one similar question per source, concurrently.

    All calls are awaited; successes are returned in source order and each
    failure is logged and dropped.
    """
    if not sources or generator is None:
        return []

    results: List[Optional[Question]] = [None] * len(sources)
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(sources)))) as executor:
        futures = {
            executor.submit(generator.generate_similar, source.text): index
            for index, source in enumerate(sources)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except GenerationError as exc:
                logger.warning(
                    "Dropped generated question for source %d: %s", index + 1, exc
                )
            except Exception:
                logger.exception(
                    "Unexpected error generating question for source %d", index + 1
                )

    generated = [q for q in results if q is not None]
    logger.info("Generated %d/%d similar questions", len(generated), len(sources))
    return generated


__all__ = [
    "CORRECT_MARKER",
    "build_similar_question_prompt",
    "parse_generated_question",
    "GeminiQuestionGenerator",
    "generate_similar_questions",
]
