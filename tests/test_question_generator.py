import logging
from types import SimpleNamespace

import pytest

from conftest import GENERATED_TEXT, build_questions
from pdfquiz.services.errors import GenerationError
from pdfquiz.services.question_generator import (
    GeminiQuestionGenerator,
    build_similar_question_prompt,
    generate_similar_questions,
    parse_generated_question,
)


class RecordingModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def make_generator(text=None, error=None):
    models = RecordingModels(text=text, error=error)
    client = SimpleNamespace(models=models)
    return GeminiQuestionGenerator(api_key="", model_name="gemini-test", client=client), models


def test_prompt_is_deterministic_and_names_the_marker():
    prompt = build_similar_question_prompt("  1. What is 2 + 2?  ")
    assert prompt == build_similar_question_prompt("1. What is 2 + 2?")
    assert '"1. What is 2 + 2?"' in prompt
    assert "a), b), c), d)" in prompt
    assert "**Correct answer: b)**" in prompt


def test_parse_strips_labels_and_resolves_marker():
    question = parse_generated_question(GENERATED_TEXT)
    assert question.text == "Which planet is known as the Red Planet?"
    assert question.options == ("Venus", "Mars", "Jupiter", "Saturn")
    assert question.correct_answer == "Mars"


def test_parse_accepts_marker_with_option_text():
    text = "1. Pick a prime\na) 4\nb) 6\nc) 7\nd) 9\n**Correct answer: c) 7**"
    question = parse_generated_question(text)
    assert question.text == "Pick a prime"
    assert question.correct_answer == "7"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Question?\na) 1\nb) 2\nc) 3\n**Correct answer: a)**",
        "Question?\na) 1\nb) 2\nc) 3\nd) 4",
        "Question?\na) 1\nb) 2\nc) 3\nd) 4\nCorrect answer: a)",
        "a) 1\nb) 2\nc) 3\nd) 4\n**Correct answer: a)**",
        "Question?\na) 1\nb) 2\nc) 3\na) 4\n**Correct answer: d)**",
    ],
)
def test_parse_failures_raise_generation_error(text):
    with pytest.raises(GenerationError):
        parse_generated_question(text)


def test_generator_makes_one_call_with_configured_model():
    generator, models = make_generator(text=GENERATED_TEXT)
    question = generator.generate_similar("What is the largest planet?")

    assert question.correct_answer == "Mars"
    assert len(models.calls) == 1
    assert models.calls[0]["model"] == "gemini-test"
    assert "What is the largest planet?" in models.calls[0]["contents"]


def test_generator_wraps_sdk_errors():
    generator, models = make_generator(error=ConnectionError("boom"))
    with pytest.raises(GenerationError):
        generator.generate_similar("anything")
    assert len(models.calls) == 1


def test_from_config_returns_none_without_key():
    runtime = SimpleNamespace(augmentation_available=False)
    assert GeminiQuestionGenerator.from_config(runtime) is None


def test_fan_out_keeps_successes_in_order_and_drops_failures(fake_generator, caplog):
    sources = build_questions(3)
    generator = fake_generator(
        replies={
            sources[0].text: "Q one\na) 1\nb) 2\nc) 3\nd) 4\n**Correct answer: d)**",
            sources[1].text: "missing options",
            sources[2].text: "Q three\na) 1\nb) 2\nc) 3\nd) 4\n**Correct answer: a)**",
        }
    )

    with caplog.at_level(logging.WARNING):
        generated = generate_similar_questions(sources, generator)

    assert [q.text for q in generated] == ["Q one", "Q three"]
    assert [q.correct_answer for q in generated] == ["4", "1"]
    assert sorted(generator.calls) == sorted(q.text for q in sources)
    assert "Dropped generated question for source 2" in caplog.text


def test_fan_out_survives_unexpected_errors(fake_generator):
    sources = build_questions(2)
    generator = fake_generator(replies={sources[0].text: RuntimeError("network down")})
    generated = generate_similar_questions(sources, generator)
    assert len(generated) == 1


def test_fan_out_without_generator_is_empty():
    assert generate_similar_questions(build_questions(3), None) == []
