import pytest

from pdfquiz.services.errors import ValidationError
from pdfquiz.services.extractor import (
    extract_complete_questions,
    extract_questions,
    parse_questions,
    resolve_answer,
    split_lines,
)
from pdfquiz.services.extractor_factory import extract, get_extractor


def test_split_lines_trims_and_drops_blanks():
    assert split_lines("  a \r\n\n b\r  \n") == ["a", "b"]
    assert split_lines("") == []


@pytest.mark.parametrize("style", ["label", "bare", "text"])
def test_extracts_every_block_in_order(document, style):
    questions = extract_questions(document(12, answer_style=style))

    assert len(questions) == 12
    for i, q in enumerate(questions, start=1):
        assert q.text == f"Question number {i}?"
        assert q.options == (f"A{i}", f"B{i}", f"C{i}", f"D{i}")
        assert q.correct_answer == f"B{i}"
        assert q.is_complete


def test_fewer_than_ten_questions_is_a_validation_error(document):
    with pytest.raises(ValidationError) as excinfo:
        extract_questions(document(9))
    assert excinfo.value.code == "TOO_FEW_QUESTIONS"
    assert excinfo.value.status == 400


def test_options_before_first_header_are_dropped():
    text = "a) orphan\nCorrect Answer: a\n1. First?\na) x\nb) y\nc) z\nd) w\nCorrect Answer: d) w"
    [question] = parse_questions(text)
    assert question.options == ("x", "y", "z", "w")
    assert question.correct_answer == "w"


def test_labels_are_case_insensitive_and_other_lines_ignored():
    text = "\n".join([
        "1. Pick one",
        "Some commentary line",
        "A) first",
        "B) second",
        "c) third",
        "D) fourth",
        "correct answer: C)",
        "Page 1 of 3",
    ])
    [question] = parse_questions(text)
    assert question.options == ("first", "second", "third", "fourth")
    assert question.correct_answer == "third"


def test_new_header_pushes_the_previous_question():
    text = "1. One\na) x\n2. Two\na) y"
    first, second = parse_questions(text)
    assert first.options == ("x",)
    assert second.text == "Two"
    assert second.correct_answer == ""


def test_resolve_answer_keeps_unknown_text():
    options = ["x", "y"]
    assert resolve_answer("x", options) == "x"
    assert resolve_answer("d)", options) == "d)"
    assert resolve_answer("something else", options) == "something else"
    assert resolve_answer("b) y", options) == "y"


def test_strict_mode_drops_incomplete_questions(document):
    text = document(10) + "\n11. Broken\na) only one option\nCorrect Answer: a"
    assert len(extract_questions(text)) == 11
    assert len(extract_complete_questions(text)) == 10


def test_factory_selects_extractor(document):
    assert get_extractor("regex") is extract_questions
    assert get_extractor("strict") is extract_complete_questions
    assert len(extract(document(10), mode="strict")) == 10
    with pytest.raises(ValueError):
        get_extractor("ocr")
