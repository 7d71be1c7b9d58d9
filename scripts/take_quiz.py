"""
Take a timed quiz in the terminal from a PDF.

Usage:
  python scripts/take_quiz.py exam.pdf [--augment] [--time-limit 30]

Commands while a question is shown:
  1-4   select an option
  n     next question
  r     restart (reloads a new random quiz from the same PDF)
  q     quit
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from dotenv import load_dotenv  # noqa: E402

load_dotenv(ROOT_DIR / ".env")

from config import get_config  # noqa: E402
from pdfquiz.services.errors import QuizError  # noqa: E402
from pdfquiz.services.pdf_text import extract_pdf_text  # noqa: E402
from pdfquiz.services.question_generator import GeminiQuestionGenerator  # noqa: E402
from pdfquiz.services.quiz_builder import build_quiz  # noqa: E402
from pdfquiz.services.quiz_session import answer_log  # noqa: E402
from pdfquiz.services.quiz_timer import SessionClock  # noqa: E402


def _print_question(session) -> None:
    question = session.current_question
    if question is None:
        return
    print()
    print(f"Question {session.current_index + 1}/{session.total_questions}")
    print(question.text)
    for number, option in enumerate(question.options, start=1):
        marker = "*" if session.selected_for() == option else " "
        print(f" {marker}{number}) {option}")
    print(f"Time remaining: {session.time_remaining} seconds")


def _print_results(session) -> None:
    print()
    print("Quiz Completed!")
    print(f"You scored {session.score} out of {session.total_questions}.")
    for record in answer_log(session):
        print(f"Question {record.index + 1}: {record.question}")
        print(f"  Your Answer: {record.selected or 'No answer selected'}")
        print(f"  Correct Answer: {record.correct_answer}")


def _on_change(session, reason: str) -> None:
    if reason in ("load", "advance", "timeout"):
        if session.is_completed:
            _print_results(session)
            print("Press r to restart or q to quit.")
        else:
            if reason == "timeout":
                print("\nTime is up!")
            _print_question(session)
    elif reason == "tick" and session.time_remaining in (10, 5):
        print(f"[{session.time_remaining} seconds left]")


def _load_quiz(text: str, generator, runtime):
    return build_quiz(
        text,
        generator,
        mode=runtime.question_extractor_mode,
        size=runtime.quiz_size,
        minimum=runtime.min_questions,
        source_count=runtime.augmentation_source_count,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Take a timed quiz from a PDF.")
    parser.add_argument("pdf", help="PDF with numbered questions, a)-d) options and 'Correct Answer:' lines.")
    parser.add_argument("--augment", action="store_true", help="Add similar questions generated by Gemini.")
    parser.add_argument("--time-limit", type=int, default=None, help="Seconds per question.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    runtime = get_config().runtime
    generator = GeminiQuestionGenerator.from_config(runtime) if args.augment else None

    try:
        text = extract_pdf_text(args.pdf)
        questions = _load_quiz(text, generator, runtime)
    except QuizError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    clock = SessionClock(
        time_limit=args.time_limit or runtime.question_time_limit,
        on_change=_on_change,
        expected_length=runtime.quiz_size,
    )
    clock.load(questions)

    try:
        for raw in sys.stdin:
            command = raw.strip().lower()
            if command == "q":
                break
            try:
                if command == "r":
                    clock.restart()
                    clock.load(_load_quiz(text, generator, runtime))
                elif command == "n":
                    clock.next()
                elif command.isdigit():
                    session = clock.session
                    question = session.current_question
                    index = int(command) - 1
                    if question is None or not 0 <= index < len(question.options):
                        print("Invalid option.")
                        continue
                    clock.select(question.options[index])
                    print(f"Selected: {question.options[index]}")
                elif command:
                    print("Commands: 1-4, n, r, q")
            except QuizError as exc:
                print(exc.message)
    finally:
        clock.stop()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
