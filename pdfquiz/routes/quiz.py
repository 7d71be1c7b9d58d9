"""Quiz Blueprint - PDF upload, saved questions"""
from flask import Blueprint, current_app, jsonify, request

from pdfquiz.routes import error_response, ok, quiz_error_response
from pdfquiz.services.errors import QuizError
from pdfquiz.services.pdf_text import extract_pdf_text
from pdfquiz.services.question_generator import GeminiQuestionGenerator
from pdfquiz.services.question_store import (
    sample_questions,
    save_question,
    validate_question_payload,
)
from pdfquiz.services.quiz_builder import build_quiz

quiz_bp = Blueprint('quiz', __name__)

PDF_MIMETYPE = 'application/pdf'


def _runtime():
    return current_app.config['QUIZ_RUNTIME']


def _build_generator(runtime):
    """Gemini generator for this request, or None (augmentation is optional)."""
    try:
        return GeminiQuestionGenerator.from_config(runtime)
    except RuntimeError as exc:
        current_app.logger.warning('Augmentation disabled: %s', exc)
        return None


@quiz_bp.route('/health')
def health():
    return jsonify({'status': 'ok'})


@quiz_bp.route('/upload', methods=['POST'])
def upload_pdf():
    """PDF 업로드 → 문제 추출 → 10문항 퀴즈"""
    file = request.files.get('pdf')
    if file is None or not file.filename:
        return error_response('No PDF file uploaded.', 'NO_FILE')

    if file.mimetype != PDF_MIMETYPE:
        return error_response('Uploaded file is not a PDF.', 'INVALID_FILE_TYPE')

    runtime = _runtime()
    try:
        text = extract_pdf_text(file.stream)
        questions = build_quiz(
            text,
            _build_generator(runtime),
            mode=runtime.question_extractor_mode,
            size=runtime.quiz_size,
            minimum=runtime.min_questions,
            source_count=runtime.augmentation_source_count,
        )
    except QuizError as exc:
        if exc.status >= 500:
            current_app.logger.error('Error parsing PDF: %s', exc.message)
        return quiz_error_response(exc)
    except Exception:
        current_app.logger.exception('Error parsing PDF')
        return error_response('Error parsing PDF', 'EXTRACTION_FAILED', 500)

    return jsonify({'questions': [q.to_dict() for q in questions]})


@quiz_bp.route('/save', methods=['POST'])
def save():
    data = request.get_json(silent=True)
    try:
        question, options, answer = validate_question_payload(data)
        row = save_question(question, options, answer)
    except QuizError as exc:
        return quiz_error_response(exc)
    return ok(row.to_dict(), 201)


@quiz_bp.route('/questions')
def list_questions():
    try:
        questions = sample_questions(_runtime().quiz_size)
    except QuizError as exc:
        return quiz_error_response(exc)
    return jsonify(questions)
