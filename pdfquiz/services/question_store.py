"""Question persistence: insert-one and random-sample-N."""
import random

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from pdfquiz import db
from pdfquiz.models import StoredQuestion
from pdfquiz.services.errors import StorageError, ValidationError

SAMPLE_SIZE = 10


def validate_question_payload(data):
    """Check a ``{question, options, answer}`` payload and return its cleaned fields."""
    if not isinstance(data, dict):
        raise ValidationError('Invalid request payload.')

    question = data.get('question')
    options = data.get('options')
    answer = data.get('answer')
    if not question or not options or not answer:
        raise ValidationError(
            'Question, options, and answer are required.', code='MISSING_FIELDS'
        )

    if not isinstance(question, str) or not isinstance(answer, str):
        raise ValidationError('Question and answer must be strings.')
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise ValidationError('Options must be a list of strings.')

    options = [o.strip() for o in options]
    answer = answer.strip()
    if answer not in options:
        raise ValidationError('Answer must match one of the options.')

    return question.strip(), options, answer


def save_question(question, options, answer):
    """Insert one question and return the stored row."""
    row = StoredQuestion(question=question, options=list(options), answer=answer)
    try:
        db.session.add(row)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception('Error saving question')
        raise StorageError('Error saving question') from exc
    return row


def sample_questions(size=SAMPLE_SIZE, rng=None):
    """Return up to ``size`` random stored questions with options shuffled."""
    rng = rng or random
    try:
        rows = StoredQuestion.query.order_by(func.random()).limit(size).all()
    except SQLAlchemyError as exc:
        current_app.logger.exception('Error fetching questions')
        raise StorageError('Error fetching questions') from exc

    payload = []
    for row in rows:
        item = row.to_dict()
        rng.shuffle(item['options'])
        payload.append(item)
    return payload
