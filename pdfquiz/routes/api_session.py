"""JSON API for the timed quiz session.

The client holds the session and posts it back with every transition; the
server keeps no per-session state.
"""
from flask import Blueprint, current_app, jsonify, request

from pdfquiz.routes import quiz_error_response
from pdfquiz.services import quiz_session
from pdfquiz.services.errors import QuizError, ValidationError

api_session_bp = Blueprint('api_session', __name__)


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Invalid request payload.')
    return data


def _session_response(session, status=200):
    body = {'session': quiz_session.session_to_dict(session)}
    if session.is_completed:
        body['answers'] = [r.to_dict() for r in quiz_session.answer_log(session)]
    return jsonify(body), status


def _transition(apply):
    try:
        data = _payload()
        session = quiz_session.session_from_dict(data.get('session'))
        return _session_response(apply(session, data))
    except QuizError as exc:
        return quiz_error_response(exc)


@api_session_bp.route('/start', methods=['POST'])
def start():
    runtime = current_app.config['QUIZ_RUNTIME']
    try:
        data = _payload()
        questions = quiz_session.questions_from_payload(data.get('questions'))
        session = quiz_session.start_session(
            questions,
            time_limit=runtime.question_time_limit,
            expected_length=runtime.quiz_size,
        )
    except QuizError as exc:
        return quiz_error_response(exc)
    return _session_response(session, 201)


@api_session_bp.route('/select', methods=['POST'])
def select():
    def apply(session, data):
        option = data.get('option')
        if not isinstance(option, str):
            raise ValidationError('option is required.')
        return quiz_session.select_option(session, option)

    return _transition(apply)


@api_session_bp.route('/tick', methods=['POST'])
def tick():
    return _transition(lambda session, data: quiz_session.tick(session))


@api_session_bp.route('/next', methods=['POST'])
def next_question():
    return _transition(lambda session, data: quiz_session.advance(session))


@api_session_bp.route('/restart', methods=['POST'])
def restart():
    data = request.get_json(silent=True) or {}
    try:
        session = None
        if isinstance(data, dict) and data.get('session') is not None:
            session = quiz_session.session_from_dict(data['session'])
    except QuizError as exc:
        return quiz_error_response(exc)
    return _session_response(quiz_session.restart(session))
