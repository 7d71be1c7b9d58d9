"""HTTP Blueprints."""

from flask import jsonify


def ok(data=None, status=200):
    return jsonify({'ok': True, 'data': data}), status


def error_response(message, code, status=400, details=None):
    payload = {'ok': False, 'code': code, 'message': message}
    if details is not None:
        payload['details'] = details
    return jsonify(payload), status


def quiz_error_response(exc):
    """Render any QuizError with its own code and status."""
    return error_response(exc.message, exc.code, exc.status)
