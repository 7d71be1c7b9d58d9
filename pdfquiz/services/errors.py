"""Error taxonomy shared by services and routes.

Routes translate any ``QuizError`` into ``{"ok": False, "code", "message"}``
with the error's HTTP status.
"""


class QuizError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "QUIZ_ERROR"
    status = 500

    def __init__(self, message: str, code: str | None = None, status: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status is not None:
            self.status = status


class ValidationError(QuizError):
    """Malformed or insufficient input. Not retried."""

    code = "INVALID_PAYLOAD"
    status = 400


class SessionError(ValidationError):
    """Transition not allowed in the session's current state."""

    code = "INVALID_TRANSITION"


class CollaboratorError(QuizError):
    """An external backend (PDF reader, database, text generation) failed."""

    code = "COLLABORATOR_ERROR"
    status = 500


class ExtractionError(CollaboratorError):
    code = "EXTRACTION_FAILED"


class StorageError(CollaboratorError):
    code = "STORAGE_ERROR"


class GenerationError(CollaboratorError):
    """A single generated question could not be produced or parsed."""

    code = "GENERATION_FAILED"


__all__ = [
    "QuizError",
    "ValidationError",
    "SessionError",
    "CollaboratorError",
    "ExtractionError",
    "StorageError",
    "GenerationError",
]
