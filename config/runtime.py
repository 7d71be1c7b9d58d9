"""Runtime configuration - environment-driven settings.

Reads environment variables and applies defaults for production runtime.
"""

import os
from pathlib import Path

from .base import (
    DEFAULT_DB_URI,
    TESTING_DB_URI,
    DEFAULT_MAX_CONTENT_LENGTH,
    DEFAULT_GEMINI_MODEL_NAME,
    DEFAULT_GEMINI_MAX_OUTPUT_TOKENS,
    DEFAULT_AUGMENTATION_ENABLED,
    DEFAULT_AUGMENTATION_SOURCE_COUNT,
    DEFAULT_QUIZ_SIZE,
    DEFAULT_MIN_QUESTIONS,
    DEFAULT_QUESTION_TIME_LIMIT,
    DEFAULT_QUESTION_EXTRACTOR_MODE,
    DEFAULT_CORS_ALLOWED_ORIGINS,
    DEFAULT_LOG_LEVEL,
)
from .schema import RuntimeConfig


def _env_flag(name, default=False):
    """Read a boolean environment variable."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    """Read an integer environment variable."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_runtime_config(flask_config_name="default") -> RuntimeConfig:
    """
    Build runtime configuration from environment variables.

    Args:
        flask_config_name: Flask config profile name
                          (default/development/testing/production).
                          The testing profile always uses in-memory SQLite
                          and never calls Gemini.

    Returns:
        RuntimeConfig instance
    """
    if flask_config_name == "testing":
        db_uri = TESTING_DB_URI
        gemini_api_key = None
    else:
        db_env = os.environ.get("DB_PATH")  # Optional explicit override
        db_uri = os.environ.get("DATABASE_URL") or (
            _sqlite_uri(Path(db_env)) if db_env else DEFAULT_DB_URI
        )
        gemini_api_key = os.environ.get("GEMINI_API_KEY")

    return RuntimeConfig(
        db_uri=db_uri,
        max_content_length=_env_int(
            "MAX_CONTENT_LENGTH", default=DEFAULT_MAX_CONTENT_LENGTH
        ),
        gemini_api_key=gemini_api_key,
        gemini_model_name=os.environ.get(
            "GEMINI_MODEL_NAME", DEFAULT_GEMINI_MODEL_NAME
        ),
        gemini_max_output_tokens=_env_int(
            "GEMINI_MAX_OUTPUT_TOKENS", default=DEFAULT_GEMINI_MAX_OUTPUT_TOKENS
        ),
        augmentation_enabled=_env_flag(
            "AUGMENTATION_ENABLED", default=DEFAULT_AUGMENTATION_ENABLED
        ),
        augmentation_source_count=_env_int(
            "AUGMENTATION_SOURCE_COUNT", default=DEFAULT_AUGMENTATION_SOURCE_COUNT
        ),
        quiz_size=_env_int("QUIZ_SIZE", default=DEFAULT_QUIZ_SIZE),
        min_questions=_env_int("MIN_QUESTIONS", default=DEFAULT_MIN_QUESTIONS),
        question_time_limit=_env_int(
            "QUESTION_TIME_LIMIT", default=DEFAULT_QUESTION_TIME_LIMIT
        ),
        question_extractor_mode=os.environ.get(
            "QUESTION_EXTRACTOR_MODE", DEFAULT_QUESTION_EXTRACTOR_MODE
        ).strip().lower(),
        cors_allowed_origins=os.environ.get(
            "CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ALLOWED_ORIGINS
        ),
        log_level=os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )


def _sqlite_uri(path: Path) -> str:
    """Convert a Path to SQLite URI."""
    return f"sqlite:///{path.resolve().as_posix()}"


__all__ = ["get_runtime_config", "_env_flag", "_env_int"]
