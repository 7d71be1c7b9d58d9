"""Configuration schema dataclasses."""

from dataclasses import dataclass
from typing import Optional

from .base import DEFAULT_SECRET_KEY, QUESTION_EXTRACTOR_MODES


@dataclass
class RuntimeConfig:
    """Runtime configuration - environment-driven settings."""

    # Database
    db_uri: str

    # File handling
    max_content_length: int = 20 * 1024 * 1024

    # AI/Gemini
    gemini_api_key: Optional[str] = None
    gemini_model_name: str = "gemini-1.5-flash"
    gemini_max_output_tokens: int = 1024

    # Quiz generation
    augmentation_enabled: bool = True
    augmentation_source_count: int = 3
    quiz_size: int = 10
    min_questions: int = 10
    question_time_limit: int = 30
    question_extractor_mode: str = "regex"

    # CORS
    cors_allowed_origins: str = "http://localhost:3000"

    log_level: str = "INFO"

    def __post_init__(self):
        """Validate after initialization."""
        if self.max_content_length <= 0:
            raise ValueError("MAX_CONTENT_LENGTH must be > 0")
        if self.augmentation_source_count < 0:
            raise ValueError("AUGMENTATION_SOURCE_COUNT must be >= 0")
        if self.quiz_size <= 0:
            raise ValueError("QUIZ_SIZE must be > 0")
        if self.min_questions < self.quiz_size:
            raise ValueError("MIN_QUESTIONS must be >= QUIZ_SIZE")
        if self.question_time_limit <= 0:
            raise ValueError("QUESTION_TIME_LIMIT must be > 0")
        if self.question_extractor_mode not in QUESTION_EXTRACTOR_MODES:
            raise ValueError(
                "QUESTION_EXTRACTOR_MODE must be one of "
                f"{', '.join(QUESTION_EXTRACTOR_MODES)} (got {self.question_extractor_mode!r})"
            )
        self.log_level = self.log_level.upper()

    @property
    def augmentation_available(self) -> bool:
        return self.augmentation_enabled and bool(self.gemini_api_key)


@dataclass
class AppConfig:
    """Application configuration."""

    runtime: RuntimeConfig

    # Flask-specific settings
    secret_key: str = DEFAULT_SECRET_KEY
    testing: bool = False


__all__ = ["RuntimeConfig", "AppConfig"]
