"""Default values shared by the configuration builders."""

from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]

DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"

# Database
DEFAULT_DB_PATH = BASE_DIR / "data" / "quiz.db"
DEFAULT_DB_URI = f"sqlite:///{DEFAULT_DB_PATH.as_posix()}"
TESTING_DB_URI = "sqlite:///:memory:"

# Uploads
DEFAULT_MAX_CONTENT_LENGTH = 20 * 1024 * 1024  # 20MB

# Gemini
DEFAULT_GEMINI_MODEL_NAME = "gemini-1.5-flash"
DEFAULT_GEMINI_MAX_OUTPUT_TOKENS = 1024

# Quiz generation
DEFAULT_AUGMENTATION_ENABLED = True
DEFAULT_AUGMENTATION_SOURCE_COUNT = 3
DEFAULT_QUIZ_SIZE = 10
DEFAULT_MIN_QUESTIONS = 10
DEFAULT_QUESTION_TIME_LIMIT = 30
DEFAULT_QUESTION_EXTRACTOR_MODE = "regex"
QUESTION_EXTRACTOR_MODES = ("regex", "strict")

# CORS
DEFAULT_CORS_ALLOWED_ORIGINS = "http://localhost:3000"

DEFAULT_LOG_LEVEL = "INFO"
