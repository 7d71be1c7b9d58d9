"""Flask application factory"""

import logging
from pathlib import Path

from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.engine import make_url

from config import set_config_name, get_config

# SQLAlchemy 인스턴스 (다른 모듈에서 import 가능)
db = SQLAlchemy()


def ensure_sqlite_dir(db_uri: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(db_uri)
    if url.get_backend_name() != "sqlite":
        return
    database = url.database
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_app(
    config_name="default",
    db_uri_override: str | None = None,
    create_schema: bool | None = None,
):
    """
    Flask application factory

    Args:
        config_name: config profile ('development', 'testing', 'production', 'default')
        db_uri_override: SQLAlchemy URI that wins over the configured one
        create_schema: run ``db.create_all()`` at startup (defaults to True
                       outside production)

    Returns:
        Flask app instance
    """
    app = Flask(__name__)

    set_config_name(config_name)
    cfg = get_config()
    runtime = cfg.runtime

    app.config["ENV_NAME"] = config_name
    app.config["TESTING"] = cfg.testing
    app.config["SECRET_KEY"] = cfg.secret_key
    app.config["SQLALCHEMY_DATABASE_URI"] = db_uri_override or runtime.db_uri
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["MAX_CONTENT_LENGTH"] = runtime.max_content_length
    app.config["QUIZ_RUNTIME"] = runtime

    app.logger.setLevel(getattr(logging, runtime.log_level, logging.INFO))

    # data 디렉토리 생성 (SQLite DB용)
    ensure_sqlite_dir(app.config["SQLALCHEMY_DATABASE_URI"])
    db.init_app(app)

    if create_schema is None:
        create_schema = config_name != "production"
    if create_schema:
        from pdfquiz import models  # noqa: F401  register tables

        with app.app_context():
            db.create_all()

    # Blueprint 등록
    from pdfquiz.routes.quiz import quiz_bp
    from pdfquiz.routes.api_session import api_session_bp

    app.register_blueprint(quiz_bp)
    app.register_blueprint(api_session_bp, url_prefix="/api/session")

    @app.after_request
    def add_cors_headers(response):
        origins = [o.strip() for o in runtime.cors_allowed_origins.split(",") if o.strip()]
        origin = request.headers.get("Origin")
        if origin and ("*" in origins or origin in origins):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
            response.headers["Vary"] = "Origin"
        return response

    return app
