# app.py - application factory for the quiz session API
import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import Config
from services.catalog import QuestionCatalog
from services.errors import ConfigurationError, QuizError
from services.kv_store import KeyValueStore
from services.quiz_service import QuizSessionService

# Import blueprints
from admin_clear_db import admin_bp
from routes.quiz_routes import create_bp, quiz_bp
from routes.result_routes import result_bp


def create_app(test_config: dict | None = None, store: KeyValueStore | None = None,
               catalog: QuestionCatalog | None = None, rng=None):
    # Load environment variables from .env when running via python app.py
    load_dotenv()
    app = Flask(__name__, instance_path=Config.INSTANCE_PATH)
    app.config.from_object(Config)

    # Allow overriding config for testing
    if test_config:
        app.config.update(test_config)

    # Basic logging configuration with LOG_LEVEL override
    log_level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, log_level_name, logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s %(message)s')

    # Store and catalog are built here and handed to the service; callers own close()
    if store is None:
        store = KeyValueStore(app.config['QUIZ_STORE_URL'])
    store.connect()
    try:
        if catalog is None:
            catalog = QuestionCatalog.load(app.config['QUESTIONS_FILE'])

        app.extensions['quiz'] = QuizSessionService(
            store,
            catalog,
            questions_per_session=int(app.config['QUESTIONS_PER_SESSION']),
            session_ttl=app.config['SESSION_TTL_SECONDS'],
            score_ttl=app.config.get('SCORE_TTL_SECONDS'),
            enforce_answer_count=bool(app.config['QUIZ_ENFORCE_ANSWER_COUNT']),
            rng=rng,
        )
    except ConfigurationError:
        # Refusing to start; don't leave the engine open behind us
        store.close()
        raise

    # Register blueprints
    app.register_blueprint(create_bp, url_prefix=app.config.get('URL_PREFIX') or None)
    app.register_blueprint(quiz_bp)
    app.register_blueprint(result_bp)
    app.register_blueprint(admin_bp)

    # Error handlers
    @app.errorhandler(QuizError)
    def quiz_error(e):
        if e.status_code >= 500:
            app.logger.error("%s on %s %s: %s", e.__class__.__name__, request.method, request.path, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def internal_error(e):
        app.logger.exception("Unhandled server error")
        return jsonify({"message": "internal server error"}), 500

    # Health check endpoint for uptime monitoring
    @app.route('/healthz', methods=['GET'])
    def healthz():
        status = {"status": "ok", "store": app.extensions['quiz'].store.ping()}
        # By default, return 200 with store=false to avoid flapping
        # Set HEALTHZ_STRICT=1 to return 503 when the store is unreachable
        strict = app.config.get('HEALTHZ_STRICT', False)
        code = 200 if (status["store"] or not strict) else 503
        return status, code

    # Basic security headers
    @app.after_request
    def set_security_headers(resp):
        resp.headers.setdefault('X-Frame-Options', 'DENY')
        resp.headers.setdefault('X-Content-Type-Options', 'nosniff')
        resp.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
        resp.headers.setdefault('Cache-Control', 'no-store')
        return resp

    app.logger.info(
        "startup log_level=%s store_scheme=%s questions=%d require_auth=%s enforce_answer_count=%s",
        log_level_name,
        store.url.split(':')[0],
        len(catalog),
        app.config['QUIZ_REQUIRE_AUTH'],
        app.config['QUIZ_ENFORCE_ANSWER_COUNT'],
    )

    return app

"""Application factory only module.

Gunicorn / production: use `gunicorn wsgi:app` (see wsgi.py).
Tests: import create_app and instantiate explicitly; no server starts on import.
"""
