from flask import Flask, request
from flask_cors import CORS
from config import config
from .extensions import db
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from .logging_config import configure_logging
from .storage import DatabaseStorage, init_storage
import structlog
import os

log = structlog.get_logger()


def create_app(config_name=None):
    """
    Application factory function.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_CONFIG', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    # Prompts are free text, keep non-ASCII characters readable in responses
    app.json.ensure_ascii = False

    configure_logging(
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        is_debug=app.config.get("DEBUG", False),
        storage_backend=app.config.get("STORAGE_BACKEND"),
    )

    # Initialize extensions
    db.init_app(app)
    Migrate(app, db)
    storage = init_storage(app)
    log.info("storage.initialized", backend=storage.name)

    api_prefix = app.config.get("API_PREFIX", "/api/v1")

    with app.app_context():
        from .api.v1 import api_v1, json_http_error
        app.register_blueprint(api_v1, url_prefix=api_prefix)

        if app.config.get("SEED_ON_STARTUP"):
            from .seeds.seed_library import run as seed_library
            try:
                seed_library(app, create_tables_if_missing=isinstance(storage, DatabaseStorage))
            except Exception as e:
                # A broken seed must not keep the API from starting
                log.warning("seed.failed", error=str(e))

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if request.path.startswith(api_prefix):
            return json_http_error(error)
        return error

    # Configure CORS for API endpoints and set secure Referrer-Policy
    CORS(app, resources={r"/api/*": {"origins": "*"}}, supports_credentials=True)

    @app.after_request
    def set_security_headers(response):
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    return app


__all__ = ["create_app", "db"]
