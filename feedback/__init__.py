import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask
from flask.logging import default_handler

from .extensions import db, migrate, csrf
from .config import Config
from .services import ServiceRegistry
from .services.storage_service import LocalStorage
from .services.share_service import ShareService
from .services.file_service import FileService
from .services.comment_service import CommentService
from .services.identity_service import IdentityBinding
from .services.rate_limiter import TokenBucket

# Blueprints
from .blueprints.errors import errors_bp
from .blueprints.main import main_bp
from .blueprints.admin import admin_bp


# Optional: Sentry
def _init_sentry(app):
    dsn = app.config.get("SENTRY_DSN")
    if not dsn:
        return
    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=dsn,
        integrations=[FlaskIntegration(), SqlalchemyIntegration()],
        traces_sample_rate=app.config.get("SENTRY_TRACES_SAMPLE_RATE", 0.0),
        send_default_pii=False,
    )
    app.logger.info("Sentry initialized.")

def _init_logging(app):
    level_name = app.config.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    # Formatter: text or JSON
    if app.config.get("LOG_JSON", False):
        import json_log_formatter
        formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")

    handlers = []
    if app.config.get("LOG_TO_FILE", True):
        log_dir = Path(app.config.get("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        # Rotating file handler (5MB x 5)
        handlers.append(RotatingFileHandler(
            log_dir / app.config.get("LOG_FILENAME", "feedback.log"),
            maxBytes=5_000_000, backupCount=5, encoding="utf-8",
        ))
    # Stream to stdout as well (useful on dev/docker)
    handlers.append(logging.StreamHandler())

    # app.logger is the "feedback" logger; service loggers propagate into it
    logger = app.logger
    logger.removeHandler(default_handler)
    for h in list(logger.handlers):
        if getattr(h, "_feedback_handler", False):
            logger.removeHandler(h)
            h.close()
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        h._feedback_handler = True
        logger.addHandler(h)
    logger.setLevel(level)

    app.logger.info("Logging initialized.")

def _init_services(app):
    storage = LocalStorage(app.config["UPLOAD_FOLDER"])
    shares = ShareService(storage)
    files = FileService(shares, storage)
    identity = IdentityBinding(app.config["SECRET_KEY"], app.config["IDENTITY_MAX_AGE"])
    limiter = TokenBucket(app.config["COMMENT_RATE_PER_SECOND"], app.config["COMMENT_BURST"])
    comments = CommentService(files, identity, limiter)
    app.extensions["feedback"] = ServiceRegistry(shares, files, comments, identity, limiter)

def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)

    if not app.config.get("ADMIN_TOKEN"):
        raise RuntimeError("ADMIN_TOKEN is required")
    if not app.config.get("SECRET_KEY"):
        raise RuntimeError("SESSION_SECRET is required")

    app.config.setdefault("UPLOAD_FOLDER", str(Path(app.instance_path) / "uploads"))
    app.config.setdefault("IDENTITY_COOKIE_NAME", "user-session")
    app.config.setdefault("IDENTITY_MAX_AGE", 86400 * 30)
    app.config.setdefault("COMMENT_RATE_PER_SECOND", 1.0)
    app.config.setdefault("COMMENT_BURST", 5)

    # Logging must come before blueprints so errors during register are captured
    _init_logging(app)
    _init_sentry(app)

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    # admin checks CSRF itself, after its token gate
    csrf.exempt(admin_bp)

    _init_services(app)

    # "/admin/x//shares" must not be redirected to a real admin route
    app.url_map.merge_slashes = False

    # Blueprints
    app.register_blueprint(errors_bp)  # error handlers
    app.register_blueprint(main_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin/<token>")

    return app
