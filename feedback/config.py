# feedback/config.py
import os
from dotenv import load_dotenv

load_dotenv()

def _as_bool(val: str | None, default=False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}

class Config:
    # --- Core ---
    SECRET_KEY = os.getenv("SESSION_SECRET") or os.getenv("SECRET_KEY")
    ADMIN_TOKEN = os.getenv("ADMIN_TOKEN")

    # --- Storage ---
    DATA_DIR = os.getenv("DATA_DIR", "./data")
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER") or os.path.join(DATA_DIR, "uploads")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE", str(50 * 1024 * 1024)))  # 50MB

    # DB
    SQLALCHEMY_DATABASE_URI = (
        os.getenv("DATABASE_URL")
        or "sqlite:///" + os.path.abspath(os.getenv("DB_PATH", os.path.join(DATA_DIR, "feedback.db")))
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CSRF
    WTF_CSRF_TIME_LIMIT = None

    # --- Visitor identity (signed cookie) ---
    IDENTITY_COOKIE_NAME = "user-session"
    IDENTITY_MAX_AGE = int(os.getenv("IDENTITY_MAX_AGE", str(86400 * 30)))  # 30 days
    SESSION_COOKIE_SECURE = _as_bool(os.getenv("SESSION_COOKIE_SECURE", "0"))
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")

    # --- Comment throttle (process-wide token bucket) ---
    COMMENT_RATE_PER_SECOND = float(os.getenv("COMMENT_RATE_PER_SECOND", "1.0"))
    COMMENT_BURST = int(os.getenv("COMMENT_BURST", "5"))

    # --- Logging ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_FILENAME = os.getenv("LOG_FILENAME", "feedback.log")
    LOG_JSON = _as_bool(os.getenv("LOG_JSON", "0"))
    LOG_TO_FILE = _as_bool(os.getenv("LOG_TO_FILE", "1"), default=True)

    # --- Sentry ---
    SENTRY_DSN = os.getenv("SENTRY_DSN", "")
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
