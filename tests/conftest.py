import io

import pytest
from werkzeug.datastructures import FileStorage

from feedback import create_app
from feedback.extensions import db
from feedback.services.rate_limiter import TokenBucket


ADMIN_TOKEN = "s3cret-admin-token"


class BaseTestConfig:
    TESTING = True
    SECRET_KEY = "test-secret-key"
    ADMIN_TOKEN = ADMIN_TOKEN
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False
    LOG_TO_FILE = False
    LOG_LEVEL = "WARNING"
    SENTRY_DSN = ""
    IDENTITY_COOKIE_NAME = "user-session"
    IDENTITY_MAX_AGE = 86400 * 30
    COMMENT_RATE_PER_SECOND = 1.0
    COMMENT_BURST = 5


def make_config(tmp_path, **overrides):
    attrs = {"UPLOAD_FOLDER": str(tmp_path / "uploads")}
    attrs.update(overrides)
    return type("PerTestConfig", (BaseTestConfig,), attrs)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def app(tmp_path):
    app = create_app(make_config(tmp_path))
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def services(app):
    return app.extensions["feedback"]


@pytest.fixture
def clock(services):
    """Swap the comment limiter for one driven by a fake clock."""
    fake = FakeClock()
    limiter = TokenBucket(1.0, 5, clock=fake)
    services.comment_limiter = limiter
    services.comments.limiter = limiter
    return fake


def make_upload(filename="notes.txt", data=b"hello world", mimetype="text/plain"):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=mimetype)


def admin_url(path=""):
    return f"/admin/{ADMIN_TOKEN}/{path}"
