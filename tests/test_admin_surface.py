import re

import pytest

from feedback import create_app
from feedback.extensions import db
from feedback.models import Share
from tests.conftest import ADMIN_TOKEN, admin_url, make_config

WRONG = "/admin/not-the-token"


@pytest.fixture
def csrf_client(tmp_path):
    """Client against an app with CSRF protection switched on, as in production."""
    app = create_app(make_config(tmp_path, WTF_CSRF_ENABLED=True))
    with app.app_context():
        db.create_all()
        with app.test_client() as client:
            yield client
        db.session.remove()
        db.drop_all()


def _not_found_body(client):
    resp = client.get("/definitely/not/a/route")
    assert resp.status_code == 404
    return resp.data


def _csrf_token(client):
    page = client.get(admin_url("shares/new"))
    return re.search(rb'name="csrf_token" type="hidden" value="([^"]+)"', page.data).group(1).decode()


def test_wrong_method_under_wrong_token_is_not_found(csrf_client):
    # /shares only accepts POST, a GET would normally be a 405
    resp = csrf_client.get(f"{WRONG}/shares")
    assert resp.status_code == 404
    assert "Allow" not in resp.headers
    assert resp.data == _not_found_body(csrf_client)


def test_post_without_csrf_under_wrong_token_is_not_found(csrf_client):
    resp = csrf_client.post(f"{WRONG}/shares", data={"name": "sneaky"})
    assert resp.status_code == 404
    assert resp.data == _not_found_body(csrf_client)
    assert Share.query.count() == 0


def test_wrong_token_without_trailing_slash_is_not_redirected(csrf_client):
    resp = csrf_client.get(WRONG)
    assert resp.status_code == 404
    assert "Location" not in resp.headers
    assert resp.data == _not_found_body(csrf_client)


def test_doubled_slash_under_wrong_token_is_not_redirected(csrf_client):
    resp = csrf_client.post(f"{WRONG}//shares")
    assert resp.status_code == 404
    assert "Location" not in resp.headers


def test_dashboard_answers_without_trailing_slash(csrf_client):
    assert csrf_client.get(f"/admin/{ADMIN_TOKEN}").status_code == 200


def test_right_token_still_requires_csrf(csrf_client):
    resp = csrf_client.post(admin_url("shares"), data={"name": "Designs"})
    assert resp.status_code == 400
    assert Share.query.count() == 0


def test_right_token_with_csrf_creates_share(csrf_client):
    token = _csrf_token(csrf_client)
    resp = csrf_client.post(admin_url("shares"), data={"name": "Designs", "csrf_token": token})
    assert resp.status_code == 303
    assert Share.query.one().name == "Designs"


def test_wrong_method_under_right_token_is_a_plain_405(csrf_client):
    assert csrf_client.get(admin_url("shares")).status_code == 405
