# feedback/security.py
from secrets import compare_digest

from flask import abort, current_app, g, request

from .extensions import csrf


def is_admin_token(candidate: str | None, secret: str | None) -> bool:
    if not candidate or not secret:
        return False
    return compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


def is_hidden_admin_path(path: str) -> bool:
    """True for paths under /admin/ that do not carry the configured token."""
    parts = path.split("/", 3)
    if len(parts) < 3 or parts[1] != "admin":
        return False
    return not is_admin_token(parts[2], current_app.config.get("ADMIN_TOKEN"))


def admin_required():
    """
    before_request hook for the admin blueprint.

    A wrong token answers exactly like an unknown URL (404), so a guess
    cannot tell whether an admin surface exists. CSRF is checked here,
    after the token, because the blueprint is exempt from the app-wide
    check that would otherwise answer 400 first.
    """
    if not is_admin_token(g.get("admin_token"), current_app.config.get("ADMIN_TOKEN")):
        abort(404)
    if current_app.config.get("WTF_CSRF_ENABLED", True):
        csrf.protect()
