from flask import render_template, request, jsonify, current_app
from werkzeug.exceptions import HTTPException
from flask_wtf.csrf import CSRFError
from ...extensions import db
from ...exceptions import FeedbackError
from ...security import is_hidden_admin_path
from . import errors_bp

NOT_FOUND_MESSAGE = "Resource not found."


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def _render(status: int, message: str, template: str | None = None):
    if status != 404 and is_hidden_admin_path(request.path):
        # 405, 413 and friends would give away a real admin route
        status, message, template = 404, NOT_FOUND_MESSAGE, "errors/404.html"
    if _wants_json():
        return jsonify({"error": message}), status
    return render_template(template or "errors/http_generic.html", code=status, message=message), status


# Domain errors raised by the services
@errors_bp.app_errorhandler(FeedbackError)
def err_feedback(e: FeedbackError):
    if e.status_code >= 500:
        db.session.rollback()
        current_app.logger.error(f"{type(e).__name__}: {e}")
        # creation failures keep their fixed public wording
        return _render(e.status_code, e.public_message, "errors/500.html")
    if e.status_code == 404:
        return err_404(e)
    return _render(e.status_code, e.message)

# 404 – Not Found (also a failed admin token)
@errors_bp.app_errorhandler(404)
def err_404(e):
    return _render(404, NOT_FOUND_MESSAGE, "errors/404.html")

# 413 – Payload Too Large (uploads)
@errors_bp.app_errorhandler(413)
def err_413(e):
    return _render(413, "File is too large.")

# 429 – Too Many Requests
@errors_bp.app_errorhandler(429)
def err_429(e):
    return _render(429, "Rate limit exceeded.")

# CSRF – typically treated as 400 Bad Request
@errors_bp.app_errorhandler(CSRFError)
def err_csrf(e):
    return _render(400, e.description)

# Fallback for uncaught HTTPException (shows friendly page with code/desc)
@errors_bp.app_errorhandler(HTTPException)
def err_http(e: HTTPException):
    return _render(e.code, e.description or e.name)

# Last-resort: any other Exception
@errors_bp.app_errorhandler(Exception)
def err_unexpected(e):
    db.session.rollback()
    current_app.logger.exception("Unhandled error")
    # generic 500, no internals
    return _render(500, "Internal server error.", "errors/500.html")
