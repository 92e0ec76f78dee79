from flask import Blueprint, g

from ...security import admin_required

admin_bp = Blueprint("admin", __name__)


# Every admin URL is /admin/<token>/...; the token is lifted off the view
# arguments, checked once per request and put back when building URLs.
@admin_bp.url_value_preprocessor
def _pull_token(endpoint, values):
    g.admin_token = (values or {}).pop("token", None)

@admin_bp.url_defaults
def _push_token(endpoint, values):
    if "token" not in values and g.get("admin_token"):
        values["token"] = g.admin_token

admin_bp.before_request(admin_required)

# Import route modules to register their endpoints
from . import shares  # noqa: E402,F401
from . import files   # noqa: E402,F401
