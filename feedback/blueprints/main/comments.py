from flask import request, jsonify, current_app, redirect, url_for, flash

from ...exceptions import NotFoundError
from ...services import get_services
from . import main_bp


def _post_comment(file_id):
    token = request.cookies.get(current_app.config["IDENTITY_COOKIE_NAME"])
    return get_services().comments.create(file_id, token, request.form.get("content"))


@main_bp.post("/api/files/<int:file_id>/comments")
def comment_create(file_id):
    comment = _post_comment(file_id)
    return jsonify(comment.to_dict()), 201


@main_bp.post("/share/<share_hash>/files/<int:file_id>/comments")
def comment_form(share_hash, file_id):
    """Plain HTML form post from the share page; lands back on the commented file."""
    svc = get_services()
    share = svc.shares.get_by_hash(share_hash)
    if svc.files.get(file_id).share_id != share.id:
        raise NotFoundError()

    _post_comment(file_id)
    flash("Comment posted.", "success")
    return redirect(url_for("main.share_view", share_hash=share.hash, _anchor=f"file-{file_id}"), code=303)
