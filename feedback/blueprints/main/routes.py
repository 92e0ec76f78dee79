# feedback/blueprints/main/routes.py
"""
Public surface. Holding a share's or file's hash is the whole authorization:
whoever has the link can view and comment.
"""
from flask import render_template, request, redirect, url_for, send_file, current_app, make_response

from ...services import get_services
from . import main_bp


def current_username():
    svc = get_services()
    return svc.identity.resolve(request.cookies.get(current_app.config["IDENTITY_COOKIE_NAME"]))


@main_bp.get("/health")
def health():
    return "OK", 200, {"Content-Type": "text/plain"}


@main_bp.get("/share/<share_hash>")
def share_view(share_hash):
    share = get_services().shares.get_by_hash(share_hash)
    return render_template(
        "public/share.html",
        share=share,
        files=share.files,
        username=current_username(),
    )


@main_bp.post("/share/<share_hash>/name")
def set_username(share_hash):
    svc = get_services()
    share = svc.shares.get_by_hash(share_hash)
    token = svc.identity.bind(request.form.get("username"))

    resp = make_response(redirect(url_for("main.share_view", share_hash=share.hash), code=303))
    resp.set_cookie(
        current_app.config["IDENTITY_COOKIE_NAME"],
        token,
        max_age=svc.identity.max_age,
        path="/",
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
    )
    return resp


@main_bp.get("/files/<file_hash>")
def file_view(file_hash):
    files = get_services().files
    f = files.get_by_hash(file_hash)
    path = files.open(f)
    return send_file(
        path,
        mimetype=f.mime_type,
        as_attachment=False,
        download_name=f.filename,
        conditional=True,
        last_modified=f.uploaded_at,
    )
