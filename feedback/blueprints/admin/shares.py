from flask import render_template, redirect, url_for, flash

from ...services import get_services
from .forms import ShareForm, UploadForm, DeleteForm
from . import admin_bp


@admin_bp.route("/", strict_slashes=False)
def dashboard():
    stats = get_services().shares.list_with_stats()
    return render_template("admin/dashboard.html", shares=stats, delete_form=DeleteForm())


@admin_bp.route("/shares/new")
def share_new():
    return render_template("admin/share_form.html", form=ShareForm())


@admin_bp.route("/shares", methods=["POST"])
def share_create():
    form = ShareForm()
    if not form.validate_on_submit():
        for field, errors in form.errors.items():
            for e in errors:
                flash(f"{field}: {e}", "danger")
        return render_template("admin/share_form.html", form=form), 400

    share = get_services().shares.create(form.name.data, form.description.data)
    flash("Share created.", "success")
    return redirect(url_for("admin.share_detail", share_id=share.id), code=303)


@admin_bp.route("/shares/<int:share_id>")
def share_detail(share_id):
    share = get_services().shares.get(share_id)
    public_url = url_for("main.share_view", share_hash=share.hash, _external=True)
    return render_template(
        "admin/share_detail.html",
        share=share,
        files=share.files,
        public_url=public_url,
        upload_form=UploadForm(),
        delete_form=DeleteForm(),
    )


@admin_bp.route("/shares/<int:share_id>/upload", methods=["POST"])
def share_upload(share_id):
    svc = get_services()
    share = svc.shares.get(share_id)
    form = UploadForm()
    if not form.validate_on_submit():
        flash("No file uploaded.", "danger")
        return redirect(url_for("admin.share_detail", share_id=share.id), code=303)

    f = svc.files.save(share.id, form.file.data)
    flash(f"Uploaded {f.filename}.", "success")
    return redirect(url_for("admin.share_detail", share_id=share.id), code=303)


@admin_bp.route("/shares/<int:share_id>/delete", methods=["POST"])
def share_delete(share_id):
    get_services().shares.delete(share_id)
    flash("Share deleted.", "success")
    return redirect(url_for("admin.dashboard"), code=303)
