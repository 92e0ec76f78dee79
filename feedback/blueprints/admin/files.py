from flask import redirect, url_for, flash

from ...services import get_services
from . import admin_bp


@admin_bp.route("/files/<int:file_id>/delete", methods=["POST"])
def file_delete(file_id):
    share_id = get_services().files.delete(file_id)
    flash("File deleted.", "success")
    return redirect(url_for("admin.share_detail", share_id=share_id), code=303)
