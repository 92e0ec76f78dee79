# feedback/services/storage_service.py
import logging
import os
import shutil
import uuid
from pathlib import Path

from werkzeug.utils import secure_filename

from ..exceptions import NotFoundError

log = logging.getLogger(__name__)


class LocalStorage:
    """Backing bytes for uploaded files, laid out as <base>/<share id>/<uuid>_<name>."""

    def __init__(self, base_dir):
        self.base = Path(base_dir)

    def _ensure_base(self) -> Path:
        self.base.mkdir(parents=True, exist_ok=True)
        return self.base

    def abs_path(self, relpath: str) -> str:
        base = os.path.normpath(os.path.abspath(self.base))
        abs_path = os.path.normpath(os.path.join(base, relpath or ""))
        if not abs_path.startswith(base + os.sep):
            raise NotFoundError()
        return abs_path

    def save_upload(self, file_storage, share_id: int) -> tuple[str, int]:
        """
        Saves the upload under the share's directory, returns (path relative to base, size).
        """
        base = self._ensure_base()
        safe_name = secure_filename(file_storage.filename or "") or "upload"

        target_dir = base / str(share_id)
        target_dir.mkdir(parents=True, exist_ok=True)

        dest = target_dir / f"{uuid.uuid4()}_{safe_name}"
        try:
            file_storage.save(dest)
        except Exception:
            # a half-written upload must not outlive the failed save
            dest.unlink(missing_ok=True)
            raise

        return str(dest.relative_to(base)), dest.stat().st_size

    def remove(self, relpath: str) -> bool:
        # best-effort: a leftover file is a leak, not a failure
        try:
            os.remove(self.abs_path(relpath))
            return True
        except (OSError, NotFoundError) as e:
            log.warning("failed to delete stored file %s: %s", relpath, e)
            return False

    def remove_share_dir(self, share_id: int) -> None:
        target = self.base / str(share_id)
        if not target.exists():
            return
        try:
            shutil.rmtree(target)
        except OSError as e:
            log.warning("failed to delete share directory %s: %s", target, e)
