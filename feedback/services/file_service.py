# feedback/services/file_service.py
import logging
import os

from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..exceptions import HashCollisionError, NotFoundError, StorageError, ValidationError
from ..models import File
from ..models.file import FILE_HASH_LENGTH
from .hash_service import insert_with_unique_hash

log = logging.getLogger(__name__)

DEFAULT_MIME = "application/octet-stream"


class FileService:
    def __init__(self, shares, storage):
        self.shares = shares
        self.storage = storage

    def save(self, share_id: int, upload) -> File:
        """
        Store an uploaded werkzeug FileStorage in a share.

        Bytes are written before the row exists. If the row cannot be
        committed the bytes are removed again (best-effort, not transactional).
        """
        share_id = self.shares.get(share_id).id
        if upload is None or not upload.filename:
            raise ValidationError("No file uploaded.")

        try:
            relpath, size = self.storage.save_upload(upload, share_id)
        except OSError as e:
            log.error("writing upload for share %s failed: %s", share_id, e)
            raise StorageError() from e

        filename = upload.filename
        mime_type = upload.mimetype or DEFAULT_MIME
        try:
            record = insert_with_unique_hash(
                File,
                FILE_HASH_LENGTH,
                lambda h: File(
                    share_id=share_id,
                    hash=h,
                    filename=filename,
                    storage_path=relpath,
                    mime_type=mime_type,
                    size_bytes=size,
                ),
            )
        except (SQLAlchemyError, HashCollisionError) as e:
            db.session.rollback()
            log.error("file record for share %s failed, removing %s: %s", share_id, relpath, e)
            self.storage.remove(relpath)
            raise StorageError() from e

        log.info("file %s (%s, %d bytes) added to share %s", record.id, record.hash, size, share_id)
        return record

    def get(self, file_id: int) -> File:
        f = db.session.get(File, file_id)
        if f is None:
            raise NotFoundError()
        return f

    def get_by_hash(self, file_hash: str) -> File:
        f = File.query.filter_by(hash=file_hash or "").first()
        if f is None:
            raise NotFoundError()
        return f

    def open(self, f: File) -> str:
        """Absolute path of the backing bytes; missing bytes read as not found."""
        path = self.storage.abs_path(f.storage_path)
        if not os.path.exists(path):
            raise NotFoundError()
        return path

    def delete(self, file_id: int) -> int:
        """Delete a file and its comments; returns the owning share id."""
        f = self.get(file_id)
        share_id, relpath = f.share_id, f.storage_path

        db.session.delete(f)
        db.session.commit()
        log.info("file %s deleted from share %s", file_id, share_id)

        # the row stays deleted even if the bytes cannot be removed
        self.storage.remove(relpath)
        return share_id
