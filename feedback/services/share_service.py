# feedback/services/share_service.py
import logging
from typing import NamedTuple

from sqlalchemy import distinct, func
from sqlalchemy.orm import selectinload

from ..extensions import db
from ..exceptions import NotFoundError, ValidationError
from ..models import Share, File, Comment
from ..models.share import SHARE_HASH_LENGTH
from .hash_service import insert_with_unique_hash

log = logging.getLogger(__name__)


class ShareStats(NamedTuple):
    share: Share
    file_count: int
    comment_count: int


class ShareService:
    def __init__(self, storage):
        self.storage = storage

    def create(self, name: str, description: str | None = None) -> Share:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required.")
        description = (description or "").strip() or None

        share = insert_with_unique_hash(
            Share,
            SHARE_HASH_LENGTH,
            lambda h: Share(hash=h, name=name, description=description),
        )
        log.info("share %s created (%s)", share.id, share.hash)
        return share

    def get(self, share_id: int) -> Share:
        share = db.session.get(Share, share_id)
        if share is None:
            raise NotFoundError()
        return share

    def get_by_hash(self, share_hash: str) -> Share:
        """Public lookup. Files and their comments come back preloaded."""
        share = (Share.query
                 .options(selectinload(Share.files).selectinload(File.comments))
                 .filter_by(hash=share_hash or "")
                 .first())
        if share is None:
            raise NotFoundError()
        return share

    def list_with_stats(self) -> list[ShareStats]:
        rows = (db.session.query(
                    Share,
                    func.count(distinct(File.id)),
                    func.count(distinct(Comment.id)),
                )
                .outerjoin(File, File.share_id == Share.id)
                .outerjoin(Comment, Comment.file_id == File.id)
                .group_by(Share.id)
                .order_by(Share.created_at.desc(), Share.id.desc())
                .all())
        return [ShareStats(share, int(files or 0), int(comments or 0)) for share, files, comments in rows]

    def delete(self, share_id: int) -> None:
        share = self.get(share_id)
        # paths first: once the row is gone the cascade has taken the files too
        paths = [p for (p,) in db.session.query(File.storage_path).filter(File.share_id == share_id)]

        db.session.delete(share)
        db.session.commit()
        log.info("share %s deleted with %d file(s)", share_id, len(paths))

        for path in paths:
            self.storage.remove(path)
        self.storage.remove_share_dir(share_id)
