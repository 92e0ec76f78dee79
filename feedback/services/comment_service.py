# feedback/services/comment_service.py
import logging
from typing import Optional

from ..extensions import db
from ..exceptions import RateLimitedError, UnauthenticatedError, ValidationError
from ..models import Comment

log = logging.getLogger(__name__)


class CommentService:
    def __init__(self, files, identity, limiter):
        self.files = files
        self.identity = identity
        self.limiter = limiter

    def create(self, file_id: int, session_token: Optional[str], content: str) -> Comment:
        """
        Add a comment as whoever the session token names.

        Order of checks: process-wide throttle, bound display name, content,
        then the target file. Nothing is written unless all pass.
        """
        if not self.limiter.allow():
            log.info("comment on file %s rejected: rate limited", file_id)
            raise RateLimitedError()

        username = self.identity.resolve(session_token)
        if not username:
            raise UnauthenticatedError()

        content = (content or "").strip()
        if not content:
            raise ValidationError("Content is required.")

        f = self.files.get(file_id)

        comment = Comment(file_id=f.id, username=username, content=content)
        db.session.add(comment)
        db.session.commit()
        return comment
