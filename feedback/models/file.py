# feedback/models/file.py
from datetime import datetime
from ..extensions import db

FILE_HASH_LENGTH = 16

class File(db.Model):
    __tablename__ = "files"

    id = db.Column(db.Integer, primary_key=True)
    share_id = db.Column(db.Integer, db.ForeignKey("shares.id", ondelete="CASCADE"), nullable=False, index=True)
    hash = db.Column(db.String(FILE_HASH_LENGTH), unique=True, index=True, nullable=False)

    filename = db.Column(db.String(255), nullable=False)                  # original, display only
    storage_path = db.Column(db.String(512), unique=True, nullable=False)  # relative to UPLOAD_FOLDER, never sent out
    mime_type = db.Column(db.String(120), nullable=False, default="application/octet-stream")
    size_bytes = db.Column(db.Integer, nullable=False)
    uploaded_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    share = db.relationship("Share", back_populates="files")
    comments = db.relationship(
        "Comment",
        back_populates="file",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Comment.id",
    )

    @property
    def is_image(self) -> bool:
        return (self.mime_type or "").startswith("image/")

    def __repr__(self):
        return f"<File {self.id} {self.hash}>"
