# feedback/models/comment.py
from datetime import datetime
from ..extensions import db

class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    file_id = db.Column(db.Integer, db.ForeignKey("files.id", ondelete="CASCADE"), nullable=False, index=True)

    username = db.Column(db.String(120), nullable=False)  # whatever the visitor picked
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    file = db.relationship("File", back_populates="comments")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "file_id": self.file_id,
            "username": self.username,
            "content": self.content,
            "created_at": self.created_at.isoformat() + "Z" if self.created_at else None,
        }
