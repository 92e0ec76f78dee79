# feedback/models/share.py
from datetime import datetime
from ..extensions import db

SHARE_HASH_LENGTH = 12

class Share(db.Model):
    __tablename__ = "shares"

    id = db.Column(db.Integer, primary_key=True)
    # public handle; the only thing a visitor ever sees
    hash = db.Column(db.String(SHARE_HASH_LENGTH), unique=True, index=True, nullable=False)

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # children the session has not loaded are removed by the FK cascade
    files = db.relationship(
        "File",
        back_populates="share",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="File.id.desc()",  # newest upload first
    )

    def __repr__(self):
        return f"<Share {self.id} {self.hash}>"
