from datetime import datetime

from app.db import db


MEDIA_TYPES = ("image", "video")


class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    caption = db.Column(db.Text, nullable=True)
    media_url = db.Column(db.String(500), nullable=False)
    media_type = db.Column(
        db.Enum(*MEDIA_TYPES, name="media_type"),
        nullable=False,
    )
    created_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        nullable=False,
        index=True,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "caption": self.caption,
            "mediaUrl": self.media_url,
            "mediaType": self.media_type,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
