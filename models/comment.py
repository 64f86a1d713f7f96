"""Comment model definition."""

from datetime import datetime

from . import db


class Comment(db.Model):
    """A reply attached to a post."""

    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", backref=db.backref("comments", lazy="dynamic"))

    def to_dict(self) -> dict:
        """Serialize the comment with the commenter's byline."""

        return {
            "id": self.id,
            "post": self.post_id,
            "user": self.user.to_author() if self.user else None,
            "content": self.content,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
