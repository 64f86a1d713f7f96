"""Post, tag, and reaction models."""

from datetime import datetime

from . import db


post_likes = db.Table(
    "post_likes",
    db.Column(
        "post_id",
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "user_id",
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

post_dislikes = db.Table(
    "post_dislikes",
    db.Column(
        "post_id",
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "user_id",
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class PostTag(db.Model):
    """A single tag on a post; ``position`` keeps the author's ordering."""

    __tablename__ = "post_tags"
    __table_args__ = (db.UniqueConstraint("post_id", "name", name="uq_post_tag"),)

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(64), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)


class Post(db.Model):
    """Represents a blog article."""

    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    cover_image = db.Column(db.String(512), nullable=False, default="")
    author_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    is_published = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    views = db.Column(
        db.Integer, nullable=False, default=0, server_default=db.text("0")
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    author = db.relationship("User", backref=db.backref("posts", lazy="dynamic"))
    tag_rows = db.relationship(
        "PostTag",
        order_by="PostTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    likes = db.relationship("User", secondary=post_likes, lazy="selectin")
    dislikes = db.relationship("User", secondary=post_dislikes, lazy="selectin")

    @property
    def tags(self) -> list[str]:
        return [row.name for row in self.tag_rows]

    @tags.setter
    def tags(self, names: list[str]) -> None:
        # Reuse rows for kept names so the (post_id, name) constraint holds
        # while the unit of work flushes.
        existing = {row.name: row for row in self.tag_rows}
        rows = []
        for index, name in enumerate(names):
            row = existing.get(name) or PostTag(name=name)
            row.position = index
            rows.append(row)
        self.tag_rows = rows

    def reaction_state(self, user) -> dict:
        """Like/dislike counts plus whether ``user`` is in either set."""

        return {
            "likes": len(self.likes),
            "dislikes": len(self.dislikes),
            "isLiked": user in self.likes,
            "isDisliked": user in self.dislikes,
        }

    def to_dict(self) -> dict:
        """Serialize the post into a dictionary."""

        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "coverImage": self.cover_image,
            "author": self.author.to_author() if self.author else None,
            "tags": self.tags,
            "isPublished": self.is_published,
            "views": self.views,
            "likes": len(self.likes),
            "dislikes": len(self.dislikes),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Post id={self.id} slug={self.slug}>"
