"""Comments on posts."""

from __future__ import annotations

from models.comment import Comment
from models.post import Post
from models.user import User
from utils.errors import ForbiddenError, NotFoundError, ValidationError
from utils.validators import is_blank


class CommentService:
    def __init__(self, session):
        self.session = session

    def create_comment(self, user: User, payload: dict) -> Comment:
        raw_post_id = payload.get("postId")
        content = payload.get("content")
        if raw_post_id in (None, "") or is_blank(content):
            raise ValidationError("Post ID and content are required")

        try:
            post_id = int(raw_post_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError("Post ID must be an integer") from exc

        if self.session.get(Post, post_id) is None:
            raise NotFoundError("Post not found")

        comment = Comment(post_id=post_id, user_id=user.id, content=content)
        self.session.add(comment)
        self.session.commit()
        return comment

    def list_comments_for_post(self, post_id: int) -> list[Comment]:
        """Return every comment on the post, newest first."""

        return (
            self.session.query(Comment)
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    def delete_comment(self, comment_id: int, user: User) -> None:
        comment = self.session.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.user_id != user.id:
            raise ForbiddenError("Forbidden")

        self.session.delete(comment)
        self.session.commit()
