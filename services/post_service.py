"""Post authoring, listing, and reactions."""

from __future__ import annotations

import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from models.post import Post, PostTag
from models.user import User
from utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from utils.validators import (
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    Pagination,
    check_length,
    clean_tags,
    generate_slug,
    is_blank,
    parse_bool,
)

logger = logging.getLogger(__name__)

SLUG_CONFLICT = "Post with this title already exists"

# API field names (and column names) accepted by ``sortBy``.
SORTABLE_FIELDS = {
    "createdAt": Post.created_at,
    "created_at": Post.created_at,
    "updatedAt": Post.updated_at,
    "updated_at": Post.updated_at,
    "title": Post.title,
    "views": Post.views,
    "slug": Post.slug,
}
DEFAULT_SORT = "createdAt"


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _slug_for(title: str) -> str:
    check_length(title, MAX_TITLE_LENGTH, "Title")
    slug = generate_slug(title)
    if not slug:
        raise ValidationError("Title must contain at least one letter or number")
    return slug


def _cover_image(value) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("coverImage must be a string")
    return check_length(value, MAX_URL_LENGTH, "coverImage")


def _published_flag(value) -> bool:
    parsed = parse_bool(value)
    if parsed is None:
        raise ValidationError("isPublished must be boolean")
    return parsed


class PostService:
    """Business rules for posts, independent of the HTTP layer."""

    def __init__(self, session, max_page_size: int = 100):
        self.session = session
        self.max_page_size = max_page_size

    def _get_or_404(self, post_id: int) -> Post:
        post = self.session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def _get_owned(self, post_id: int, user: User) -> Post:
        post = self._get_or_404(post_id)
        if post.author_id != user.id:
            raise ForbiddenError("Forbidden")
        return post

    def _slug_taken(self, slug: str, exclude_id: int | None = None) -> bool:
        query = self.session.query(Post.id).filter(Post.slug == slug)
        if exclude_id is not None:
            query = query.filter(Post.id != exclude_id)
        return query.first() is not None

    def _commit_unique(self) -> None:
        # A concurrent writer can still claim the slug between check and insert.
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(SLUG_CONFLICT) from exc

    def create_post(self, author: User, payload: dict) -> Post:
        title = payload.get("title")
        content = payload.get("content")
        if is_blank(title) or is_blank(content):
            raise ValidationError("Title and content are required")

        slug = _slug_for(title)
        if self._slug_taken(slug):
            raise ConflictError(SLUG_CONFLICT)

        is_published = False
        if payload.get("isPublished") is not None:
            is_published = _published_flag(payload["isPublished"])

        post = Post(
            title=title,
            slug=slug,
            content=content,
            cover_image=_cover_image(payload.get("coverImage")),
            author_id=author.id,
            is_published=is_published,
        )
        post.tags = clean_tags(payload.get("tags"))
        self.session.add(post)
        self._commit_unique()

        logger.info("User %s created post %s (%s)", author.id, post.id, slug)
        return post

    def list_posts(
        self,
        pagination: Pagination,
        search: str | None = None,
        tag: str | None = None,
        sort_by: str | None = None,
        order: str | None = None,
    ) -> tuple[list[Post], Pagination]:
        """Return one page of published posts and the filled-in pagination."""

        query = self.session.query(Post).filter(Post.is_published.is_(True))

        if search:
            like = f"%{_escape_like(search.lower())}%"
            query = query.filter(
                or_(
                    func.lower(Post.title).like(like, escape="\\"),
                    func.lower(Post.content).like(like, escape="\\"),
                )
            )

        if tag:
            query = query.filter(Post.tag_rows.any(PostTag.name == tag))

        column = SORTABLE_FIELDS.get(sort_by or DEFAULT_SORT, SORTABLE_FIELDS[DEFAULT_SORT])
        if order == "asc":
            ordering = (column.asc(), Post.id.asc())
        else:
            ordering = (column.desc(), Post.id.desc())

        pagination = pagination.with_total(query.count())
        posts = (
            query.order_by(*ordering)
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
        return posts, pagination

    def get_post_by_slug(self, slug: str) -> Post:
        """Return a published post, counting the read."""

        post = (
            self.session.query(Post)
            .filter(Post.slug == slug, Post.is_published.is_(True))
            .first()
        )
        if post is None:
            raise NotFoundError("Post not found")

        # Single UPDATE so concurrent reads never lose an increment.
        self.session.query(Post).filter(Post.id == post.id).update(
            {Post.views: Post.views + 1}, synchronize_session=False
        )
        self.session.commit()
        self.session.refresh(post)
        return post

    def update_post(self, post_id: int, user: User, payload: dict) -> Post:
        """Overwrite only the fields present in ``payload``."""

        post = self._get_owned(post_id, user)

        if "title" in payload:
            title = payload["title"]
            if is_blank(title):
                raise ValidationError("Title cannot be empty")
            slug = _slug_for(title)
            if slug != post.slug and self._slug_taken(slug, exclude_id=post.id):
                raise ConflictError(SLUG_CONFLICT)
            post.title = title
            post.slug = slug

        if "content" in payload:
            if is_blank(payload["content"]):
                raise ValidationError("Content cannot be empty")
            post.content = payload["content"]

        if "coverImage" in payload:
            post.cover_image = _cover_image(payload["coverImage"])

        if "tags" in payload:
            post.tags = clean_tags(payload["tags"])

        if "isPublished" in payload:
            post.is_published = _published_flag(payload["isPublished"])

        self._commit_unique()
        return post

    def delete_post(self, post_id: int, user: User) -> None:
        post = self._get_owned(post_id, user)
        self.session.delete(post)
        self.session.commit()
        logger.info("User %s deleted post %s", user.id, post_id)

    def _toggle(self, post_id: int, user: User, target: str, opposite: str) -> Post:
        # Lock the post row so concurrent toggles by one user serialize and the
        # like/dislike sets stay disjoint.
        post = (
            self.session.query(Post)
            .filter(Post.id == post_id)
            .with_for_update()
            .first()
        )
        if post is None:
            raise NotFoundError("Post not found")

        reactions = getattr(post, target)
        others = getattr(post, opposite)
        if user in reactions:
            reactions.remove(user)
        else:
            reactions.append(user)
            if user in others:
                others.remove(user)

        try:
            self.session.commit()
        except IntegrityError:
            # Another request already wrote the same reaction row; report
            # what is stored now instead of failing.
            self.session.rollback()
            logger.warning("Concurrent %s toggle on post %s by user %s", target, post_id, user.id)
            post = self._get_or_404(post_id)
        return post

    def toggle_like(self, post_id: int, user: User) -> dict:
        post = self._toggle(post_id, user, "likes", "dislikes")
        state = post.reaction_state(user)
        return {"message": "Post liked" if state["isLiked"] else "Like removed", **state}

    def toggle_dislike(self, post_id: int, user: User) -> dict:
        post = self._toggle(post_id, user, "dislikes", "likes")
        state = post.reaction_state(user)
        return {
            "message": "Post disliked" if state["isDisliked"] else "Dislike removed",
            **state,
        }
