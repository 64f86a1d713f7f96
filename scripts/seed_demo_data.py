"""Seed demo users, posts, and a comment."""

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.comment import Comment
from models.post import Post
from models.user import User
from utils.validators import generate_slug


def get_or_create_user(name: str, email: str, role: str, password: str) -> User:
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(name=name, email=email, role=role)
        db.session.add(user)
    else:
        user.name = name
        user.role = role
    user.set_password(password)
    return user


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        author = get_or_create_user("Ada Writer", "author@example.com", "author", "AuthorPass123")
        reader = get_or_create_user("Rex Reader", "reader@example.com", "reader", "ReaderPass123")

        db.session.flush()

        posts_data = [
            {
                "title": "Hello, World!",
                "content": "The first post on this blog.",
                "tags": ["intro", "meta"],
                "is_published": True,
            },
            {
                "title": "Writing Flask APIs",
                "content": "Blueprints, application factories, and services.",
                "tags": ["python", "flask"],
                "is_published": True,
            },
            {
                "title": "Drafts Stay Hidden",
                "content": "Unpublished posts never show up in listings.",
                "tags": ["meta"],
                "is_published": False,
            },
        ]

        posts = []
        for data in posts_data:
            slug = generate_slug(data["title"])
            post = Post.query.filter_by(slug=slug).first()
            if post is None:
                post = Post(slug=slug, author_id=author.id)
                db.session.add(post)
            post.title = data["title"]
            post.content = data["content"]
            post.is_published = data["is_published"]
            post.tags = data["tags"]
            posts.append(post)

        db.session.flush()

        first_post = posts[0]
        existing_comment = Comment.query.filter_by(
            user_id=reader.id, post_id=first_post.id
        ).first()
        if existing_comment is None:
            db.session.add(
                Comment(post_id=first_post.id, user_id=reader.id, content="Welcome aboard!")
            )
        db.session.commit()

        print("Seed data inserted: author, reader, posts, comment.")


if __name__ == "__main__":
    main()
