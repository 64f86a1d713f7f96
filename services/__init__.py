"""Resource services, constructed once per application."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from storage.abstract_storage import AbstractStorage

from .auth_service import AuthService
from .comment_service import CommentService
from .post_service import PostService
from .upload_service import UploadService

EXTENSION_KEY = "blog_services"


@dataclass(frozen=True)
class Services:
    auth: AuthService
    posts: PostService
    comments: CommentService
    uploads: UploadService


def init_services(app: Flask, session, storage: AbstractStorage) -> Services:
    """Build every service around ``session`` and register them on ``app``."""

    services = Services(
        auth=AuthService(session),
        posts=PostService(session, max_page_size=app.config.get("MAX_PAGE_SIZE", 100)),
        comments=CommentService(session),
        uploads=UploadService(
            storage,
            staging_dir=app.config["UPLOAD_STAGING_DIR"],
            folder=app.config.get("UPLOAD_FOLDER", "Blog"),
            max_size=int(app.config.get("MAX_IMAGE_SIZE", 2 * 1024 * 1024)),
        ),
    )
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> Services:
    """Return the services registered on the current application."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "AuthService",
    "CommentService",
    "PostService",
    "Services",
    "UploadService",
    "get_services",
    "init_services",
]
