"""Posts blueprint with listing, CRUD, and reactions."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from services import get_services
from utils.auth import AuthContext, requires_auth
from utils.request_validation import parse_json_request
from utils.validators import parse_pagination

posts_bp = Blueprint("posts", __name__)

EDITOR_ROLES = ("author", "admin")


@posts_bp.route("", methods=["POST"])
@requires_auth(*EDITOR_ROLES)
def create_post(auth: AuthContext):
    """Create a post. Authors and admins only."""

    payload = parse_json_request(request)
    post = get_services().posts.create_post(auth.user, payload)
    return jsonify(post.to_dict()), HTTPStatus.CREATED


@posts_bp.route("", methods=["GET"])
def list_posts():
    """Return published posts with search, tag filter, sorting, and paging."""

    pagination = parse_pagination(
        request.args.get("page"),
        request.args.get("limit"),
        max_limit=current_app.config.get("MAX_PAGE_SIZE", 100),
    )
    posts, pagination = get_services().posts.list_posts(
        pagination,
        search=request.args.get("search") or None,
        tag=request.args.get("tag") or None,
        sort_by=request.args.get("sortBy") or None,
        order=request.args.get("order"),
    )
    return jsonify(
        {
            "posts": [post.to_dict() for post in posts],
            "pagination": pagination.to_dict(),
        }
    )


@posts_bp.route("/<slug>", methods=["GET"])
def get_post(slug: str):
    post = get_services().posts.get_post_by_slug(slug)
    return jsonify(post.to_dict())


@posts_bp.route("/<int:post_id>", methods=["PUT"])
@requires_auth(*EDITOR_ROLES)
def update_post(post_id: int, auth: AuthContext):
    payload = parse_json_request(request, allow_empty=True)
    post = get_services().posts.update_post(post_id, auth.user, payload)
    return jsonify(post.to_dict())


@posts_bp.route("/<int:post_id>", methods=["DELETE"])
@requires_auth(*EDITOR_ROLES)
def delete_post(post_id: int, auth: AuthContext):
    get_services().posts.delete_post(post_id, auth.user)
    return jsonify({"message": "Post deleted successfully"})


@posts_bp.route("/<int:post_id>/like", methods=["POST"])
@requires_auth()
def like_post(post_id: int, auth: AuthContext):
    return jsonify(get_services().posts.toggle_like(post_id, auth.user))


@posts_bp.route("/<int:post_id>/dislike", methods=["POST"])
@requires_auth()
def dislike_post(post_id: int, auth: AuthContext):
    return jsonify(get_services().posts.toggle_dislike(post_id, auth.user))
