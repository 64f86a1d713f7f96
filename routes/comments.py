"""Comments blueprint."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from services import get_services
from utils.auth import AuthContext, requires_auth
from utils.request_validation import parse_json_request

comments_bp = Blueprint("comments", __name__)


@comments_bp.route("", methods=["POST"])
@requires_auth()
def create_comment(auth: AuthContext):
    payload = parse_json_request(request)
    comment = get_services().comments.create_comment(auth.user, payload)
    return jsonify(comment.to_dict()), HTTPStatus.CREATED


@comments_bp.route("/post/<int:post_id>", methods=["GET"])
@requires_auth()
def list_comments(post_id: int, auth: AuthContext):
    """Return the post's comments, newest first."""

    comments = get_services().comments.list_comments_for_post(post_id)
    return jsonify([comment.to_dict() for comment in comments])


@comments_bp.route("/<int:comment_id>", methods=["DELETE"])
@requires_auth()
def delete_comment(comment_id: int, auth: AuthContext):
    get_services().comments.delete_comment(comment_id, auth.user)
    return jsonify({"message": "Comment deleted successfully"})
