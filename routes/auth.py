"""Authentication blueprint: register, login, and profile endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request

from services import get_services
from utils.auth import AuthContext, requires_auth
from utils.request_validation import parse_json_request

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new reader account and return a token."""
    payload = parse_json_request(request)
    token, user = get_services().auth.register(payload)
    return jsonify({"token": token, "user": user.to_summary()}), HTTPStatus.CREATED


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a JWT access token."""
    payload = parse_json_request(request)
    token, user = get_services().auth.login(payload)
    return jsonify({"token": token, "user": user.to_summary()}), HTTPStatus.OK


@auth_bp.route("/me", methods=["GET"])
@requires_auth()
def me(auth: AuthContext):
    return jsonify(auth.user.to_dict())


@auth_bp.route("/profile", methods=["PUT"])
@requires_auth()
def update_profile(auth: AuthContext):
    """Update name, avatar, bio, and optionally rotate the password."""
    payload = parse_json_request(request, allow_empty=True)
    user = get_services().auth.update_profile(auth.user, payload)
    public = user.to_summary()
    public.update(avatar=user.avatar, bio=user.bio)
    return jsonify({"message": "Profile updated successfully", "user": public})
