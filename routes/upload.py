"""Image upload blueprint and the route that serves stored images."""

from __future__ import annotations

from flask import Blueprint, jsonify, request, send_from_directory
from werkzeug.exceptions import RequestEntityTooLarge

from services import get_services
from utils.auth import AuthContext, requires_auth
from utils.errors import NotFoundError

upload_bp = Blueprint("upload", __name__)
media_bp = Blueprint("media", __name__)


@upload_bp.route("/image", methods=["POST"])
@requires_auth()
def upload_image(auth: AuthContext):
    """Accept a JPEG or PNG in the ``image`` field and return its URL."""

    uploads = get_services().uploads
    try:
        image = request.files.get("image")
    except RequestEntityTooLarge as exc:
        # Bodies past MAX_CONTENT_LENGTH are oversized images all the same.
        raise uploads.oversize_error() from exc

    url = uploads.upload_image(image)
    return jsonify({"url": url})


@media_bp.route("/<path:path>", methods=["GET"])
def serve_upload(path: str):
    storage = get_services().uploads.storage
    if not storage.exists(path):
        raise NotFoundError("Image not found")
    return send_from_directory(storage.base_directory, path)
