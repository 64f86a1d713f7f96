"""Error types raised by the services and normalized by the app factory."""

from __future__ import annotations

from werkzeug.exceptions import BadRequest, Forbidden, NotFound, Unauthorized


class ValidationError(BadRequest):
    """Malformed or missing input."""

    name = "Validation Error"


class ConflictError(BadRequest):
    """A uniqueness rule was violated (email, slug)."""

    name = "Conflict"


class AuthError(Unauthorized):
    """Missing or invalid credentials or token."""

    name = "Unauthorized"


class ForbiddenError(Forbidden):
    """Authenticated, but not allowed to act on the resource."""


class NotFoundError(NotFound):
    """The referenced entity does not exist."""


__all__ = [
    "AuthError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
]
