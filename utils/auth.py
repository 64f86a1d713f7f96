"""Bearer token authentication and role checks.

Views never read the identity from globals: ``requires_auth`` resolves the
token into an :class:`AuthContext` and hands it to the view as ``auth``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable

from flask_jwt_extended import (
    create_access_token,
    get_jwt_identity,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException, NoAuthorizationError
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from models import db
from models.user import User
from utils.errors import AuthError, ForbiddenError


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller of the current request."""

    user: User

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def role(self) -> str:
        return self.user.role


def issue_token(user: User) -> str:
    """Return a signed access token whose subject is the user id."""
    return create_access_token(identity=str(user.id))


def authenticate() -> AuthContext:
    """Verify the request's bearer token and load its subject."""

    try:
        verify_jwt_in_request()
        identity = get_jwt_identity()
    except NoAuthorizationError as exc:
        raise AuthError("Not authorized, no token") from exc
    except ExpiredSignatureError as exc:
        raise AuthError("Not authorized, token expired") from exc
    except (JWTExtendedException, PyJWTError) as exc:
        raise AuthError("Not authorized, token failed") from exc

    try:
        user_id = int(identity)
    except (TypeError, ValueError) as exc:
        raise AuthError("Not authorized, token failed") from exc

    user = db.session.get(User, user_id)
    if user is None:
        raise AuthError("Not authorized, user not found")
    return AuthContext(user=user)


def authorize(auth: AuthContext, *roles: str) -> AuthContext:
    """Raise ``ForbiddenError`` unless the caller holds one of ``roles``."""
    if auth.role not in roles:
        raise ForbiddenError(f"Role '{auth.role}' is not allowed to access this resource")
    return auth


def requires_auth(*roles: str) -> Callable:
    """Decorate a view so it receives ``auth`` and optionally enforce roles."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            auth = authenticate()
            if roles:
                authorize(auth, *roles)
            return view(*args, auth=auth, **kwargs)

        return wrapper

    return decorator
