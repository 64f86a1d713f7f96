"""Account registration, login, and profile management."""

from __future__ import annotations

import logging

from sqlalchemy import func

from models.user import User
from utils.auth import issue_token
from utils.errors import AuthError, ConflictError, ValidationError
from utils.validators import (
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_URL_LENGTH,
    check_length,
    is_blank,
    is_valid_email,
    normalize_email,
    validate_new_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Issue tokens for users and maintain their profiles."""

    def __init__(self, session):
        self.session = session

    def _find_by_email(self, email: str) -> User | None:
        # Case-insensitive lookup
        return self.session.query(User).filter(func.lower(User.email) == email).first()

    def register(self, payload: dict) -> tuple[str, User]:
        """Create a ``reader`` account and return ``(token, user)``."""

        name = payload.get("name")
        password = payload.get("password")
        if is_blank(name) or is_blank(payload.get("email")) or is_blank(password):
            raise ValidationError("All fields are required")

        check_length(name.strip(), MAX_NAME_LENGTH, "Name")
        email = check_length(normalize_email(payload["email"]), MAX_EMAIL_LENGTH, "Email")
        if not is_valid_email(email):
            raise ValidationError("Please provide a valid email")
        validate_new_password(password)

        if self._find_by_email(email) is not None:
            raise ConflictError("User already exists")

        avatar = payload.get("avatar")
        avatar = avatar if isinstance(avatar, str) else ""
        user = User(
            name=name.strip(),
            email=email,
            role="reader",
            avatar=check_length(avatar, MAX_URL_LENGTH, "Avatar"),
        )
        user.set_password(password)
        self.session.add(user)
        self.session.commit()

        logger.info("Registered user %s", user.id)
        return issue_token(user), user

    def login(self, payload: dict) -> tuple[str, User]:
        """Return ``(token, user)`` for valid credentials."""

        password = payload.get("password")
        if is_blank(payload.get("email")) or is_blank(password):
            raise ValidationError("All fields are required")

        email = normalize_email(payload["email"])

        user = self._find_by_email(email)
        # Same message for an unknown email and a wrong password.
        if user is None or not user.check_password(password):
            raise AuthError(INVALID_CREDENTIALS)

        return issue_token(user), user

    def update_profile(self, user: User, payload: dict) -> User:
        """Apply name/avatar/bio changes and an optional password rotation."""

        for field in ("avatar", "bio"):
            value = payload.get(field)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{field} must be a string")
        if isinstance(payload.get("avatar"), str):
            check_length(payload["avatar"], MAX_URL_LENGTH, "Avatar")
        name = payload.get("name")
        if not is_blank(name):
            check_length(name.strip(), MAX_NAME_LENGTH, "Name")

        # Check the password change before touching any field.
        current_password = payload.get("currentPassword")
        new_password = payload.get("newPassword")
        rotate = not is_blank(current_password) and not is_blank(new_password)
        if rotate:
            if not user.check_password(current_password):
                raise AuthError("Current password is incorrect")
            validate_new_password(new_password)

        if not is_blank(name):
            user.name = name.strip()
        for field in ("avatar", "bio"):
            if field in payload:
                setattr(user, field, payload[field] or "")
        if rotate:
            user.set_password(new_password)
            logger.info("Rotated password for user %s", user.id)

        self.session.commit()
        return user
