"""Pure input validators shared by the services.

Nothing in here touches the database or the request, so every helper can be
exercised directly in unit tests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from utils.errors import ValidationError

MIN_PASSWORD_LENGTH = 6
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Column sizes in models/.
MAX_NAME_LENGTH = 120
MAX_EMAIL_LENGTH = 255
MAX_TITLE_LENGTH = 255
MAX_TAG_LENGTH = 64
MAX_URL_LENGTH = 512

_SLUG_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def is_blank(value: Any) -> bool:
    """Return True for None, non-strings and whitespace-only strings."""
    return not isinstance(value, str) or not value.strip()


def check_length(value: str, limit: int, field: str) -> str:
    if len(value) > limit:
        raise ValidationError(f"{field} must be at most {limit} characters")
    return value


def validate_new_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def generate_slug(title: str) -> str:
    """Derive a URL-safe slug from a post title.

    The title is lower-cased, every run of characters outside ``[a-z0-9]``
    collapses to a single hyphen, and leading/trailing hyphens are dropped.
    ``"Hello, World!"`` becomes ``"hello-world"``.
    """
    return _SLUG_SEPARATOR_RE.sub("-", title.lower().strip()).strip("-")


def clean_tags(raw_tags: Any) -> list[str]:
    """Return an ordered, de-duplicated list of trimmed tag strings."""
    if raw_tags is None:
        return []
    if not isinstance(raw_tags, list) or not all(
        isinstance(tag, str) for tag in raw_tags
    ):
        raise ValidationError("tags must be a list of strings")

    tags: list[str] = []
    for tag in raw_tags:
        tag = check_length(tag.strip(), MAX_TAG_LENGTH, "Each tag")
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def parse_bool(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "y"}:
        return True
    if text in {"0", "false", "no", "n"}:
        return False
    return None


def _positive_int(raw: Any, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


@dataclass(frozen=True)
class Pagination:
    """Page window plus the derived navigation flags for a listing."""

    page: int
    limit: int
    total: int = 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        # ceil(total / limit) without floats
        return -(-self.total // self.limit)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    def with_total(self, total: int) -> "Pagination":
        return Pagination(page=self.page, limit=self.limit, total=total)

    def to_dict(self, total_key: str = "totalPosts") -> dict:
        return {
            "currentPage": self.page,
            "totalPages": self.total_pages,
            total_key: self.total,
            "hasNextPage": self.has_next_page,
            "hasPrevPage": self.has_prev_page,
        }


def parse_pagination(raw_page: Any, raw_limit: Any, max_limit: int) -> Pagination:
    """Parse 1-indexed page/limit query values, falling back to defaults."""
    page = _positive_int(raw_page, DEFAULT_PAGE)
    limit = min(_positive_int(raw_limit, DEFAULT_LIMIT), max_limit)
    return Pagination(page=page, limit=limit)
