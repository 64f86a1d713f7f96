"""Tests for the pure input validators."""

from __future__ import annotations

import re

import pytest

from utils.errors import ValidationError
from utils.validators import (
    MAX_TAG_LENGTH,
    check_length,
    clean_tags,
    generate_slug,
    is_valid_email,
    normalize_email,
    parse_bool,
    parse_pagination,
    validate_new_password,
)


@pytest.mark.parametrize(
    "title, slug",
    [
        ("Hello, World!", "hello-world"),
        ("  Leading and trailing  ", "leading-and-trailing"),
        ("Multiple --- separators___here", "multiple-separators-here"),
        ("Café au lait", "caf-au-lait"),
        ("2024: A Year in Review", "2024-a-year-in-review"),
        ("!!!", ""),
    ],
)
def test_generate_slug(title, slug):
    assert generate_slug(title) == slug


@pytest.mark.parametrize("title", ["Hello, World!", "--a--b--", "Ünïcode & Spaces  "])
def test_slug_shape_and_idempotence(title):
    slug = generate_slug(title)
    assert slug == generate_slug(title)
    assert generate_slug(slug) == slug
    assert re.fullmatch(r"[a-z0-9]+(-[a-z0-9]+)*", slug)


def test_normalize_and_validate_email():
    assert normalize_email("  Ada@Example.COM ") == "ada@example.com"
    assert normalize_email(None) == ""
    assert is_valid_email("ada@example.com")
    assert not is_valid_email("not-an-email")


def test_validate_new_password_length():
    validate_new_password("123456")
    with pytest.raises(ValidationError):
        validate_new_password("12345")


def test_clean_tags_trims_and_deduplicates():
    assert clean_tags(None) == []
    assert clean_tags([" python ", "flask", "python", ""]) == ["python", "flask"]
    with pytest.raises(ValidationError):
        clean_tags("python")
    with pytest.raises(ValidationError):
        clean_tags(["ok", 3])
    with pytest.raises(ValidationError, match="at most 64"):
        clean_tags(["x" * (MAX_TAG_LENGTH + 1)])
    assert clean_tags(["  " + "x" * MAX_TAG_LENGTH + "  "]) == ["x" * MAX_TAG_LENGTH]


def test_check_length():
    assert check_length("abc", 3, "Title") == "abc"
    with pytest.raises(ValidationError, match="Title must be at most 3 characters"):
        check_length("abcd", 3, "Title")


def test_parse_bool():
    assert parse_bool(True) is True
    assert parse_bool("yes") is True
    assert parse_bool("0") is False
    assert parse_bool("maybe") is None
    assert parse_bool(None) is None


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("3", "5", (3, 5)),
        ("abc", "-2", (1, 10)),
        ("0", "0", (1, 10)),
        ("2", "500", (2, 100)),
    ],
)
def test_parse_pagination_defaults_and_cap(page, limit, expected):
    pagination = parse_pagination(page, limit, max_limit=100)
    assert (pagination.page, pagination.limit) == expected


@pytest.mark.parametrize(
    "page, limit, total, total_pages, has_next, has_prev",
    [
        (1, 10, 0, 0, False, False),
        (1, 10, 10, 1, False, False),
        (1, 10, 11, 2, True, False),
        (2, 10, 11, 2, False, True),
        (3, 4, 20, 5, True, True),
    ],
)
def test_pagination_math(page, limit, total, total_pages, has_next, has_prev):
    pagination = parse_pagination(page, limit, max_limit=100).with_total(total)
    assert pagination.offset == (page - 1) * limit
    assert pagination.to_dict() == {
        "currentPage": page,
        "totalPages": total_pages,
        "totalPosts": total,
        "hasNextPage": has_next,
        "hasPrevPage": has_prev,
    }
