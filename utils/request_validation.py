"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from flask import Request

from utils.errors import ValidationError


def parse_json_request(req: Request, *, allow_empty: bool = False) -> dict:
    """Return the parsed JSON object body or raise a ``ValidationError``.

    Partial updates pass ``allow_empty=True`` so that ``{}`` is a no-op
    rather than an error.
    """

    if not req.is_json:
        raise ValidationError("Request content type must be application/json.")

    data = req.get_json(silent=False)
    if data is None:
        raise ValidationError("Request JSON body is required.")

    if not isinstance(data, dict):
        raise ValidationError("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise ValidationError("Request JSON body must not be empty.")

    return data
