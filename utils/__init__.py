"""Shared request, validation, and authentication helpers."""
