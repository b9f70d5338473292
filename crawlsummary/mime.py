"""Mime type clean-up so "text/html; charset=UTF-8" and "TEXT/HTML" land in the same bucket."""

from typing import Optional

UNKNOWN_MIME = "unknown"


def canonicalize_mime_type(mime_type: Optional[str]) -> str:
    """Lower-case, drop parameters. Missing values become "unknown"."""
    if not mime_type or mime_type == "-":
        return UNKNOWN_MIME
    base = mime_type.split(";", 1)[0].strip().lower()
    return base or UNKNOWN_MIME
