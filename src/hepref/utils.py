"""Small helpers shared by the HTTP-facing services."""

from __future__ import annotations


def media_type(content_type: str | None) -> str:
    """Return the bare media type of a Content-Type header value."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def describe_content_type(content_type: str | None) -> str:
    return content_type if content_type else "<missing>"
