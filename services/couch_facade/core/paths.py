"""
Upstream path composition.

Path parameters are escaped as single URL segments while they are joined,
so a value is never reinterpreted as path structure by the upstream.
"""

from urllib.parse import quote

from .exceptions import InvalidPathSegmentError

# quote() leaves "." unescaped; bare dot segments would be removed on URL join.
DOT_SEGMENTS = {".": "%2E", "..": "%2E%2E"}


def escape_segment(value: str) -> str:
    """Percent-escape one path segment, including any '/' it contains."""
    if value in DOT_SEGMENTS:
        return DOT_SEGMENTS[value]
    return quote(value, safe="")


def compose_path(**segments: str) -> str:
    """
    Join named path parameters into an upstream path relative to the base address.

    Args:
        **segments: path parameters in path order (dbname, docid, attname)

    Returns:
        e.g. "orders/123e4567/photo.png"

    Raises:
        InvalidPathSegmentError: a segment is empty
    """
    escaped = []
    for name, value in segments.items():
        if not value:
            raise InvalidPathSegmentError(name)
        escaped.append(escape_segment(value))
    return "/".join(escaped)
