"""Request path sanitising for logs and metric labels."""

from __future__ import annotations

from urllib.parse import quote_plus


def sanitize_path(path: str) -> str:
    """Query-escape a path, keeping ``/``, and drop control characters."""
    escaped = quote_plus(path, safe="/")
    return "".join(ch for ch in escaped if 32 <= ord(ch) != 127)
