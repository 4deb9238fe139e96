"""Request header options for routes and weighted clusters."""

from __future__ import annotations

from collections.abc import Mapping


def headers_to_add(headers: Mapping[str, str] | None) -> list[dict]:
    """Turn a header map into header value options that replace existing values."""
    if not headers:
        return []
    return [
        {"header": {"key": name, "value": value}, "append": False}
        for name, value in headers.items()
    ]