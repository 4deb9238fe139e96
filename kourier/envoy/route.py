"""Route resources."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import timedelta

from kourier.envoy.headers import headers_to_add
from kourier.ext_authz import format_duration


def _match(path: str, headers_match: Iterable[dict] | None) -> dict:
    return {"prefix": path, "headers": list(headers_match or [])}


def new_route(
    name: str,
    headers_match: Iterable[dict] | None,
    path: str,
    weighted_clusters: Iterable[dict] | None,
    route_timeout: timedelta,
    headers: Mapping[str, str] | None,
    host_rewrite: str,
) -> dict:
    """Create a prefix route that splits traffic over weighted clusters."""
    action = {
        "weighted_clusters": {"clusters": list(weighted_clusters or [])},
        "timeout": format_duration(route_timeout),
        "upgrade_configs": [{"upgrade_type": "websocket", "enabled": True}],
    }
    if host_rewrite:
        action["host_rewrite_literal"] = host_rewrite

    return {
        "name": name,
        "match": _match(path, headers_match),
        "route": action,
        "request_headers_to_add": headers_to_add(headers),
    }


def new_redirect_route(
    name: str, headers_match: Iterable[dict] | None, path: str
) -> dict:
    """Create a prefix route that redirects to HTTPS."""
    return {
        "name": name,
        "match": _match(path, headers_match),
        "redirect": {"https_redirect": True},
    }