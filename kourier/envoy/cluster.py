"""Upstream cluster resources."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from datetime import timedelta

from kourier.ext_authz import HTTP_PROTOCOL_OPTIONS_KEY, format_duration

_TYPE_PREFIX = "type.googleapis.com/"


class DiscoveryType(enum.Enum):
    """How Envoy discovers the members of a cluster."""

    STATIC = "STATIC"
    STRICT_DNS = "STRICT_DNS"
    LOGICAL_DNS = "LOGICAL_DNS"
    EDS = "EDS"
    ORIGINAL_DST = "ORIGINAL_DST"


def new_cluster(
    name: str,
    connect_timeout: timedelta,
    endpoints: Iterable[dict],
    is_http2: bool,
    discovery_type: DiscoveryType | str,
) -> dict:
    """Create a cluster with the given endpoints, optionally speaking HTTP/2 upstream."""
    cluster = {
        "name": name,
        "type": DiscoveryType(discovery_type).value,
        "connect_timeout": format_duration(connect_timeout),
        "load_assignment": {
            "cluster_name": name,
            "endpoints": [{"lb_endpoints": list(endpoints)}],
        },
    }

    if is_http2:
        cluster["typed_extension_protocol_options"] = {
            HTTP_PROTOCOL_OPTIONS_KEY: {
                "@type": _TYPE_PREFIX + HTTP_PROTOCOL_OPTIONS_KEY,
                "explicit_http_config": {"http2_protocol_options": {}},
            }
        }

    return cluster