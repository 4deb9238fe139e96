"""HTTP connection manager and route configuration resources."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from kourier.ext_authz import ExternalAuthzConfig, format_duration, get_external_authz

ROUTER_FILTER_NAME = "envoy.filters.http.router"
FILE_ACCESS_LOG_NAME = "envoy.file_access_log"
_FILE_ACCESS_LOG_TYPE = "type.googleapis.com/envoy.extensions.access_loggers.file.v3.FileAccessLog"


def new_http_connection_manager(
    route_config_name: str,
    enable_access_log: bool,
    ext_authz: ExternalAuthzConfig | None = None,
) -> dict:
    """Create a connection manager that fetches ``route_config_name`` over ADS."""
    authz = get_external_authz() if ext_authz is None else ext_authz

    filters = []
    if authz.enabled:
        filters.append(authz.http_filter)
    filters.append({"name": ROUTER_FILTER_NAME})

    manager = {
        "codec_type": "AUTO",
        "stat_prefix": "ingress_http",
        "http_filters": filters,
        "rds": {
            "config_source": {
                "resource_api_version": "V3",
                "ads": {},
                "initial_fetch_timeout": format_duration(timedelta(seconds=10)),
            },
            "route_config_name": route_config_name,
        },
    }

    if enable_access_log:
        manager["access_log"] = [
            {
                "name": FILE_ACCESS_LOG_NAME,
                "typed_config": {"@type": _FILE_ACCESS_LOG_TYPE, "path": "/dev/stdout"},
            }
        ]

    return manager


def new_route_config(name: str, virtual_hosts: Iterable[dict]) -> dict:
    """Create a route configuration that validates the clusters it references."""
    return {
        "name": name,
        "virtual_hosts": list(virtual_hosts),
        "validate_clusters": True,
    }