"""External authorization cluster and HTTP filter configuration."""

from __future__ import annotations

import functools
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from kourier.config import ConfigError, parse_bool
from kourier.envoy.lb_endpoint import new_lb_endpoint

EXT_AUTHZ_CLUSTER_NAME = "extAuthz"
HTTP_EXTERNAL_AUTHORIZATION = "envoy.filters.http.ext_authz"
HTTP_PROTOCOL_OPTIONS_KEY = "envoy.extensions.upstreams.http.v3.HttpProtocolOptions"
UNIX_MAX_PORT = 65535

ENV_PREFIX = "KOURIER_EXTAUTHZ"
DEFAULT_MAX_REQUEST_BYTES = 8192
DEFAULT_TIMEOUT_MS = 2000

_TYPE_PREFIX = "type.googleapis.com/"
_UINT32_MAX = 2**32 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


class ExtAuthzError(ValueError):
    """Raised when the external authorization settings are invalid."""


@dataclass(frozen=True)
class ExternalAuthzConfig:
    """External authorization state: whether it is on, and its Envoy resources."""

    enabled: bool = False
    cluster: dict | None = None
    http_filter: dict | None = None


def format_duration(value: timedelta) -> str:
    """Render a duration in the protobuf JSON form, e.g. ``"5s"``."""
    micros = value // timedelta(microseconds=1)
    sign = "-" if micros < 0 else ""
    seconds, rest = divmod(abs(micros), 1_000_000)
    if rest == 0:
        return f"{sign}{seconds}s"
    if rest % 1000 == 0:
        return f"{sign}{seconds}.{rest // 1000:03d}s"
    return f"{sign}{seconds}.{rest:06d}s"


def _http2_protocol_options() -> dict:
    return {
        "@type": _TYPE_PREFIX + HTTP_PROTOCOL_OPTIONS_KEY,
        "explicit_http_config": {"http2_protocol_options": {}},
    }


def ext_authz_cluster(host: str, port: int) -> dict:
    """Build the strict-DNS HTTP/2 cluster for the authorization service."""
    return {
        "name": EXT_AUTHZ_CLUSTER_NAME,
        "type": "STRICT_DNS",
        "typed_extension_protocol_options": {
            HTTP_PROTOCOL_OPTIONS_KEY: _http2_protocol_options(),
        },
        "connect_timeout": format_duration(timedelta(seconds=5)),
        "load_assignment": {
            "cluster_name": EXT_AUTHZ_CLUSTER_NAME,
            "endpoints": [{"lb_endpoints": [new_lb_endpoint(host, port)]}],
        },
    }


def external_authz_filter(
    cluster_name: str,
    timeout: timedelta,
    failure_mode_allow: bool,
    max_request_bytes: int,
) -> dict:
    """Build the ext_authz HTTP filter that talks gRPC to ``cluster_name``."""
    return {
        "name": HTTP_EXTERNAL_AUTHORIZATION,
        "typed_config": {
            "@type": _TYPE_PREFIX + "envoy.extensions.filters.http.ext_authz.v3.ExtAuthz",
            "grpc_service": {
                "envoy_grpc": {"cluster_name": cluster_name},
                "timeout": format_duration(timeout),
                "initial_metadata": [{"key": "client", "value": "kourier"}],
            },
            "transport_api_version": "V3",
            "failure_mode_allow": failure_mode_allow,
            "with_request_body": {
                "max_request_bytes": max_request_bytes,
                "allow_partial_message": True,
            },
            "clear_route_cache": False,
        },
    }


def _split_host_port(hostport: str) -> tuple[str, str]:
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ExtAuthzError(f"address {hostport}: missing ']' in address")
        rest = hostport[end + 1:]
        if not rest.startswith(":"):
            raise ExtAuthzError(f"address {hostport}: missing port in address")
        host, port = hostport[1:end], rest[1:]
        if ":" in port:
            raise ExtAuthzError(f"address {hostport}: too many colons in address")
        return host, port
    host, sep, port = hostport.rpartition(":")
    if not sep:
        raise ExtAuthzError(f"address {hostport}: missing port in address")
    if ":" in host:
        raise ExtAuthzError(f"address {hostport}: too many colons in address")
    if "[" in host or "]" in host or "[" in port or "]" in port:
        raise ExtAuthzError(f"address {hostport}: unexpected bracket in address")
    return host, port


def _parse_int(raw: str, low: int, high: int, what: str) -> int:
    text = raw.lstrip("+-")
    negative = raw.startswith("-")
    try:
        if text[:2].lower() in ("0x", "0o", "0b"):
            value = int(text, 0)
        elif len(text) > 1 and text.startswith("0"):
            value = int(text, 8)
        else:
            value = int(text, 10)
    except ValueError as exc:
        raise ExtAuthzError(f"invalid {what} {raw!r}") from exc
    if raw[:1] in "+-" and raw[1:2] in "+-":
        raise ExtAuthzError(f"invalid {what} {raw!r}")
    value = -value if negative else value
    if not low <= value <= high:
        raise ExtAuthzError(f"{what} {raw!r} out of range")
    return value


def load_external_authz(environ: Mapping[str, str] | None = None) -> ExternalAuthzConfig:
    """Read ``KOURIER_EXTAUTHZ_*`` settings and build the configuration."""
    env = os.environ if environ is None else environ
    if not env.get(f"{ENV_PREFIX}_HOST", ""):
        return ExternalAuthzConfig(enabled=False)

    address = env[f"{ENV_PREFIX}_HOST"]

    failure_raw = env.get(f"{ENV_PREFIX}_FAILURE_MODE_ALLOW")
    try:
        failure_mode_allow = False if failure_raw is None else parse_bool(failure_raw)
    except ConfigError as exc:
        raise ExtAuthzError(f"invalid {ENV_PREFIX}_FAILURE_MODE_ALLOW: {exc}") from exc

    max_raw = env.get(f"{ENV_PREFIX}_MAX_REQUEST_BYTES")
    max_request_bytes = (
        DEFAULT_MAX_REQUEST_BYTES
        if max_raw is None
        else _parse_int(max_raw, 0, _UINT32_MAX, f"{ENV_PREFIX}_MAX_REQUEST_BYTES")
    )

    timeout_raw = env.get(f"{ENV_PREFIX}_TIMEOUT")
    timeout_ms = (
        DEFAULT_TIMEOUT_MS
        if timeout_raw is None
        else _parse_int(timeout_raw, _INT64_MIN, _INT64_MAX, f"{ENV_PREFIX}_TIMEOUT")
    )

    host, port_text = _split_host_port(address)
    try:
        port = int(port_text, 10)
    except ValueError as exc:
        raise ExtAuthzError(f"invalid port {port_text!r}") from exc
    if port > UNIX_MAX_PORT:
        raise ExtAuthzError(f"port {port} bigger than {UNIX_MAX_PORT}")
    if port < 0:
        raise ExtAuthzError(f"port {port} is negative")

    return ExternalAuthzConfig(
        enabled=True,
        cluster=ext_authz_cluster(host, port),
        http_filter=external_authz_filter(
            EXT_AUTHZ_CLUSTER_NAME,
            timedelta(milliseconds=timeout_ms),
            failure_mode_allow,
            max_request_bytes,
        ),
    )


@functools.lru_cache(maxsize=None)
def get_external_authz() -> ExternalAuthzConfig:
    """Return the process-wide configuration, read once from the environment."""
    return load_external_authz(os.environ)