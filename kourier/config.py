"""Controller constants and the ``config-kourier`` settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

CONTROLLER_NAME = "net-kourier-controller"

INTERNAL_SERVICE_NAME = "kourier-internal"
EXTERNAL_SERVICE_NAME = "kourier"

HTTP_PORT_EXTERNAL = 8080
HTTP_PORT_INTERNAL = 8081
HTTPS_PORT_EXTERNAL = 8443

INTERNAL_KOURIER_DOMAIN = "internalkourier"

GATEWAY_NAMESPACE_ENV = "KOURIER_GATEWAY_NAMESPACE"
SYSTEM_NAMESPACE_ENV = "SYSTEM_NAMESPACE"
CLUSTER_DOMAIN_ENV = "CLUSTER_DOMAIN"
DEFAULT_CLUSTER_DOMAIN = "cluster.local"

KOURIER_INGRESS_CLASS_NAME = "kourier.ingress.networking.knative.dev"

CONFIG_NAME = "config-kourier"
ENABLE_SERVICE_ACCESS_LOGGING_KEY = "enable-service-access-logging"

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ConfigError(ValueError):
    """Raised when configuration is missing or malformed."""


@dataclass(frozen=True)
class KourierConfig:
    """Settings read from the Kourier config map."""

    enable_service_access_logging: bool = True


def parse_bool(raw: str) -> bool:
    """Parse a boolean using the accepted true/false spellings."""
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    raise ConfigError(f"invalid boolean value {raw!r}")


def default_config() -> KourierConfig:
    """Return the default configuration (access logging enabled)."""
    return KourierConfig(enable_service_access_logging=True)


def config_from_map(data: Mapping[str, str] | None) -> KourierConfig:
    """Build a configuration from config map data."""
    data = data or {}
    defaults = default_config()
    raw = data.get(ENABLE_SERVICE_ACCESS_LOGGING_KEY)
    if raw is None:
        return defaults
    try:
        enabled = parse_bool(raw)
    except ConfigError as exc:
        raise ConfigError(
            f"failed to parse {ENABLE_SERVICE_ACCESS_LOGGING_KEY!r}: {exc}"
        ) from exc
    return KourierConfig(enable_service_access_logging=enabled)


def config_from_configmap(config_map: Mapping) -> KourierConfig:
    """Build a configuration from a config map object with a ``data`` field."""
    return config_from_map(config_map.get("data"))


def _env(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def system_namespace(environ: Mapping[str, str] | None = None) -> str:
    """Return the namespace the system components run in."""
    namespace = _env(environ).get(SYSTEM_NAMESPACE_ENV, "")
    if not namespace:
        raise ConfigError(
            f"the environment variable {SYSTEM_NAMESPACE_ENV!r} is not set"
        )
    return namespace


def gateway_namespace(environ: Mapping[str, str] | None = None) -> str:
    """Return the namespace where the gateway is deployed."""
    env = _env(environ)
    namespace = env.get(GATEWAY_NAMESPACE_ENV, "")
    return namespace or system_namespace(env)


def _service_hostname(name: str, namespace: str, env: Mapping[str, str]) -> str:
    domain = env.get(CLUSTER_DOMAIN_ENV, "") or DEFAULT_CLUSTER_DOMAIN
    return f"{name}.{namespace}.svc.{domain}"


def service_hostnames(environ: Mapping[str, str] | None = None) -> tuple[str, str]:
    """Return the external and internal service hostnames."""
    env = _env(environ)
    namespace = gateway_namespace(env)
    return (
        _service_hostname(EXTERNAL_SERVICE_NAME, namespace, env),
        _service_hostname(INTERNAL_SERVICE_NAME, namespace, env),
    )