"""Virtual host resources."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from kourier.ext_authz import HTTP_EXTERNAL_AUTHORIZATION

_EXT_AUTHZ_PER_ROUTE_TYPE = (
    "type.googleapis.com/envoy.extensions.filters.http.ext_authz.v3.ExtAuthzPerRoute"
)


def new_virtual_host(name: str, domains: Iterable[str], routes: Iterable[dict]) -> dict:
    """Create a virtual host serving ``domains`` with ``routes``."""
    return {"name": name, "domains": list(domains), "routes": list(routes)}


def new_virtual_host_with_ext_authz(
    name: str,
    context_extensions: Mapping[str, str] | None,
    domains: Iterable[str],
    routes: Iterable[dict],
) -> dict:
    """Create a virtual host whose ext_authz checks carry ``context_extensions``."""
    host = new_virtual_host(name, domains, routes)
    host["typed_per_filter_config"] = {
        HTTP_EXTERNAL_AUTHORIZATION: {
            "@type": _EXT_AUTHZ_PER_ROUTE_TYPE,
            "check_settings": {"context_extensions": dict(context_extensions or {})},
        }
    }
    return host