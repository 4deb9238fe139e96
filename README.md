# kourier

Builders for the Envoy xDS resources that a lightweight ingress gateway needs.
Each builder returns a plain dictionary in JSON form. Durations are written as
protobuf JSON strings such as `"5s"`, and typed configs carry an `@type` key.
The package also reads the gateway's own configuration: config map data,
environment variables and the settings for external authorization.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Configuration

`kourier.config` holds the gateway's constants, for example
`CONTROLLER_NAME`, `HTTP_PORT_EXTERNAL`, `HTTP_PORT_INTERNAL`,
`HTTPS_PORT_EXTERNAL` and `KOURIER_INGRESS_CLASS_NAME`. It also reads
configuration.

```python
from kourier.config import config_from_map, gateway_namespace, service_hostnames

cfg = config_from_map({"enable-service-access-logging": "false"})
print(cfg.enable_service_access_logging)    # False

env = {"KOURIER_GATEWAY_NAMESPACE": "kourier-system"}
print(gateway_namespace(env))               # kourier-system
external, internal = service_hostnames(env)
# kourier.kourier-system.svc.cluster.local, kourier-internal.kourier-system.svc.cluster.local
```

- `default_config()` returns a `KourierConfig` in which service access logging is on.
- `config_from_map(data)` reads config map data. `config_from_configmap(obj)`
  reads the `"data"` entry of a config map mapping.
- A boolean that cannot be read raises `ConfigError`. The accepted spellings are
  `1/t/T/TRUE/true/True` and `0/f/F/FALSE/false/False`.
- `gateway_namespace` uses `KOURIER_GATEWAY_NAMESPACE`. If that is not set, it
  falls back to `system_namespace`, which reads `SYSTEM_NAMESPACE` and raises
  `ConfigError` when that is missing.
- `service_hostnames` uses `CLUSTER_DOMAIN`, which defaults to `cluster.local`.

Each of these functions takes an optional mapping. Without one, it reads
`os.environ`.

## External authorization

External authorization is set through `KOURIER_EXTAUTHZ_*` environment
variables:

- `KOURIER_EXTAUTHZ_HOST` is `host:port`. If it is not set or is empty, authorization is off.
- `KOURIER_EXTAUTHZ_FAILURE_MODE_ALLOW` is a boolean, default false.
- `KOURIER_EXTAUTHZ_MAX_REQUEST_BYTES`, default 8192.
- `KOURIER_EXTAUTHZ_TIMEOUT` is in milliseconds, default 2000.

```python
from kourier.ext_authz import load_external_authz

authz = load_external_authz({"KOURIER_EXTAUTHZ_HOST": "authz.example.com:6000"})
print(authz.enabled, authz.cluster["name"])   # True extAuthz
```

`load_external_authz` raises `ExtAuthzError` for a malformed address, a bad
number or boolean, or a port above 65535. `get_external_authz()` reads the
process environment once and caches the result. `ext_authz_cluster` and
`external_authz_filter` build the two resources directly.

## Building Envoy resources

```python
from datetime import timedelta

from kourier.envoy.cluster import DiscoveryType, new_cluster
from kourier.envoy.lb_endpoint import new_lb_endpoint
from kourier.envoy.weighted_cluster import new_weighted_cluster
from kourier.envoy.route import new_route
from kourier.envoy.virtual_host import new_virtual_host
from kourier.envoy.http_connection_manager import (
    new_http_connection_manager,
    new_route_config,
)

endpoints = [new_lb_endpoint("10.0.0.1", 8080)]
cluster = new_cluster("default/hello", timedelta(seconds=5), endpoints, False,
                      DiscoveryType.STATIC)

split = new_weighted_cluster("default/hello", 100, {"K-Original-Host": "hello"})
route = new_route("hello", [], "/", [split], timedelta(seconds=30), {}, "")
vhost = new_virtual_host("hello", ["hello.example.com"], [route])
route_config = new_route_config("external_services", [vhost])
manager = new_http_connection_manager("external_services", True, None)
```

- `new_cluster` adds HTTP/2 upstream protocol options when `is_http2` is true.
- `new_route` always enables websocket upgrades. It sets a host rewrite only
  when `host_rewrite` is non-empty.
- `new_redirect_route` builds a prefix route that redirects to HTTPS.
- `new_virtual_host_with_ext_authz` attaches per-route ext_authz context
  extensions.
- `new_http_connection_manager` puts the ext_authz filter before the router
  filter when authorization is enabled. If its third argument is `None`, it uses
  `get_external_authz()`. With access logging on, it logs to `/dev/stdout`.
- Header maps become header options that replace existing values (`append: False`).

## What this package does not do

It only builds resource dictionaries and reads configuration. It does not:

- run an xDS management server or a health-check probe;
- watch or reconcile ingress objects;
- build listeners or TLS settings;
- serialise resources to protobuf or send them to Envoy.