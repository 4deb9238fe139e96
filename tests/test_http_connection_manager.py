from kourier.envoy.http_connection_manager import (
    new_http_connection_manager,
    new_route_config,
)
from kourier.envoy.virtual_host import new_virtual_host
from kourier.ext_authz import ExternalAuthzConfig

DISABLED = ExternalAuthzConfig(enabled=False)


def test_without_access_log():
    manager = new_http_connection_manager("test", False, DISABLED)
    assert len(manager.get("access_log", [])) == 0


def test_with_access_log():
    manager = new_http_connection_manager("test", True, DISABLED)
    access_log = manager["access_log"][0]
    assert access_log["typed_config"]["path"] == "/dev/stdout"
    assert access_log["name"] == "envoy.file_access_log"


def test_route_config_name_and_router_filter():
    manager = new_http_connection_manager("my-routes", False, DISABLED)
    assert manager["rds"]["route_config_name"] == "my-routes"
    assert manager["rds"]["config_source"]["initial_fetch_timeout"] == "10s"
    assert manager["http_filters"] == [{"name": "envoy.filters.http.router"}]
    assert manager["stat_prefix"] == "ingress_http"


def test_ext_authz_filter_comes_before_router():
    authz_filter = {"name": "envoy.filters.http.ext_authz"}
    authz = ExternalAuthzConfig(enabled=True, cluster={}, http_filter=authz_filter)
    manager = new_http_connection_manager("test", False, authz)
    assert manager["http_filters"] == [authz_filter, {"name": "envoy.filters.http.router"}]


def test_new_route_config():
    vhost = new_virtual_host("test", ["foo", "bar"], [{"name": "baz"}])
    got = new_route_config("test", [vhost])
    assert got == {
        "name": "test",
        "virtual_hosts": [vhost],
        "validate_clusters": True,
    }