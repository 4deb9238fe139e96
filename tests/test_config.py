import pytest

from kourier.config import (
    ConfigError,
    KourierConfig,
    config_from_configmap,
    config_from_map,
    default_config,
    gateway_namespace,
    service_hostnames,
    system_namespace,
)

KEY = "enable-service-access-logging"


@pytest.mark.parametrize(
    "data, want",
    [
        ({}, default_config()),
        ({KEY: "false"}, KourierConfig(enable_service_access_logging=False)),
    ],
    ids=["default configuration", "disable logging"],
)
def test_kourier_config(data, want):
    from_cm = config_from_configmap({"data": data})
    assert from_cm == want
    assert config_from_map(data) == from_cm


def test_not_a_bool_for_logging():
    with pytest.raises(ConfigError):
        config_from_configmap({"data": {KEY: "foo"}})
    with pytest.raises(ConfigError):
        config_from_map({KEY: "foo"})


def test_default_enables_logging():
    assert default_config().enable_service_access_logging is True


def test_configmap_without_data_gives_default():
    assert config_from_configmap({}) == default_config()


def test_system_namespace_required():
    with pytest.raises(ConfigError):
        system_namespace({})
    assert system_namespace({"SYSTEM_NAMESPACE": "knative-serving"}) == "knative-serving"


def test_gateway_namespace_prefers_env():
    env = {"SYSTEM_NAMESPACE": "knative-serving", "KOURIER_GATEWAY_NAMESPACE": "kourier-system"}
    assert gateway_namespace(env) == "kourier-system"
    assert gateway_namespace({"SYSTEM_NAMESPACE": "knative-serving"}) == "knative-serving"


def test_service_hostnames():
    env = {"KOURIER_GATEWAY_NAMESPACE": "kourier-system"}
    external, internal = service_hostnames(env)
    assert external == "kourier.kourier-system.svc.cluster.local"
    assert internal.startswith("kourier-internal.kourier-system.svc.")