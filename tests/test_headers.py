import pytest

from kourier.envoy.headers import headers_to_add


@pytest.mark.parametrize("headers", [None, {}], ids=["nil", "empty"])
def test_no_headers(headers):
    assert headers_to_add(headers) == []


def test_some_headers():
    got = headers_to_add({"foo": "bar", "baz": "lol"})
    want = [
        {"header": {"key": "foo", "value": "bar"}, "append": False},
        {"header": {"key": "baz", "value": "lol"}, "append": False},
    ]
    key = lambda option: option["header"]["key"]  # noqa: E731
    assert sorted(got, key=key) == sorted(want, key=key)