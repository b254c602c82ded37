from unittest.mock import MagicMock

import pytest
import requests

from syringe.errors import ConfigurationError
from syringe.fetcher import Resource, ResourceFetcher


def make_response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    responses = {
        "/syringe/fetch1": make_response({"foo": "bar"}),
        "/syringe/list": make_response([1, 2, 3]),
        "/syringe/missing": make_response(status_error=requests.HTTPError("404 Not Found")),
        "/syringe/garbage": make_response(json_error=ValueError("not json")),
    }
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = lambda url, timeout: responses[url]
    return session


@pytest.fixture
def fetcher(session):
    return ResourceFetcher(session=session, timeout=2.5, max_workers=2)


def test_fetch_and_bind_an_item(make_registry, fetcher, session):
    registry = make_registry()
    callback = MagicMock()

    failed = registry.fetch(
        [
            {"path": "/syringe/missing", "bind": "data2"},
            {"path": "/syringe/fetch1", "bind": "data1"},
        ],
        callback,
        fetcher,
    )

    callback.assert_called_once_with(registry)
    assert registry.get("data1.foo") == "bar"
    assert registry.get("data2") is False
    assert failed == [Resource("/syringe/missing", "data2")]
    session.get.assert_any_call("/syringe/fetch1", timeout=2.5)


def test_object_response_merges_into_existing_mapping(make_registry, fetcher):
    registry = make_registry({"data": {"foo": "old", "keep": True}})

    fetcher.fetch(registry, [Resource("/syringe/fetch1", "data")])

    assert registry.get("data") == {"foo": "bar", "keep": True}


def test_array_response_is_nested_under_json_key(make_registry, fetcher):
    registry = make_registry({"data": {"keep": True}})

    fetcher.fetch(registry, [Resource("/syringe/list", "data")])

    assert registry.get("data") == {"keep": True, "json": [1, 2, 3]}


def test_response_replaces_existing_scalar(make_registry, fetcher):
    registry = make_registry({"data": "placeholder"})

    fetcher.fetch(registry, [Resource("/syringe/list", "data")])

    assert registry.get("data") == [1, 2, 3]


def test_invalid_json_is_reported_as_failure(make_registry, fetcher):
    registry = make_registry()

    failed = fetcher.fetch(registry, [Resource("/syringe/garbage", "data")])

    assert failed == [Resource("/syringe/garbage", "data")]
    assert "data" not in registry


def test_callback_runs_even_without_resources(make_registry, fetcher):
    registry = make_registry()
    callback = MagicMock()

    assert fetcher.fetch(registry, [], callback) == []
    callback.assert_called_once_with(registry)


def test_malformed_resource_raises(make_registry, fetcher):
    with pytest.raises(ConfigurationError, match="'path' and 'bind'"):
        fetcher.fetch(make_registry(), [{"path": "/syringe/fetch1"}])


def test_unstorable_result_is_reported_as_failure(make_registry, fetcher):
    registry = make_registry({"data": "scalar"})
    callback = MagicMock()

    failed = fetcher.fetch(
        registry,
        [Resource("/syringe/fetch1", "data.nested"), Resource("/syringe/list", "other")],
        callback,
    )

    assert failed == [Resource("/syringe/fetch1", "data.nested")]
    assert registry.get("data") == "scalar"
    assert registry.get("other") == [1, 2, 3]
    callback.assert_called_once_with(registry)


def test_callback_runs_when_a_listener_raises(make_registry, fetcher):
    registry = make_registry()
    registry.listen("add", MagicMock(side_effect=RuntimeError("boom")))
    callback = MagicMock()

    with pytest.raises(RuntimeError, match="boom"):
        fetcher.fetch(registry, [Resource("/syringe/fetch1", "data")], callback)

    callback.assert_called_once_with(registry)
