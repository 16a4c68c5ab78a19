"""Tests for the in-memory host request."""

from __future__ import annotations

from reqbodyhash.host.request import InMemoryRequest
from reqbodyhash.models import RequestField


def test_from_dict_accepts_plain_text_body():
    request = InMemoryRequest.from_dict({
        "body": "hello",
        "url": "https://example.com",
        "headers": [{"name": "A", "value": "1"}],
    })
    assert request.get_body() == {"text": "hello"}
    assert request.get_url() == "https://example.com"
    assert request.get_headers() == [RequestField(name="A", value="1")]
    assert request.get_parameters() == []


def test_set_header_updates_first_match_only():
    request = InMemoryRequest(headers=[
        RequestField(name="A", value="1"),
        RequestField(name="A", value="2"),
    ])
    request.set_header("A", "x")
    assert [h.value for h in request.get_headers()] == ["x", "2"]


def test_set_parameter_appends_unknown_name():
    request = InMemoryRequest()
    request.set_parameter("p", "v")
    assert request.get_parameters() == [RequestField(name="p", value="v")]


def test_getters_return_copies():
    request = InMemoryRequest(body={"text": "a"}, headers=[RequestField(name="A", value="1")])
    request.get_body()["text"] = "changed"
    request.get_headers()[0].value = "changed"
    assert request.to_dict() == {
        "body": {"text": "a"},
        "url": "",
        "headers": [{"name": "A", "value": "1"}],
        "parameters": [],
    }
