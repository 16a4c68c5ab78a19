"""Shared fixtures for reqbodyhash tests."""

from __future__ import annotations

import hashlib
from typing import Any

import pytest

from reqbodyhash.config import ReqBodyHashConfig, set_config
from reqbodyhash.host.request import InMemoryRequest
from reqbodyhash.models import HashOptions, RequestField


class RecordingRequest(InMemoryRequest):
    """InMemoryRequest that records every mutator call."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def set_body(self, body: dict[str, Any]) -> None:
        self.calls.append(("set_body", (body,)))
        super().set_body(body)

    def set_url(self, url: str) -> None:
        self.calls.append(("set_url", (url,)))
        super().set_url(url)

    def set_header(self, name: str, value: str) -> None:
        self.calls.append(("set_header", (name, value)))
        super().set_header(name, value)

    def set_parameter(self, name: str, value: str) -> None:
        self.calls.append(("set_parameter", (name, value)))
        super().set_parameter(name, value)

    def header(self, name: str) -> str:
        return next(h.value for h in self.get_headers() if h.name == name)

    def parameter(self, name: str) -> str:
        return next(p.value for p in self.get_parameters() if p.name == name)


def hexdigest(algorithm: str, text: str) -> str:
    return hashlib.new(algorithm, text.encode("utf-8")).hexdigest()


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    set_config(ReqBodyHashConfig())
    yield
    set_config(ReqBodyHashConfig())


@pytest.fixture
def sha1_hex() -> HashOptions:
    return HashOptions(algorithm="sha1", encoding="hex", prefix="", suffix="")


@pytest.fixture
def make_request():
    def _make(body: str | None = "", url: str = "", headers=None, parameters=None) -> RecordingRequest:
        return RecordingRequest(
            body={"text": body, "mimeType": "application/json"},
            url=url,
            headers=[RequestField(name=n, value=v) for n, v in (headers or {}).items()],
            parameters=[RequestField(name=n, value=v) for n, v in (parameters or {}).items()],
        )
    return _make
