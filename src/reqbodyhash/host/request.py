"""Host request interface.

Request hooks only talk to the request through the ``HostRequest``
accessors. ``InMemoryRequest`` is the concrete implementation used by the
MCP adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from reqbodyhash.models import RequestField


class HostRequest(Protocol):
    """Accessors and mutators a host exposes for an outgoing request."""

    def get_body(self) -> dict[str, Any]: ...

    def set_body(self, body: dict[str, Any]) -> None: ...

    def get_url(self) -> str: ...

    def set_url(self, url: str) -> None: ...

    def get_headers(self) -> list[RequestField]: ...

    def set_header(self, name: str, value: str) -> None: ...

    def get_parameters(self) -> list[RequestField]: ...

    def set_parameter(self, name: str, value: str) -> None: ...


@dataclass
class HookContext:
    """What a request hook receives."""
    request: HostRequest


class InMemoryRequest:
    """A request held entirely in memory."""

    def __init__(
        self,
        body: dict[str, Any] | None = None,
        url: str = "",
        headers: list[RequestField] | None = None,
        parameters: list[RequestField] | None = None,
    ):
        self._body = dict(body or {})
        self._url = url
        self._headers = list(headers or [])
        self._parameters = list(parameters or [])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InMemoryRequest:
        """Build from ``{"body", "url", "headers", "parameters"}``; body may be plain text."""
        body = data.get("body")
        if isinstance(body, str):
            body = {"text": body}
        return cls(
            body=body,
            url=data.get("url", ""),
            headers=[RequestField.model_validate(h) for h in data.get("headers", [])],
            parameters=[RequestField.model_validate(p) for p in data.get("parameters", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "body": dict(self._body),
            "url": self._url,
            "headers": [h.model_dump() for h in self._headers],
            "parameters": [p.model_dump() for p in self._parameters],
        }

    def get_body(self) -> dict[str, Any]:
        return dict(self._body)

    def set_body(self, body: dict[str, Any]) -> None:
        self._body = dict(body)

    def get_url(self) -> str:
        return self._url

    def set_url(self, url: str) -> None:
        self._url = url

    def get_headers(self) -> list[RequestField]:
        return [h.model_copy() for h in self._headers]

    def set_header(self, name: str, value: str) -> None:
        _set_field(self._headers, name, value)

    def get_parameters(self) -> list[RequestField]:
        return [p.model_copy() for p in self._parameters]

    def set_parameter(self, name: str, value: str) -> None:
        _set_field(self._parameters, name, value)


def _set_field(fields: list[RequestField], name: str, value: str) -> None:
    """Update the first field called name, or append a new one."""
    for i, existing in enumerate(fields):
        if existing.name == name:
            fields[i] = RequestField(name=name, value=value)
            return
    fields.append(RequestField(name=name, value=value))
