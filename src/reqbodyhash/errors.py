"""ReqBodyHash error hierarchy.

Nothing in the library catches these; the host (or the MCP adapter in
``reqbodyhash.server``) is responsible for surfacing them to the user.
"""

from __future__ import annotations

from typing import Any, Mapping


__all__ = [
    "ReqBodyHashError",
    "ValidationError",
    "ParseError",
    "PlaceholderDecodeError",
]


class ReqBodyHashError(Exception):
    """Base class for all reqbodyhash errors.

    An optional ``context`` mapping carries structured diagnostics
    (the offending argument, the JSONPath query, ...).
    """

    def __init__(self, *args: object, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(*args)
        self.context: Mapping[str, Any] = dict(context or {})


class ValidationError(ReqBodyHashError, ValueError):
    """A template-tag argument is invalid; the render is aborted."""


class ParseError(ReqBodyHashError, ValueError):
    """Content could not be parsed as JSON, or a JSONPath query failed."""


class PlaceholderDecodeError(ParseError):
    """A placeholder payload is not valid hex-encoded HashOptions JSON."""
