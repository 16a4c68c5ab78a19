"""Placeholder grammar and codec.

A placeholder is the marker text, a single space, and the hex-encoded
compact JSON of a HashOptions in parentheses::

    Will be replaced with HASH of request body (7b22616c676f...7d)

All hashing parameters travel inside the placeholder itself, so resolving
one needs nothing but the text and the finalized request body.
"""

from __future__ import annotations

import re

from pydantic import ValidationError as PydanticValidationError

from reqbodyhash.errors import PlaceholderDecodeError
from reqbodyhash.models import HashOptions
from reqbodyhash.utils.hashing import compute_digest


MARKER_TEXT = "Will be replaced with HASH of request body"

PLACEHOLDER_PATTERN = re.compile(re.escape(MARKER_TEXT) + r" \(([a-f0-9]+)\)")


def encode_placeholder(options: HashOptions) -> str:
    """Render options as a placeholder string."""
    payload = options.to_wire_json().encode("utf-8").hex()
    return f"{MARKER_TEXT} ({payload})"


def decode_payload(payload: str) -> HashOptions:
    """Recover HashOptions from the hex capture of a placeholder."""
    try:
        text = bytes.fromhex(payload).decode("utf-8")
    except ValueError as e:
        raise PlaceholderDecodeError(
            f"Malformed placeholder payload: {e}", context={"payload": payload}
        ) from e

    try:
        return HashOptions.model_validate_json(text)
    except PydanticValidationError as e:
        raise PlaceholderDecodeError(
            f"Placeholder payload is not valid hash options: {e}",
            context={"payload": text},
        ) from e


def contains_placeholder(content: str) -> bool:
    return MARKER_TEXT in content


def replace_placeholders(content: str, body_text: str) -> tuple[str, int]:
    """Substitute every placeholder in content with the digest of body_text.

    Each placeholder carries its own options. Returns the new content and
    the number of substitutions made.
    """
    return PLACEHOLDER_PATTERN.subn(
        lambda match: compute_digest(body_text, decode_payload(match.group(1))),
        content,
    )
