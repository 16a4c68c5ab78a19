"""Digest transform: content + HashOptions -> encoded hash string.

Canonical JSON is the ECMAScript ``JSON.stringify`` form: array-index keys
first in numeric order, numbers in ``Number#toString`` notation, lone
surrogates escaped as ``\\uXXXX``.
"""

from __future__ import annotations

import base64
import hashlib
import json
import math
import re
import sys
from decimal import Decimal
from typing import Any

from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as parse_jsonpath

from reqbodyhash.errors import ParseError
from reqbodyhash.models import DigestEncoding, HashOptions


ARRAY_INDEX_PATTERN = re.compile(r"0|[1-9][0-9]*")
MAX_ARRAY_INDEX = 2**32 - 2
MAX_SAFE_INTEGER = 2**53
LONE_SURROGATE_PATTERN = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name}")


def _is_array_index(key: str) -> bool:
    return (
        len(key) <= 10
        and ARRAY_INDEX_PATTERN.fullmatch(key) is not None
        and int(key) <= MAX_ARRAY_INDEX
    )


def _js_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Build an object with JavaScript's own-key order."""
    obj = dict(pairs)
    indices = sorted((key for key in obj if _is_array_index(key)), key=int)
    if not indices:
        return obj

    ordered = {key: obj[key] for key in indices}
    ordered.update((key, value) for key, value in obj.items() if key not in ordered)
    return ordered


def load_json(content: str) -> Any:
    """Parse strict JSON (NaN/Infinity rejected)."""
    try:
        return json.loads(content, parse_constant=_reject_constant, object_pairs_hook=_js_object)
    except ValueError as e:
        raise ParseError(f"Content is not valid JSON: {e}") from e


def _js_string(text: str) -> str:
    quoted = json.dumps(text, ensure_ascii=False)
    return LONE_SURROGATE_PATTERN.sub(lambda m: f"\\u{ord(m.group()):04x}", quoted)


def _js_number(value: int | float) -> str:
    """Format a number the way Number.prototype.toString does."""
    if isinstance(value, int):
        if abs(value) <= MAX_SAFE_INTEGER:
            return str(value)
        if abs(value) > sys.float_info.max:
            return "null"
        value = float(value)

    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return sign + text


def canonical_json(value: Any) -> str:
    """Serialize without insignificant whitespace, keeping key order."""
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return _js_number(value)
    if isinstance(value, str):
        return _js_string(value)
    if isinstance(value, list):
        return "[" + ",".join(canonical_json(item) for item in value) + "]"
    if isinstance(value, dict):
        members = (f"{_js_string(key)}:{canonical_json(item)}" for key, item in value.items())
        return "{" + ",".join(members) + "}"
    raise TypeError(f"Cannot serialize {type(value).__name__} as JSON")


def select_json_path(document: Any, query: str) -> Any:
    """Evaluate a JSONPath query with unwrapped results.

    A single match is returned as-is, several matches as a list.
    """
    try:
        expression = parse_jsonpath(query)
    except JSONPathError as e:
        raise ParseError(
            f"Invalid JSONPath {query!r}: {e}", context={"json_path": query}
        ) from e

    matches = [match.value for match in expression.find(document)]
    if not matches:
        raise ParseError(
            f"JSONPath {query!r} did not match anything", context={"json_path": query}
        )
    if len(matches) == 1:
        return matches[0]
    return matches


def encode_digest(digest: bytes, encoding: DigestEncoding) -> str:
    if encoding == DigestEncoding.BASE64:
        return base64.b64encode(digest).decode("ascii")
    return digest.hex()


def compute_digest(raw_content: str, options: HashOptions) -> str:
    """Hash content according to options.

    Steps, in order:
    1. jsonPath: parse JSON, select the sub-value, re-serialize canonically
    2. otherwise removeWhitespace: parse JSON and re-serialize canonically
    3. prepend prefix, append suffix
    4. hash the UTF-8 bytes and encode the digest

    Raises ParseError when JSON processing is requested on malformed content.
    """
    content = raw_content

    if options.json_path:
        content = canonical_json(select_json_path(load_json(content), options.json_path))
    elif options.remove_whitespace:
        content = canonical_json(load_json(content))

    if options.prefix is not None:
        content = options.prefix + content
    if options.suffix is not None:
        content = content + options.suffix

    digest = hashlib.new(options.algorithm.value, content.encode("utf-8")).digest()
    return encode_digest(digest, options.encoding)
