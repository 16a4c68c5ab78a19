"""Tests for the request hook that resolves body-hash placeholders."""

from __future__ import annotations

import pytest

from reqbodyhash import request_hooks
from reqbodyhash.errors import ParseError, PlaceholderDecodeError
from reqbodyhash.hooks.resolver import resolve_request_hashes
from reqbodyhash.host.request import HookContext
from reqbodyhash.models import HashOptions
from reqbodyhash.placeholder.codec import MARKER_TEXT, encode_placeholder
from reqbodyhash.tags.encoder import run_tag
from reqbodyhash.utils.hashing import compute_digest

from conftest import hexdigest


@pytest.mark.asyncio
async def test_tag_placeholder_resolves_against_body(make_request):
    placeholder = await run_tag(None, "sha1", "hex")
    request = make_request(body="X", headers={"X-Signature": placeholder})

    await resolve_request_hashes(HookContext(request=request))

    expected = compute_digest("X", HashOptions(algorithm="sha1", encoding="hex"))
    assert request.header("X-Signature") == expected == hexdigest("sha1", "X")


@pytest.mark.asyncio
async def test_url_and_parameters_are_resolved(make_request, sha1_hex):
    placeholder = encode_placeholder(sha1_hex)
    request = make_request(
        body="payload",
        url=f"https://api.example.com/items?sig={placeholder}",
        parameters={"hash": placeholder, "page": "2"},
    )

    await resolve_request_hashes(HookContext(request=request))

    digest = hexdigest("sha1", "payload")
    assert request.get_url() == f"https://api.example.com/items?sig={digest}"
    assert request.parameter("hash") == digest
    assert request.parameter("page") == "2"


@pytest.mark.asyncio
async def test_two_placeholders_in_body_use_their_own_options(make_request):
    md5 = encode_placeholder(HashOptions(algorithm="md5", encoding="hex"))
    sha256 = encode_placeholder(HashOptions(algorithm="sha256", encoding="base64"))
    body = f"a={md5}\nb={sha256}"
    request = make_request(body=body)

    await resolve_request_hashes(HookContext(request=request))

    expected_b = compute_digest(body, HashOptions(algorithm="sha256", encoding="base64"))
    assert request.get_body()["text"] == f"a={hexdigest('md5', body)}\nb={expected_b}"


@pytest.mark.asyncio
async def test_other_fields_hash_the_resolved_body(make_request, sha1_hex):
    placeholder = encode_placeholder(sha1_hex)
    original_body = f'{{"data": 1, "checksum": "{placeholder}"}}'
    request = make_request(body=original_body, headers={"X-Body-Hash": placeholder})

    await resolve_request_hashes(HookContext(request=request))

    resolved_body = original_body.replace(placeholder, hexdigest("sha1", original_body))
    assert request.get_body()["text"] == resolved_body
    assert request.header("X-Body-Hash") == hexdigest("sha1", resolved_body)


@pytest.mark.asyncio
async def test_body_keys_other_than_text_are_kept(make_request, sha1_hex):
    request = make_request(body=encode_placeholder(sha1_hex))

    await resolve_request_hashes(HookContext(request=request))

    assert request.get_body()["mimeType"] == "application/json"


@pytest.mark.asyncio
async def test_missing_body_text_hashes_empty_string(make_request, sha1_hex):
    request = make_request(body=None, headers={"X-Hash": encode_placeholder(sha1_hex)})

    await resolve_request_hashes(HookContext(request=request))

    assert request.header("X-Hash") == hexdigest("sha1", "")
    assert all(name != "set_body" for name, _ in request.calls)


@pytest.mark.asyncio
async def test_request_without_placeholders_is_untouched(make_request):
    request = make_request(
        body='{"a": 1}',
        url="https://api.example.com/",
        headers={"Content-Type": "application/json"},
        parameters={"q": MARKER_TEXT},
    )
    before = request.to_dict()

    await resolve_request_hashes(HookContext(request=request))

    assert request.to_dict() == before
    assert request.calls == []


@pytest.mark.asyncio
async def test_request_without_marker_calls_no_setter(make_request):
    request = make_request(body="b", url="u", headers={"h": "v"}, parameters={"p": "v"})

    await resolve_request_hashes(HookContext(request=request))

    assert request.calls == []


@pytest.mark.asyncio
async def test_malformed_json_body_with_remove_whitespace_fails(make_request):
    placeholder = await run_tag(None, "sha256", "hex", True)
    request = make_request(body="{broken", headers={"X-Hash": placeholder})

    with pytest.raises(ParseError):
        await resolve_request_hashes(HookContext(request=request))

    assert request.header("X-Hash") == placeholder


@pytest.mark.asyncio
async def test_json_path_placeholder_in_header(make_request):
    placeholder = await run_tag(None, "md5", "hex", False, "$.user.id")
    request = make_request(body='{"user": {"id": 7}}', headers={"X-Id-Hash": placeholder})

    await resolve_request_hashes(HookContext(request=request))

    assert request.header("X-Id-Hash") == hexdigest("md5", "7")


@pytest.mark.asyncio
async def test_corrupt_payload_fails(make_request):
    request = make_request(body="b", headers={"X-Hash": f"{MARKER_TEXT} ({b'{}'.hex()})"})

    with pytest.raises(PlaceholderDecodeError):
        await resolve_request_hashes(HookContext(request=request))


def test_hook_is_exported():
    assert request_hooks == [resolve_request_hashes]
