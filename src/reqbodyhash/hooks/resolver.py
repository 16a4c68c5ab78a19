"""Request hook that swaps body-hash placeholders for real digests.

Runs once per outgoing request, after every other template tag has been
rendered. The body is resolved first; the URL, headers and parameters are
then hashed against the resolved body text.
"""

from __future__ import annotations

import logging

from reqbodyhash.host.request import HookContext
from reqbodyhash.placeholder.codec import contains_placeholder, replace_placeholders

logger = logging.getLogger("reqbodyhash.resolver")


def _resolve(field: str, content: str, body_text: str) -> str | None:
    """Resolved content, or None when nothing in it matched the grammar."""
    if not contains_placeholder(content):
        return None

    resolved, count = replace_placeholders(content, body_text)
    if not count:
        return None

    logger.debug("Resolved %d placeholder(s) in %s", count, field)
    return resolved


async def resolve_request_hashes(context: HookContext) -> None:
    """Replace every placeholder in the request with its digest."""
    request = context.request

    body = request.get_body()
    body_text = body.get("text") or ""
    resolved = _resolve("body", body_text, body_text)
    if resolved is not None:
        body_text = resolved
        request.set_body({**body, "text": body_text})

    resolved = _resolve("url", request.get_url(), body_text)
    if resolved is not None:
        request.set_url(resolved)

    for header in request.get_headers():
        resolved = _resolve(f"header {header.name}", header.value, body_text)
        if resolved is not None:
            request.set_header(header.name, resolved)

    for param in request.get_parameters():
        resolved = _resolve(f"parameter {param.name}", param.value, body_text)
        if resolved is not None:
            request.set_parameter(param.name, resolved)
