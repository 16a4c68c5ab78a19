"""The ``reqbodyhash`` template tag.

Hashes a literal message right away, or, when no message is given, emits a
placeholder that the request hook replaces with the digest of the final
request body just before the request is sent.
"""

from __future__ import annotations

import logging
from typing import Any

from reqbodyhash.errors import ValidationError
from reqbodyhash.models import (
    Algorithm,
    DigestEncoding,
    HashOptions,
    TagArgument,
    TagArgumentOption,
    TemplateTag,
)
from reqbodyhash.placeholder.codec import encode_placeholder
from reqbodyhash.utils.hashing import compute_digest

logger = logging.getLogger("reqbodyhash.tags")

ALGORITHM_CHOICES = [a.value for a in Algorithm]
ENCODING_CHOICES = [e.value for e in DigestEncoding]


def build_options(
    algorithm: Any,
    encoding: Any,
    remove_whitespace: Any = False,
    json_path: str | None = "",
    prefix: str | None = "",
    suffix: str | None = "",
) -> HashOptions:
    """Validate raw tag arguments and normalize them into HashOptions."""
    if encoding not in ENCODING_CHOICES:
        raise ValidationError(
            f"Invalid encoding {encoding}. Choices are {', '.join(ENCODING_CHOICES)}",
            context={"encoding": encoding},
        )
    if algorithm not in ALGORITHM_CHOICES:
        raise ValidationError(
            f"Invalid algorithm {algorithm}. Choices are {', '.join(ALGORITHM_CHOICES)}",
            context={"algorithm": algorithm},
        )

    return HashOptions(
        algorithm=algorithm,
        encoding=encoding,
        json_path=json_path or None,
        # Host forms may hand enum values back as strings
        remove_whitespace=True if remove_whitespace is True or remove_whitespace == "true" else None,
        prefix=prefix or "",
        suffix=suffix or "",
    )


def encode(value: str, options: HashOptions) -> str:
    """Digest of value, or a placeholder for the request body if value is empty."""
    if not isinstance(value, str):
        raise ValidationError(
            f'Cannot hash value of type "{type(value).__name__}"',
            context={"value_type": type(value).__name__},
        )

    if value == "":
        logger.debug(
            "Deferring %s/%s hash to request dispatch",
            options.algorithm.value, options.encoding.value,
        )
        return encode_placeholder(options)

    return compute_digest(value, options)


async def run_tag(
    context: Any,
    algorithm: Any,
    encoding: Any,
    remove_whitespace: Any = False,
    json_path: str | None = "",
    value: Any = "",
    prefix: str | None = "",
    suffix: str | None = "",
) -> str:
    """Template tag entry point, called by the host with the tag's arguments in order."""
    options = build_options(
        algorithm,
        encoding,
        remove_whitespace=remove_whitespace,
        json_path=json_path,
        prefix=prefix,
        suffix=suffix,
    )
    return encode(value, options)


REQBODYHASH_TAG = TemplateTag(
    name="reqbodyhash",
    display_name="Request Body Hash",
    description="Hash a value or the request body",
    args=[
        TagArgument(
            name="algorithm",
            display_name="Algorithm",
            type="enum",
            options=[
                TagArgumentOption(display_name="MD5", value="md5"),
                TagArgumentOption(display_name="SHA1", value="sha1"),
                TagArgumentOption(display_name="SHA256", value="sha256"),
                TagArgumentOption(display_name="SHA512", value="sha512"),
            ],
        ),
        TagArgument(
            name="encoding",
            display_name="Digest Encoding",
            description="The encoding of the output",
            type="enum",
            options=[
                TagArgumentOption(display_name="Hexadecimal", value="hex"),
                TagArgumentOption(display_name="Base64", value="base64"),
            ],
        ),
        TagArgument(
            name="remove_whitespace",
            display_name="Remove whitespace from JSON",
            description="Parse and stringify JSON request body to remove any whitespace",
            type="enum",
            default=False,
            options=[
                TagArgumentOption(display_name="No", value=False),
                TagArgumentOption(display_name="Yes", value=True),
            ],
        ),
        TagArgument(
            name="json_path",
            display_name="JSONPath to object that should be hashed",
            description=(
                "If hashing is to be done only to a part of the request body select it "
                "using a JSONPath query. Note: whitespace will be removed before hashing"
            ),
            placeholder="JSONPath (leave empty to not use)",
            default="",
        ),
        TagArgument(
            name="value",
            display_name="Message",
            placeholder="Message to hash (leave empty to use request body)",
            default="",
        ),
        TagArgument(
            name="prefix",
            display_name="Message Prefix",
            placeholder="Additional text prepended to message for generating hash",
            default="",
        ),
        TagArgument(
            name="suffix",
            display_name="Message Suffix",
            placeholder="Additional text appended to message for generating hash",
            default="",
        ),
    ],
    run=run_tag,
)
