"""ReqBodyHash Data Models — hashing options and plugin descriptors."""

from __future__ import annotations

from enum import Enum
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field


class Algorithm(str, Enum):
    """Supported digest algorithms (hashlib names)."""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"


class DigestEncoding(str, Enum):
    """Text encodings for the raw digest bytes."""
    HEX = "hex"
    BASE64 = "base64"


# ─── Hash Options ───


class HashOptions(BaseModel):
    """How to turn some content into a digest.

    Field order is the wire order: placeholders carry this model as compact
    camelCase JSON with unset (None) fields omitted.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    algorithm: Algorithm
    encoding: DigestEncoding
    json_path: str | None = Field(
        default=None,
        alias="jsonPath",
        description="JSONPath selecting the part of the content to hash",
    )
    remove_whitespace: bool | None = Field(
        default=None,
        alias="removeWhitespace",
        description="Re-serialize JSON content without insignificant whitespace",
    )
    prefix: str | None = Field(default=None, description="Text prepended before hashing")
    suffix: str | None = Field(default=None, description="Text appended before hashing")

    def to_wire_json(self) -> str:
        """Compact JSON as embedded in a placeholder."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


# ─── Request Fields ───


class RequestField(BaseModel):
    """A single header or query/form parameter."""
    name: str
    value: str = ""


# ─── Template Tag Descriptor ───


class TagArgumentOption(BaseModel):
    """One choice of an enum argument."""
    display_name: str
    value: Any


class TagArgument(BaseModel):
    """A positional template-tag argument, as shown in the host's form UI."""
    name: str = Field(..., description="Keyword the argument is passed as to run()")
    display_name: str
    type: str = Field(default="string", description="'enum' or 'string'")
    description: str = ""
    placeholder: str = ""
    default: Any = None
    options: list[TagArgumentOption] = Field(default_factory=list)

    @property
    def required(self) -> bool:
        return self.default is None


class TemplateTag(BaseModel):
    """A template tag registered with the host."""
    name: str
    display_name: str
    description: str = ""
    args: list[TagArgument] = Field(default_factory=list)
    run: Callable[..., Awaitable[str]] = Field(..., exclude=True)
