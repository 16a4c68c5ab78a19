"""Schema Generator — MCP-compatible JSON schemas from template-tag arguments."""

from __future__ import annotations

from typing import Any

from reqbodyhash.models import TagArgument, TemplateTag


# Python type → JSON schema type mapping
TYPE_MAP: dict[type, str] = {
    str: "string",
    bool: "boolean",
    int: "integer",
    float: "number",
}


def generate_input_schema(tag: TemplateTag) -> dict[str, Any]:
    """Generate a JSON input schema for a template tag.

    Properties keep the tag's argument order; arguments without a default
    are required.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for arg in tag.args:
        properties[arg.name] = _argument_schema(arg)
        if arg.required:
            required.append(arg.name)

    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


def _argument_schema(arg: TagArgument) -> dict[str, Any]:
    """Schema for a single argument."""
    prop: dict[str, Any] = {}

    if arg.type == "enum":
        values = [option.value for option in arg.options]
        json_types = sorted({TYPE_MAP.get(type(v), "string") for v in values})
        prop["type"] = json_types[0] if len(json_types) == 1 else json_types
        prop["enum"] = values
    else:
        prop["type"] = "string"

    description = arg.description or arg.placeholder or arg.display_name
    if description:
        prop["description"] = description
    if arg.default is not None:
        prop["default"] = arg.default

    return prop
