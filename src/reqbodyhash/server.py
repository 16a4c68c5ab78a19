"""
ReqBodyHash — MCP host adapter
══════════════════════════════

Exposes the plugin to MCP clients over stdio:

  • reqbodyhash       — Evaluate the template tag (digest or placeholder)
  • resolve_request   — Run the request hooks over a request and return it

Usage:
    reqbodyhash-server         # Start the server
    python -m reqbodyhash      # Alternative start
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    TextContent,
    Tool as MCPTool,
)

from reqbodyhash import request_hooks, template_tags
from reqbodyhash.config import get_config
from reqbodyhash.host.request import HookContext, InMemoryRequest
from reqbodyhash.models import TemplateTag
from reqbodyhash.tags.schema_gen import generate_input_schema

logger = logging.getLogger("reqbodyhash")


REQUEST_FIELD_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "value": {"type": "string"},
        },
        "required": ["name"],
    },
    "default": [],
}


# ─── MCP Server Definition ───

def create_server() -> Server:
    """Create the MCP server with one tool per template tag plus the resolver."""
    config = get_config().server
    server = Server(config.name)
    tags = {tag.name: tag for tag in template_tags}

    @server.list_tools()
    async def handle_list_tools() -> list[MCPTool]:
        """Return all available MCP tool endpoints."""
        tools = [
            MCPTool(
                name=tag.name,
                description=tag.description,
                inputSchema=generate_input_schema(tag),
            )
            for tag in tags.values()
        ]
        tools.append(MCPTool(
            name=config.resolve_tool_name,
            description=(
                "Run the request hooks over a request, replacing body-hash "
                "placeholders in the body, URL, headers and parameters."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "body": {
                        "type": "string",
                        "description": "Final request body text",
                        "default": "",
                    },
                    "url": {
                        "type": "string",
                        "description": "Request URL",
                        "default": "",
                    },
                    "headers": REQUEST_FIELD_SCHEMA,
                    "parameters": REQUEST_FIELD_SCHEMA,
                },
            },
        ))
        return tools

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
        """Route tool calls to the appropriate handler."""
        try:
            if name in tags:
                return await _handle_tag(tags[name], arguments)
            elif name == config.resolve_tool_name:
                return await _handle_resolve(arguments)
            else:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]
        except Exception as e:
            logger.error("Error in %s: %s", name, e, exc_info=True)
            return [TextContent(type="text", text=f"Error: {type(e).__name__}: {str(e)}")]

    return server


# ─── Tool Handler Implementations ───


async def _handle_tag(tag: TemplateTag, args: dict) -> list[TextContent]:
    """Evaluate a template tag with its arguments in declared order."""
    values = [args.get(arg.name, arg.default) for arg in tag.args]
    result = await tag.run(None, *values)

    return [TextContent(type="text", text=json.dumps({"result": result}, indent=2))]


async def _handle_resolve(args: dict) -> list[TextContent]:
    """Run every request hook against an in-memory request."""
    request = InMemoryRequest.from_dict(args)
    context = HookContext(request=request)

    for hook in request_hooks:
        await hook(context)

    return [TextContent(type="text", text=json.dumps(request.to_dict(), indent=2))]


# ─── Entry Point ───

async def run_server() -> None:
    """Run the ReqBodyHash MCP server."""
    server = create_server()

    async with stdio_server() as (read_stream, write_stream):
        logger.info("ReqBodyHash MCP server running via stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """CLI entry point."""
    config = get_config().logging
    logging.basicConfig(
        level=config.level,
        format=config.format,
        stream=sys.stderr,
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
