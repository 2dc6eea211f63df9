"""server.mcp_server

MCP stdio server exposing the single `chat_completion` tool.

`tools/call` is registered directly in `request_handlers` so that caller
errors (`BridgeError`) surface as JSON-RPC errors, while the tool's own
failures travel inside the result with `isError` set.

MCP has no `json` content block, so output requested with `format: json` is
delivered to the caller as a `text` block holding the model's JSON verbatim.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from perplexity_bridge.core.exceptions import BridgeError
from perplexity_bridge.server.tool_schema import TOOL_DESCRIPTION, build_input_schema
from perplexity_bridge.service import TOOL_NAME

if TYPE_CHECKING:
    from perplexity_bridge.core.types import ToolEnvelope
    from perplexity_bridge.service import ChatCompletionService

logger = logging.getLogger(__name__)


def to_call_tool_result(envelope: ToolEnvelope) -> types.CallToolResult:
    # MCP has no `json` content block; JSON payloads are carried as text.
    return types.CallToolResult(
        content=[types.TextContent(type='text', text=block.text) for block in envelope.content],
        isError=bool(envelope.is_error),
    )


def to_mcp_error(exc: BridgeError) -> McpError:
    return McpError(types.ErrorData(code=exc.error_code, message=str(exc), data=exc.to_json()['error']))


def build_server(service: ChatCompletionService, *, name: str, version: str) -> Server:
    server: Server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=TOOL_NAME,
                description=TOOL_DESCRIPTION,
                inputSchema=build_input_schema(),
            )
        ]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        try:
            envelope = await service.call_tool(request.params.name, request.params.arguments)
        except BridgeError as exc:
            logger.info('Rejected tools/call %r: %s', request.params.name, exc)
            raise to_mcp_error(exc) from exc
        return types.ServerResult(to_call_tool_result(envelope))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        logger.info('Perplexity MCP server running on stdio')
        await server.run(read_stream, write_stream, server.create_initialization_options())
