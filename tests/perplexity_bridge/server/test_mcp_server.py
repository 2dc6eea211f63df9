from __future__ import annotations

from typing import Any

import pytest
from mcp import types
from mcp.shared.exceptions import McpError

from perplexity_bridge.core.abc import AbstractChatClient
from perplexity_bridge.core.exceptions import RemoteAPIError
from perplexity_bridge.core.types import CompletionRequest, ResponseFormat, ToolEnvelope
from perplexity_bridge.server.mcp_server import build_server, to_call_tool_result
from perplexity_bridge.server.tool_schema import build_input_schema
from perplexity_bridge.service import ChatCompletionService


class EchoClient(AbstractChatClient):
    def __init__(self, error: Exception | None = None) -> None:
        super().__init__(timeout=1.0)
        self.error = error

    async def _invoke(self, request: CompletionRequest) -> str:
        if self.error is not None:
            raise self.error
        return request.messages[-1].content


def _server(client: AbstractChatClient | None = None):  # noqa: ANN202
    return build_server(ChatCompletionService(client or EchoClient()), name='perplexity-bridge', version='0.1.0')


async def _call(server: Any, name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
    request = types.CallToolRequest(
        method='tools/call',
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    result = await server.request_handlers[types.CallToolRequest](request)
    return result.root


def test_input_schema() -> None:
    schema = build_input_schema()
    props = schema['properties']
    assert schema['required'] == ['messages']
    assert props['prompt_template']['enum'] == ['technical_docs', 'security_practices', 'code_review', 'api_docs']
    assert '- api_docs: API documentation in structured JSON format with examples' in props['prompt_template']['description']
    assert props['custom_template']['required'] == ['system']
    assert props['model']['default'] == 'sonar'
    assert 'sonar-pro' in props['model']['enum']
    assert props['temperature'] == {'type': 'number', 'minimum': 0, 'maximum': 1, 'default': 0.7}
    assert props['max_tokens']['maximum'] == 4096  # noqa: PLR2004


@pytest.mark.asyncio
async def test_list_tools_advertises_single_tool() -> None:
    server = _server()
    result = await server.request_handlers[types.ListToolsRequest](types.ListToolsRequest(method='tools/list'))
    tools = result.root.tools
    assert [tool.name for tool in tools] == ['chat_completion']
    assert tools[0].inputSchema == build_input_schema()


@pytest.mark.asyncio
async def test_call_tool_success() -> None:
    result = await _call(_server(), 'chat_completion', {'messages': [{'role': 'user', 'content': 'hello'}]})
    assert result.isError is False
    assert result.content[0].type == 'text'
    assert result.content[0].text == 'hello'


@pytest.mark.asyncio
async def test_call_tool_remote_failure_sets_is_error() -> None:
    server = _server(EchoClient(error=RemoteAPIError('Perplexity API error: Bad Gateway')))
    result = await _call(server, 'chat_completion', {'messages': [{'role': 'user', 'content': 'hello'}]})
    assert result.isError is True
    assert result.content[0].text == 'Error generating completion: Perplexity API error: Bad Gateway'


@pytest.mark.asyncio
async def test_unknown_tool_is_method_not_found() -> None:
    with pytest.raises(McpError) as exc_info:
        await _call(_server(), 'web_search', {})
    assert exc_info.value.error.code == types.METHOD_NOT_FOUND
    assert 'Unknown tool: web_search' in exc_info.value.error.message
    assert exc_info.value.error.data == {
        'type': 'ToolNotFoundError',
        'code': types.METHOD_NOT_FOUND,
        'message': 'Unknown tool: web_search',
    }


@pytest.mark.asyncio
async def test_unknown_template_is_invalid_params() -> None:
    with pytest.raises(McpError) as exc_info:
        await _call(
            _server(),
            'chat_completion',
            {'messages': [{'role': 'user', 'content': 'x'}], 'prompt_template': 'haiku'},
        )
    assert exc_info.value.error.code == types.INVALID_PARAMS
    assert exc_info.value.error.data['type'] == 'UnknownTemplateError'


@pytest.mark.asyncio
async def test_fractional_max_tokens_accepted_by_tool() -> None:
    result = await _call(
        _server(),
        'chat_completion',
        {'messages': [{'role': 'user', 'content': 'x'}], 'max_tokens': 512.5},
    )
    assert result.isError is False
    assert build_input_schema()['properties']['max_tokens']['type'] == 'number'


@pytest.mark.asyncio
async def test_missing_arguments_is_invalid_params() -> None:
    with pytest.raises(McpError) as exc_info:
        await _call(_server(), 'chat_completion', None)
    assert exc_info.value.error.code == types.INVALID_PARAMS


def test_json_envelope_is_carried_as_text_block() -> None:
    result = to_call_tool_result(ToolEnvelope.success('{"k": 1}', ResponseFormat.json))
    assert result.content[0].type == 'text'
    assert result.content[0].text == '{"k": 1}'
    assert result.isError is False
