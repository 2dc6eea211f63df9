"""service

The `chat_completion` tool: argument validation, template resolution and
dispatch. This is the protocol-agnostic seam the MCP server calls into.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from perplexity_bridge.core.exceptions import InvalidArgumentError, ToolNotFoundError
from perplexity_bridge.core.resolver import resolve_template
from perplexity_bridge.core.types import (
    CustomTemplate,
    GenerationParams,
    Message,
    ModelName,
    ResponseFormat,
)
from perplexity_bridge.dispatcher import CompletionDispatcher

if TYPE_CHECKING:
    from collections.abc import Mapping

    from perplexity_bridge.core.abc import AbstractChatClient
    from perplexity_bridge.core.types import ToolEnvelope

logger = logging.getLogger(__name__)

TOOL_NAME = 'chat_completion'


class ChatCompletionArgs(BaseModel):
    """Inbound arguments of the `chat_completion` tool."""

    messages: list[Message]
    prompt_template: str | None = None
    custom_template: CustomTemplate | None = None
    format: ResponseFormat | None = None
    include_sources: bool | None = None
    model: ModelName = ModelName.sonar
    temperature: float = Field(0.7, ge=0.0, le=1.0)
    max_tokens: int | float = Field(1024, ge=1, le=4096)

    model_config = ConfigDict(frozen=True)

    def generation_params(self) -> GenerationParams:
        return GenerationParams(model=self.model, temperature=self.temperature, max_tokens=self.max_tokens)


def parse_arguments(arguments: Mapping[str, Any] | None) -> ChatCompletionArgs:
    """Validate raw tool arguments.

    Raises
    ------
    InvalidArgumentError
        If the arguments do not match the tool schema.

    """
    try:
        return ChatCompletionArgs.model_validate(dict(arguments or {}))
    except ValidationError as exc:
        errors = '; '.join(
            f'{".".join(str(part) for part in err["loc"]) or "arguments"}: {err["msg"]}' for err in exc.errors()
        )
        raise InvalidArgumentError(f'Invalid arguments for {TOOL_NAME}: {errors}') from exc


class ChatCompletionService:
    """Stateless per call; one instance serves all requests."""

    def __init__(self, client: AbstractChatClient) -> None:
        self._dispatcher = CompletionDispatcher(client)

    async def chat_completion(self, args: ChatCompletionArgs) -> ToolEnvelope:
        config = resolve_template(
            prompt_template=args.prompt_template,
            custom_template=args.custom_template,
            format_override=args.format,
            include_sources_override=args.include_sources,
        )
        logger.debug(
            'Resolved template: source=%s format=%s include_sources=%s',
            'custom' if args.custom_template else (args.prompt_template or 'none'),
            config.format,
            config.include_sources,
        )
        return await self._dispatcher.dispatch(args.messages, config, args.generation_params())

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> ToolEnvelope:
        """Entry point for a protocol `tools/call` request.

        Raises
        ------
        ToolNotFoundError
            If *name* is not `chat_completion`.
        InvalidArgumentError
            For malformed arguments or an unknown `prompt_template`.

        """
        if name != TOOL_NAME:
            raise ToolNotFoundError(f'Unknown tool: {name}')
        return await self.chat_completion(parse_arguments(arguments))
