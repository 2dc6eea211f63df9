"""dispatcher

Turns an `EffectiveConfig` plus the caller's messages into a completion
envelope: compose messages, build the outbound request, call the client, and
fold any remote failure into an error envelope.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from perplexity_bridge.core.exceptions import RemoteCallError
from perplexity_bridge.core.types import (
    CompletionRequest,
    EffectiveConfig,
    GenerationParams,
    Message,
    Role,
    ToolEnvelope,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from perplexity_bridge.core.abc import AbstractChatClient

logger = logging.getLogger(__name__)


def compose_messages(messages: Sequence[Message], system_prompt: str | None) -> list[Message]:
    """Prepend the template's system message, if any; caller order is kept."""
    if system_prompt is None:
        return list(messages)
    return [Message(role=Role.system, content=system_prompt), *messages]


def build_request(
    messages: Sequence[Message],
    config: EffectiveConfig,
    params: GenerationParams,
) -> CompletionRequest:
    return CompletionRequest(
        model=params.model,
        messages=compose_messages(messages, config.system_prompt),
        temperature=params.temperature,
        max_tokens=params.max_tokens,
        format=config.format,
        include_sources=config.include_sources,
    )


class CompletionDispatcher:
    """Runs one completion call and maps its outcome to a `ToolEnvelope`."""

    def __init__(self, client: AbstractChatClient) -> None:
        self._client = client

    async def dispatch(
        self,
        messages: Sequence[Message],
        config: EffectiveConfig,
        params: GenerationParams | None = None,
    ) -> ToolEnvelope:
        """Return a success envelope, or an error envelope for remote failures.

        Remote failures never propagate from here.
        """
        request = build_request(messages, config, params or GenerationParams())
        logger.debug(
            'Dispatching completion: model=%s messages=%d format=%s include_sources=%s',
            request.model,
            len(request.messages),
            request.format,
            request.include_sources,
        )

        try:
            text = await self._client.complete(request)
        except RemoteCallError as exc:
            logger.warning('Completion failed (%s): %s', type(exc).__name__, exc)
            return ToolEnvelope.from_error(exc)

        return ToolEnvelope.success(text, config.format)
