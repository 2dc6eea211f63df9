"""adapters.perplexity_adapter

Concrete adapter that bridges :class:`perplexity_bridge.core.abc.AbstractChatClient`
with the **Perplexity Chat Completions** HTTP API.

Perplexity speaks the OpenAI wire format, so the *openai==1.x* async client is
pointed at its base URL. The non-standard `format` / `include_sources` keys are
sent through `extra_body`, and the raw HTTP response is read so that error and
malformed bodies are handled here rather than by the SDK's lenient parsing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import openai
from pydantic import ValidationError

from perplexity_bridge.core.abc import DEFAULT_TIMEOUT_SEC, AbstractChatClient
from perplexity_bridge.core.exceptions import (
    CompletionTimeoutError,
    MalformedResponseError,
    RemoteAPIError,
)
from perplexity_bridge.core.types import ChatCompletionResponse

if TYPE_CHECKING:
    import httpx

    from perplexity_bridge.core.types import CompletionRequest

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.perplexity.ai'


def _error_detail(response: httpx.Response) -> str | None:
    """Best-effort extraction of `error` from an error body; never raises."""
    try:
        body: Any = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or not body.get('error'):
        return None
    error = body['error']
    if isinstance(error, dict):
        return str(error.get('message') or error)
    return str(error)


def _status_error(response: httpx.Response) -> RemoteAPIError:
    status_text = response.reason_phrase or str(response.status_code)
    detail = _error_detail(response)
    suffix = f' - {detail}' if detail else ''
    return RemoteAPIError(f'Perplexity API error: {status_text}{suffix}')


class PerplexityAdapter(AbstractChatClient):
    """Adapter for the Perplexity `POST /chat/completions` endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(timeout=timeout)
        # One tool call == one HTTP call; the SDK's own retries are disabled.
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    # ------------------------------------------------------------------
    # Async path
    # ------------------------------------------------------------------

    async def _invoke(self, request: CompletionRequest) -> str:
        payload = request.model_dump(mode='json')
        try:
            raw = await self._client.chat.completions.with_raw_response.create(
                model=payload['model'],
                messages=payload['messages'],
                temperature=payload['temperature'],
                max_tokens=payload['max_tokens'],
                extra_body={
                    'format': payload['format'],
                    'include_sources': payload['include_sources'],
                },
            )
        except openai.APIStatusError as exc:
            raise _status_error(exc.response) from exc
        except openai.APITimeoutError as exc:
            raise CompletionTimeoutError(f'Request timed out after {self.timeout:g} seconds') from exc
        except openai.APIConnectionError as exc:
            raise RemoteAPIError(f'Network error contacting Perplexity API: {exc}') from exc
        except openai.OpenAIError as exc:  # generic fallback
            raise RemoteAPIError(f'Perplexity API error: {exc}') from exc

        return self._extract_content(raw.http_response)

    @staticmethod
    def _extract_content(response: httpx.Response) -> str:
        try:
            parsed = ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.debug('Unexpected completion body: %s', response.text[:500])
            raise MalformedResponseError('Invalid response format from Perplexity API') from exc
        return parsed.choices[0].message.content

    async def aclose(self) -> None:
        await self._client.close()
