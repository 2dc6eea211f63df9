"""core.abc

Abstract base class that completion adapters must implement.

Design goals
============
1. **Provider-agnostic public API** - callers interact exclusively via
    `complete()` passing a domain `CompletionRequest`. They never touch
    provider-specific payloads.
2. **Built-in time budget** - `complete()` runs the adapter inside a scoped
    `asyncio.timeout()` so every adapter inherits the same bounded-call
    behaviour. The timer is released on every exit path (success, raised
    error, cancellation).
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from perplexity_bridge.core.exceptions import CompletionTimeoutError

if TYPE_CHECKING:
    from perplexity_bridge.core.types import CompletionRequest

DEFAULT_TIMEOUT_SEC = 30.0


class AbstractChatClient(ABC):
    """Provider-independent chat-completion client interface."""

    # ---------------------------------------------------------------------
    # Construction
    # ---------------------------------------------------------------------

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT_SEC) -> None:
        """Store the per-call time budget (seconds)."""
        self._timeout: float = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    # ------------------------------------------------------------------
    # Public async API
    # ------------------------------------------------------------------

    async def complete(self, request: CompletionRequest) -> str:
        """Return the assistant message content for *request*.

        Subclasses **must not** override this - override `_invoke()` instead.

        Raises
        ------
        CompletionTimeoutError
            If the call does not finish within the time budget.

        """
        try:
            async with asyncio.timeout(self._timeout):
                return await self._invoke(request)
        except TimeoutError as exc:
            raise CompletionTimeoutError(f'Request timed out after {self._timeout:g} seconds') from exc

    # ------------------------------------------------------------------
    # Methods to implement in concrete adapters
    # ------------------------------------------------------------------

    @abstractmethod
    async def _invoke(self, request: CompletionRequest) -> str:
        """Provider-specific implementation (to be overridden)."""

    async def aclose(self) -> None:  # noqa: B027 - optional hook
        """Release network resources held by the adapter."""

    # ------------------------------------------------------------------
    # Helper - string representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f'<{self.__class__.__name__} timeout={self._timeout!r}>'
