"""core.exceptions

Centralised exception hierarchy for *perplexity_bridge*.

Each error carries an `error_code` attribute (a JSON-RPC error code) so that the
protocol layer can translate exceptions to MCP errors *without* scattering code
logic throughout business code.

Two families matter at runtime:

* caller errors (`InvalidArgumentError`, `ToolNotFoundError`) propagate to the
  protocol layer and become JSON-RPC errors;
* `RemoteCallError` subclasses never leave the dispatcher - they are folded into
  an error envelope by `ToolEnvelope.from_error()`.
"""

from __future__ import annotations

from typing import ClassVar

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

# ---------------------------------------------------------------------------
# Base class with protocol error code
# ---------------------------------------------------------------------------


class BridgeError(Exception):
    """Base class for all *perplexity_bridge* domain errors."""

    #: Default JSON-RPC code if not overridden by subclass.
    error_code: ClassVar[int] = INTERNAL_ERROR

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)

    def to_json(self) -> dict[str, dict[str, str | int]]:
        """Unified error body used in logs and protocol errors."""
        return {'error': {'type': self.__class__.__name__, 'code': self.error_code, 'message': str(self)}}


# ---------------------------------------------------------------------------
# Startup / caller errors
# ---------------------------------------------------------------------------


class ConfigurationError(BridgeError):
    """Raised at startup when required process configuration is missing."""


class InvalidArgumentError(BridgeError):
    """Raised when tool arguments fail validation."""

    error_code: ClassVar[int] = INVALID_PARAMS  # -32602


class UnknownTemplateError(InvalidArgumentError):
    """Raised when a `prompt_template` key is not in the catalog."""


class ToolNotFoundError(BridgeError):
    """Raised when a tool other than `chat_completion` is requested."""

    error_code: ClassVar[int] = METHOD_NOT_FOUND  # -32601


# ---------------------------------------------------------------------------
# Remote call failures (recovered into an error envelope)
# ---------------------------------------------------------------------------


class RemoteCallError(BridgeError):
    """Base for failures of the outbound completion call."""

    error_code: ClassVar[int] = INTERNAL_ERROR  # -32603


class RemoteAPIError(RemoteCallError):
    """Non-success HTTP status or network failure talking to the API."""


class CompletionTimeoutError(RemoteCallError):
    """The completion call did not finish within its time budget."""


class MalformedResponseError(RemoteCallError):
    """Success status, but the body lacks `choices[0].message`."""
