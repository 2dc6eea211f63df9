"""core.types

Shared DTOs and enums used throughout *perplexity_bridge*.

These models live in the **core** layer so that *adapters*, the dispatcher and
the server can depend on them without causing circular imports.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from perplexity_bridge.core.exceptions import BridgeError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Role(StrEnum):
    system = 'system'
    user = 'user'
    assistant = 'assistant'


class ResponseFormat(StrEnum):
    text = 'text'
    markdown = 'markdown'
    json = 'json'


class ContentType(StrEnum):
    text = 'text'
    json = 'json'


class ModelName(StrEnum):
    """Remote model identifiers accepted by the tool."""

    sonar_pro = 'sonar-pro'
    sonar = 'sonar'
    llama_small = 'llama-3.1-sonar-small-128k-online'
    llama_large = 'llama-3.1-sonar-large-128k-online'
    llama_huge = 'llama-3.1-sonar-huge-128k-online'


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class Message(BaseModel):
    """Single chat message. Content is kept verbatim."""

    role: Role
    content: str

    # Immutable value-object
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Templates & resolved configuration
# ---------------------------------------------------------------------------


class NamedTemplate(BaseModel):
    """Built-in catalog entry."""

    system: str
    format: ResponseFormat
    include_sources: bool
    description: str

    model_config = ConfigDict(frozen=True)


class CustomTemplate(BaseModel):
    """Caller-supplied template; supersedes any named template."""

    system: str
    format: ResponseFormat | None = None
    include_sources: bool | None = None

    model_config = ConfigDict(frozen=True)


class EffectiveConfig(BaseModel):
    """Per-request settings after applying the override chain."""

    system_prompt: str | None = None
    format: ResponseFormat = ResponseFormat.text
    include_sources: bool = False

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Generation parameters & outbound payload
# ---------------------------------------------------------------------------


class GenerationParams(BaseModel):
    """Model, temperature and token limit for a single call."""

    model: ModelName = ModelName.sonar
    temperature: float = Field(0.7, ge=0.0, le=1.0)
    max_tokens: int | float = Field(1024, ge=1, le=4096, description='Maximum tokens in completion')

    model_config = ConfigDict(frozen=True)


class CompletionRequest(BaseModel):
    """Outbound body for `POST /chat/completions`."""

    model: ModelName
    messages: list[Message]
    temperature: float
    max_tokens: int | float
    format: ResponseFormat
    include_sources: bool

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Remote response shape (only what we read)
# ---------------------------------------------------------------------------


class ChoiceMessage(BaseModel):
    role: str | None = None
    content: str


class Choice(BaseModel):
    message: ChoiceMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """`{choices: [{message: {role, content}, finish_reason}]}` - extra keys ignored."""

    choices: list[Choice] = Field(..., min_length=1)

    model_config = ConfigDict(extra='ignore')


# ---------------------------------------------------------------------------
# Output envelope
# ---------------------------------------------------------------------------


class ContentBlock(BaseModel):
    type: ContentType
    text: str


class ToolEnvelope(BaseModel):
    """Uniform tool result: content blocks plus an optional error flag."""

    content: list[ContentBlock]
    is_error: bool | None = Field(default=None, alias='isError')

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def success(cls, text: str, response_format: ResponseFormat) -> ToolEnvelope:
        content_type = ContentType.json if response_format == ResponseFormat.json else ContentType.text
        return cls(content=[ContentBlock(type=content_type, text=text)])

    @classmethod
    def from_error(cls, exc: BridgeError) -> ToolEnvelope:
        """The single place failures are folded into the envelope shape."""
        return cls(
            content=[ContentBlock(type=ContentType.text, text=f'Error generating completion: {exc}')],
            is_error=True,
        )

    def to_wire(self) -> dict[str, object]:
        """Serialise with protocol key names, omitting `isError` on success."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)
