"""core.resolver

Resolve the effective per-request configuration from three sources:

1. explicit per-call overrides (`format`, `include_sources`);
2. the selected template - a caller's custom template, or else a named one;
3. hard defaults (`text`, `False`).

A custom template always wins over a named key; the two are never merged.
Each field is resolved independently as "first defined wins", so an explicit
`False` override beats a template's `True`.
"""

from __future__ import annotations

from typing import TypeVar

from perplexity_bridge.core.templates import get_template
from perplexity_bridge.core.types import (
    CustomTemplate,
    EffectiveConfig,
    NamedTemplate,
    ResponseFormat,
)

T = TypeVar('T')

DEFAULT_FORMAT = ResponseFormat.text
DEFAULT_INCLUDE_SOURCES = False


def _first_defined(*candidates: T | None, default: T) -> T:
    return next((value for value in candidates if value is not None), default)


def select_template(
    prompt_template: str | None = None,
    custom_template: CustomTemplate | None = None,
) -> CustomTemplate | NamedTemplate | None:
    """Pick the template source: custom > named > none."""
    if custom_template is not None:
        return custom_template
    if prompt_template is not None:
        return get_template(prompt_template)
    return None


def resolve_template(
    prompt_template: str | None = None,
    custom_template: CustomTemplate | None = None,
    format_override: ResponseFormat | None = None,
    include_sources_override: bool | None = None,
) -> EffectiveConfig:
    """Return the `EffectiveConfig` for one request.

    Raises
    ------
    UnknownTemplateError
        If *prompt_template* is given, no custom template is, and the key is
        not in the catalog.

    """
    template = select_template(prompt_template, custom_template)

    return EffectiveConfig(
        system_prompt=template.system if template is not None else None,
        format=_first_defined(
            format_override,
            template.format if template is not None else None,
            default=DEFAULT_FORMAT,
        ),
        include_sources=_first_defined(
            include_sources_override,
            template.include_sources if template is not None else None,
            default=DEFAULT_INCLUDE_SOURCES,
        ),
    )
