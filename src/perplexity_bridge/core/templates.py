"""core.templates

Built-in named prompt templates.

The catalog is constructed once at import time and exposed as a read-only
mapping; entries are frozen models, so concurrent readers need no locking.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from perplexity_bridge.core.exceptions import UnknownTemplateError
from perplexity_bridge.core.types import NamedTemplate, ResponseFormat

if TYPE_CHECKING:
    from collections.abc import Mapping


PROMPT_TEMPLATES: Mapping[str, NamedTemplate] = MappingProxyType(
    {
        'technical_docs': NamedTemplate(
            system=(
                'You are a technical documentation assistant. Provide clear, accurate, and '
                'well-structured information with code examples where relevant.'
            ),
            format=ResponseFormat.markdown,
            include_sources=True,
            description='Technical documentation with code examples and source references',
        ),
        'security_practices': NamedTemplate(
            system=(
                'You are a security expert. Provide detailed security best practices, '
                'implementation guidelines, and potential vulnerability mitigations.'
            ),
            format=ResponseFormat.markdown,
            include_sources=True,
            description='Security best practices and implementation guidelines with references',
        ),
        'code_review': NamedTemplate(
            system=(
                'You are a code review assistant. Analyze code for best practices, '
                'potential issues, and suggest improvements.'
            ),
            format=ResponseFormat.markdown,
            include_sources=False,
            description='Code analysis focusing on best practices and improvements',
        ),
        'api_docs': NamedTemplate(
            system=(
                'You are an API documentation assistant. Provide clear explanations of API '
                'endpoints, parameters, and usage examples.'
            ),
            format=ResponseFormat.json,
            include_sources=True,
            description='API documentation in structured JSON format with examples',
        ),
    }
)


def get_template(key: str) -> NamedTemplate:
    """Return the catalog entry for *key* (exact match).

    Raises
    ------
    UnknownTemplateError
        If *key* is not a built-in template.

    """
    try:
        return PROMPT_TEMPLATES[key]
    except KeyError as exc:
        raise UnknownTemplateError(
            f'Unknown prompt_template: {key!r}. Expected one of: {", ".join(template_keys())}'
        ) from exc


def template_keys() -> list[str]:
    """Catalog keys in declaration order (used for the tool schema enum)."""
    return list(PROMPT_TEMPLATES)


def describe_templates() -> str:
    return '\n'.join(f'- {key}: {template.description}' for key, template in PROMPT_TEMPLATES.items())
