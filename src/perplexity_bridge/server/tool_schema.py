"""server.tool_schema

JSON schema advertised for the `chat_completion` tool via `tools/list`.
"""

from __future__ import annotations

from typing import Any

from perplexity_bridge.core.templates import describe_templates, template_keys
from perplexity_bridge.core.types import ModelName, ResponseFormat, Role

TOOL_DESCRIPTION = 'Generate chat completions using the Perplexity API'

_FORMATS = [fmt.value for fmt in ResponseFormat]


def build_input_schema() -> dict[str, Any]:
    return {
        'type': 'object',
        'properties': {
            'messages': {
                'type': 'array',
                'items': {
                    'type': 'object',
                    'required': ['role', 'content'],
                    'properties': {
                        'role': {'type': 'string', 'enum': [role.value for role in Role]},
                        'content': {'type': 'string'},
                    },
                },
            },
            'prompt_template': {
                'type': 'string',
                'enum': template_keys(),
                'description': (
                    'Predefined prompt template to use for common use cases. Available templates:\n'
                    + describe_templates()
                ),
            },
            'custom_template': {
                'type': 'object',
                'description': 'Custom prompt template. If provided, overrides prompt_template.',
                'properties': {
                    'system': {
                        'type': 'string',
                        'description': "System message that sets the assistant's role and behavior",
                    },
                    'format': {'type': 'string', 'enum': _FORMATS, 'description': 'Response format'},
                    'include_sources': {
                        'type': 'boolean',
                        'description': 'Whether to include source URLs in responses',
                    },
                },
                'required': ['system'],
            },
            'format': {
                'type': 'string',
                'enum': _FORMATS,
                'description': (
                    'Response format. Use json for structured data, markdown for formatted text with '
                    'code blocks. Overrides template format if provided.'
                ),
                'default': ResponseFormat.text.value,
            },
            'include_sources': {
                'type': 'boolean',
                'description': 'Include source URLs in the response. Overrides template setting if provided.',
                'default': False,
            },
            'model': {
                'type': 'string',
                'enum': [name.value for name in ModelName],
                'description': (
                    'Model to use for completion. Note: llama-3.1 models will be deprecated after 2/22/2025'
                ),
                'default': ModelName.sonar.value,
            },
            'temperature': {'type': 'number', 'minimum': 0, 'maximum': 1, 'default': 0.7},
            'max_tokens': {'type': 'number', 'minimum': 1, 'maximum': 4096, 'default': 1024},
        },
        'required': ['messages'],
    }
