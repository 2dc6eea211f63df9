from __future__ import annotations

import pytest
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

from perplexity_bridge.core.exceptions import (
    BridgeError,
    CompletionTimeoutError,
    InvalidArgumentError,
    MalformedResponseError,
    RemoteAPIError,
    RemoteCallError,
    ToolNotFoundError,
    UnknownTemplateError,
)
from perplexity_bridge.core.types import ContentType, ResponseFormat, ToolEnvelope


@pytest.mark.parametrize(
    ('error_cls', 'code'),
    [
        (InvalidArgumentError, INVALID_PARAMS),
        (UnknownTemplateError, INVALID_PARAMS),
        (ToolNotFoundError, METHOD_NOT_FOUND),
        (RemoteAPIError, INTERNAL_ERROR),
        (CompletionTimeoutError, INTERNAL_ERROR),
        (MalformedResponseError, INTERNAL_ERROR),
    ],
)
def test_error_codes(error_cls: type[BridgeError], code: int) -> None:
    assert error_cls.error_code == code


@pytest.mark.parametrize('error_cls', [RemoteAPIError, CompletionTimeoutError, MalformedResponseError])
def test_remote_family(error_cls: type[BridgeError]) -> None:
    assert issubclass(error_cls, RemoteCallError)


def test_default_message_and_to_json() -> None:
    err = ToolNotFoundError()
    assert str(err) == 'ToolNotFoundError'
    assert err.to_json() == {'error': {'type': 'ToolNotFoundError', 'code': METHOD_NOT_FOUND, 'message': 'ToolNotFoundError'}}


def test_envelope_success_omits_is_error() -> None:
    envelope = ToolEnvelope.success('x', ResponseFormat.text)
    assert envelope.to_wire() == {'content': [{'type': 'text', 'text': 'x'}]}


def test_envelope_from_error() -> None:
    envelope = ToolEnvelope.from_error(CompletionTimeoutError('Request timed out after 30 seconds'))
    assert envelope.is_error is True
    assert envelope.content[0].type == ContentType.text
    assert envelope.content[0].text == 'Error generating completion: Request timed out after 30 seconds'
