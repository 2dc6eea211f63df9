"""config

Process configuration read from the environment (and an optional `.env`).

`PERPLEXITY_API_KEY` is mandatory; without it the server refuses to start.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from perplexity_bridge.adapters.perplexity_adapter import DEFAULT_BASE_URL
from perplexity_bridge.core.abc import DEFAULT_TIMEOUT_SEC
from perplexity_bridge.core.exceptions import ConfigurationError


class Settings(BaseModel):
    """Runtime configuration for the bridge."""

    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(DEFAULT_TIMEOUT_SEC, gt=0)
    log_level: str = 'INFO'

    model_config = ConfigDict(frozen=True)


def load_settings(*, use_dotenv: bool = True) -> Settings:
    """Build `Settings` from the process environment.

    Raises
    ------
    ConfigurationError
        If `PERPLEXITY_API_KEY` is missing/blank or another value is invalid.

    """
    if use_dotenv:
        load_dotenv()

    api_key = (os.getenv('PERPLEXITY_API_KEY') or '').strip()
    if not api_key:
        raise ConfigurationError('PERPLEXITY_API_KEY environment variable is required')

    try:
        return Settings(
            api_key=SecretStr(api_key),
            base_url=os.getenv('PERPLEXITY_BASE_URL') or DEFAULT_BASE_URL,
            timeout=os.getenv('PERPLEXITY_TIMEOUT') or DEFAULT_TIMEOUT_SEC,
            log_level=(os.getenv('PERPLEXITY_BRIDGE_LOG_LEVEL') or 'INFO').upper(),
        )
    except ValidationError as exc:
        raise ConfigurationError(f'Invalid configuration: {exc}') from exc
