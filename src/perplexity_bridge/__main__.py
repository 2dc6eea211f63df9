"""Entry point: `python -m perplexity_bridge` / `perplexity-bridge`.

Configures logging (stderr only; stdout belongs to the stdio transport),
validates configuration, and serves MCP over stdio.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from perplexity_bridge.adapters.perplexity_adapter import PerplexityAdapter
from perplexity_bridge.config import Settings, load_settings
from perplexity_bridge.core.exceptions import ConfigurationError
from perplexity_bridge.server.mcp_server import build_server, serve_stdio
from perplexity_bridge.service import ChatCompletionService

logger = logging.getLogger('perplexity_bridge')

DIST_NAME = 'perplexity-bridge'


def package_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:  # running from a source checkout
        return '0.0.0'


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format='[%(levelname)s] %(name)s:%(lineno)d - %(message)s',
    )


async def run(settings: Settings) -> None:
    adapter = PerplexityAdapter(
        settings.api_key.get_secret_value(),
        base_url=settings.base_url,
        timeout=settings.timeout,
    )
    server = build_server(ChatCompletionService(adapter), name=DIST_NAME, version=package_version())
    try:
        await serve_stdio(server)
    finally:
        await adapter.aclose()


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging('ERROR')
        logger.error('%s', exc)  # noqa: TRY400
        raise SystemExit(1) from exc

    configure_logging(settings.log_level)
    asyncio.run(run(settings))


if __name__ == '__main__':
    main()
