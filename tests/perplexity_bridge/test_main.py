from __future__ import annotations

import pytest

import perplexity_bridge.__main__ as entrypoint
import perplexity_bridge.config as config_module


def test_main_refuses_to_start_without_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('PERPLEXITY_API_KEY', raising=False)
    monkeypatch.setattr(config_module, 'load_dotenv', lambda *_, **__: False)
    served = {'cnt': 0}

    async def _run(settings: object) -> None:  # noqa: ARG001
        served['cnt'] += 1

    monkeypatch.setattr(entrypoint, 'run', _run)

    with pytest.raises(SystemExit) as exc_info:
        entrypoint.main()

    assert exc_info.value.code == 1
    assert served['cnt'] == 0


def test_main_serves_when_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('PERPLEXITY_API_KEY', 'k')
    monkeypatch.setattr(config_module, 'load_dotenv', lambda *_, **__: False)
    seen: list[str] = []

    async def _run(settings: config_module.Settings) -> None:
        seen.append(settings.api_key.get_secret_value())

    monkeypatch.setattr(entrypoint, 'run', _run)

    entrypoint.main()

    assert seen == ['k']
