"""Tests ensuring observability wiring is safe by default."""
from __future__ import annotations

import importlib


def test_app_import_succeeds_when_opik_is_disabled(monkeypatch) -> None:
    monkeypatch.setenv("OPIK_ENABLED", "false")
    monkeypatch.delenv("OPIK_API_KEY", raising=False)

    import clarityhq.core.config as core_config
    import clarityhq.observability.client as client_module
    import clarityhq.main as main_module

    importlib.reload(core_config)
    importlib.reload(client_module)
    reloaded_app = importlib.reload(main_module)

    assert hasattr(reloaded_app, "app")


def test_client_is_none_when_opik_disabled(monkeypatch) -> None:
    from clarityhq.observability import client as client_module

    monkeypatch.setattr(client_module.settings, "opik_enabled", False)
    client_module.reset_opik_client()
    try:
        assert client_module.init_opik() is None
        assert client_module.get_opik_client() is None
    finally:
        client_module.reset_opik_client()


def test_client_is_none_without_api_key(monkeypatch) -> None:
    from clarityhq.observability import client as client_module

    monkeypatch.setattr(client_module.settings, "opik_enabled", True)
    monkeypatch.setattr(client_module.settings, "opik_api_key", None)
    client_module.reset_opik_client()
    try:
        assert client_module.init_opik() is None
    finally:
        client_module.reset_opik_client()
