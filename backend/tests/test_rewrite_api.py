from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from clarityhq.api.routes import rewrite as rewrite_route
from clarityhq.main import app
from clarityhq.services import rewrite_service
from clarityhq.services.rewrite_service import RewriteFailed, RewriteUnavailable


class _FakeCompletions:
    def __init__(self, content: str | None):
        self.content = content
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        choices = [SimpleNamespace(message=SimpleNamespace(content=self.content))]
        return SimpleNamespace(choices=choices)


def _fake_client(content: str | None):
    completions = _FakeCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_rewrite_sends_single_user_message(monkeypatch) -> None:
    fake, completions = _fake_client("Split the report into three steps")
    monkeypatch.setattr(rewrite_service.settings, "openai_model", "gpt-4")

    result = rewrite_service.rewrite_prompt("Break down: write report", client=fake)

    assert result == "Split the report into three steps"
    assert completions.calls == [
        {"model": "gpt-4", "messages": [{"role": "user", "content": "Break down: write report"}]}
    ]


def test_rewrite_rejects_blank_prompt() -> None:
    with pytest.raises(ValueError):
        rewrite_service.rewrite_prompt("   ", client=_fake_client("unused")[0])


def test_rewrite_requires_api_key(monkeypatch) -> None:
    monkeypatch.setattr(rewrite_service.settings, "openai_api_key", None)
    with pytest.raises(RewriteUnavailable):
        rewrite_service.rewrite_prompt("hello")


def test_rewrite_empty_completion_fails() -> None:
    with pytest.raises(RewriteFailed):
        rewrite_service.rewrite_prompt("hello", client=_fake_client("")[0])


def test_rewrite_endpoint_returns_result(client, monkeypatch) -> None:
    monkeypatch.setattr(rewrite_route, "rewrite_prompt", lambda prompt: f"rewritten: {prompt}")

    response = client.post("/ai/rewrite", json={"prompt": "tidy desk"})

    assert response.status_code == 200
    body = response.json()
    assert body["result"] == "rewritten: tidy desk"
    assert body["request_id"] == response.headers["X-Request-Id"]


def test_rewrite_endpoint_missing_prompt(client) -> None:
    response = client.post("/ai/rewrite", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing prompt in request body"


def test_rewrite_endpoint_unconfigured(client, monkeypatch) -> None:
    monkeypatch.setattr(rewrite_service.settings, "openai_api_key", None)

    response = client.post("/ai/rewrite", json={"prompt": "tidy desk"})

    assert response.status_code == 503


def test_rewrite_endpoint_provider_failure(client, monkeypatch) -> None:
    def _boom(prompt: str) -> str:
        raise RewriteFailed("upstream timeout")

    monkeypatch.setattr(rewrite_route, "rewrite_prompt", _boom)

    response = client.post("/ai/rewrite", json={"prompt": "tidy desk"})

    assert response.status_code == 502
