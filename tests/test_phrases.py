import logging
from types import SimpleNamespace

import pytest

from coffeetime import config
from coffeetime.ai.phrases import RestPhraseService, resolve_phrase


class StaticSource:
    def __init__(self, text: str) -> None:
        self.text = text

    def fetch_phrase(self) -> str:
        return self.text


class FailingSource:
    def fetch_phrase(self) -> str:
        raise ConnectionError("offline")


class FakeCompletions:
    def __init__(self, content: str | None) -> None:
        self.content = content
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def service_with_reply(monkeypatch, content: str | None) -> tuple[RestPhraseService, FakeCompletions]:
    monkeypatch.setattr(config, "OPENAI_API_KEY", "")
    service = RestPhraseService()
    completions = FakeCompletions(content)
    service.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return service, completions


def test_resolve_phrase_uses_source_text() -> None:
    result = resolve_phrase(StaticSource("Small steps, big days."))
    assert result.text == "Small steps, big days."
    assert result.fallback_used is False
    assert result.notice == ""


def test_resolve_phrase_falls_back_on_failure() -> None:
    result = resolve_phrase(FailingSource(), fallback="Breathe.")
    assert result.text == "Breathe."
    assert result.fallback_used is True
    assert result.notice


def test_service_without_key_falls_back(monkeypatch) -> None:
    monkeypatch.setattr(config, "OPENAI_API_KEY", "")
    service = RestPhraseService()

    assert service.client is None
    with pytest.raises(RuntimeError):
        service.fetch_phrase()
    assert resolve_phrase(service).text == config.FALLBACK_PHRASE


def test_service_strips_quotes_from_reply(monkeypatch) -> None:
    service, completions = service_with_reply(monkeypatch, '  "Focus is a muscle."  ')

    assert service.fetch_phrase() == "Focus is a muscle."
    assert completions.calls[0]["model"] == service.model


def test_service_rejects_empty_reply(monkeypatch) -> None:
    service, _ = service_with_reply(monkeypatch, None)

    result = resolve_phrase(service)

    assert result.fallback_used is True


def test_fallback_warning_uses_lazy_args(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="coffeetime.ai.phrases"):
        resolve_phrase(FailingSource())

    record = caplog.records[-1]
    assert record.msg == "Could not fetch rest phrase: %s"
    assert isinstance(record.args[0], ConnectionError)
    assert record.getMessage() == "Could not fetch rest phrase: offline"
