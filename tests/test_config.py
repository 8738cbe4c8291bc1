"""Tests for settings loading."""

from flowdeck.config import DEFAULT_SERVER_URL, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("AUTOMATION_SERVER_URL", raising=False)
    monkeypatch.delenv("VITE_AUTOMATION_SERVER_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.automation_server_url == DEFAULT_SERVER_URL == "http://localhost:3001"
    assert settings.health_timeout_seconds == 4.0
    assert settings.flow_timeout_seconds == 600.0
    assert settings.reject_concurrent_runs is False


def test_trailing_slash_stripped(monkeypatch):
    monkeypatch.setenv("AUTOMATION_SERVER_URL", "http://automation.internal:3001/")
    assert Settings(_env_file=None).automation_server_url == "http://automation.internal:3001"


def test_vite_variable_accepted(monkeypatch):
    monkeypatch.delenv("AUTOMATION_SERVER_URL", raising=False)
    monkeypatch.setenv("VITE_AUTOMATION_SERVER_URL", "http://x:1/")
    assert Settings(_env_file=None).automation_server_url == "http://x:1"


def test_blank_url_falls_back_to_default():
    assert Settings(_env_file=None, automation_server_url="  ").automation_server_url == DEFAULT_SERVER_URL
