"""Tests for the dashboard app."""

import httpx
import pytest
from fastapi.testclient import TestClient

from dashboard.app import app, reset_console
from flowdeck.config import Settings
from flowdeck.console import build_console


class _Server:
    def __init__(self) -> None:
        self.healthy = True
        self.flow_body: dict = {"success": True}
        self.posts: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(200 if self.healthy else 503)
        self.posts.append(request)
        return httpx.Response(200, json=self.flow_body)


@pytest.fixture
def server():
    return _Server()


@pytest.fixture
def console(server):
    settings = Settings(_env_file=None, automation_server_url="http://automation.test")
    console = build_console(settings, transport=httpx.MockTransport(server.handler))
    reset_console(console)
    yield console
    reset_console()


@pytest.fixture
def client(console):
    return TestClient(app)


def test_index_serves_page(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "Check Server Health" in r.text


def test_flows_lists_registry_and_cards(client):
    r = client.get("/api/flows")
    assert r.status_code == 200
    data = r.json()
    assert data["base_url"] == "http://automation.test"
    keys = [f["key"] for f in data["flows"]]
    assert keys[0] == "login"
    assert len(keys) == 8
    live = next(f for f in data["flows"] if f["key"] == "liveClass")
    assert live["headed"] is False
    assert any(c["title"] == "Test Creation" and len(c["buttons"]) == 2 for c in data["cards"])


def test_status_starts_unknown(client):
    data = client.get("/api/status").json()
    assert data["health"] == "Unknown"
    assert data["running"]["login"] is False


def test_health_check_updates_indicator(client, server):
    r = client.post("/api/health/check")
    assert r.json() == {"ok": True, "health": "Healthy"}

    server.healthy = False
    r = client.post("/api/health/check")
    assert r.json() == {"ok": False, "health": "Unreachable"}
    assert client.get("/api/status").json()["health"] == "Unreachable"


def test_run_flow_completes_and_notifies(client, server):
    r = client.post("/api/flows/login/run")
    assert r.status_code == 202
    assert r.json() == {"accepted": True, "key": "login"}

    assert len(server.posts) == 1
    status = client.get("/api/status").json()
    assert status["running"]["login"] is False
    assert status["health"] == "Healthy"
    texts = [n["text"] for n in client.get("/api/notifications").json()["notifications"]]
    assert texts[-1] == "Login (Playwright) completed"


def test_run_flow_aborted_when_unreachable(client, server):
    server.healthy = False
    client.post("/api/flows/purchase/run")
    assert server.posts == []
    assert client.get("/api/status").json()["running"]["purchase"] is False


def test_notifications_after_id(client, server):
    server.flow_body = {"success": False, "message": "bad creds"}
    client.post("/api/flows/login/run")
    all_items = client.get("/api/notifications").json()["notifications"]
    assert [n["level"] for n in all_items] == ["success", "error"]
    newer = client.get(f"/api/notifications?after={all_items[0]['id']}").json()["notifications"]
    assert [n["text"] for n in newer] == ["bad creds"]


def test_unknown_flow_returns_404(client, server):
    r = client.post("/api/flows/doesNotExist/run")
    assert r.status_code == 404
    assert server.posts == []
    assert client.get("/api/notifications").json()["notifications"] == []
