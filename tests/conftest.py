"""Shared fixtures: a fake automation server behind httpx.MockTransport."""

import json

import httpx
import pytest

from flowdeck.health import HealthProbe, HealthState
from flowdeck.notifications import NotificationCenter
from flowdeck.registry import default_registry
from flowdeck.runner import FlowRunner

BASE_URL = "http://automation.test"


class FakeAutomationServer:
    """
    Answers /health and flow POSTs from canned responses and records every request.

    health / flows values may be an httpx.Response or an exception class to raise.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.health: httpx.Response | type[Exception] = httpx.Response(200, json={"status": "ok"})
        self.flows: dict[str, httpx.Response | type[Exception]] = {}
        self.default_flow_response = httpx.Response(200, json={"success": True})

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/health":
            answer = self.health
        else:
            answer = self.flows.get(request.url.path, self.default_flow_response)
        if isinstance(answer, type) and issubclass(answer, Exception):
            raise answer("simulated failure", request=request)
        # fresh copy: a Response instance is tied to the request that received it
        return httpx.Response(answer.status_code, headers=answer.headers, content=answer.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def posts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    def post_bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.posts]


@pytest.fixture
def server():
    return FakeAutomationServer()


@pytest.fixture
def notifications():
    return NotificationCenter()


@pytest.fixture
def health_state():
    return HealthState()


@pytest.fixture
def probe(server, health_state, notifications):
    return HealthProbe(BASE_URL, health_state, notifications, transport=server.transport)


@pytest.fixture
def runner(server, probe, notifications):
    return FlowRunner(
        default_registry(),
        probe,
        notifications,
        BASE_URL,
        transport=server.transport,
    )
