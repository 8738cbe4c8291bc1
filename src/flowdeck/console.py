"""
Automation console wiring.

  Settings → registry, health state, notifications → HealthProbe → FlowRunner

Shared by the CLI and the dashboard so both see the same busy flags,
health indicator and notification feed.
"""

import logging
from typing import Any

import httpx

from flowdeck.config import Settings, get_settings
from flowdeck.health import HealthProbe, HealthState
from flowdeck.models import HealthStatus, RunResult
from flowdeck.notifications import NotificationCenter, NotificationSink, SlackNotifier
from flowdeck.registry import FlowRegistry, default_registry
from flowdeck.runner import FlowRunner

logger = logging.getLogger(__name__)


class AutomationConsole:
    """All components of one console session."""

    def __init__(
        self,
        settings: Settings,
        registry: FlowRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.base_url = settings.automation_server_url
        self.registry = registry or default_registry()
        self.health = HealthState()
        self._last_health = self.health.status
        self.health.subscribe(self._on_health)

        sinks: list[NotificationSink] = []
        slack = SlackNotifier(bot_token=settings.slack_bot_token, channel_id=settings.slack_channel_id)
        if slack.configured:
            sinks.append(slack)
        self.notifications = NotificationCenter(
            sinks=sinks,
            max_history=settings.notification_history_size,
        )
        self.probe = HealthProbe(
            self.base_url,
            self.health,
            self.notifications,
            timeout_seconds=settings.health_timeout_seconds,
            transport=transport,
        )
        self.runner = FlowRunner(
            self.registry,
            self.probe,
            self.notifications,
            self.base_url,
            timeout_seconds=settings.flow_timeout_seconds,
            reject_concurrent=settings.reject_concurrent_runs,
            transport=transport,
        )

    @property
    def health_status(self) -> HealthStatus:
        return self.health.status

    def _on_health(self, status: HealthStatus) -> None:
        if status != self._last_health:
            logger.info(
                "Automation server health: %s -> %s",
                self._last_health.value,
                status.value,
                extra={"base_url": self.base_url},
            )
        self._last_health = status

    async def check_health(self) -> bool:
        ok = await self.probe.check()
        await self.notifications.flush()
        return ok

    async def run_flow(self, key: str, headed: bool | None = None) -> RunResult:
        result = await self.runner.run_flow(key, headed=headed)
        await self.notifications.flush()
        return result

    def snapshot(self) -> dict[str, Any]:
        """Current health indicator and busy flags, for display."""
        return {
            "base_url": self.base_url,
            "health": self.health.status.value,
            "health_updated_at": self.health.updated_at.isoformat() if self.health.updated_at else None,
            "running": {key: self.runner.is_running(key) for key in self.registry.keys()},
        }


def build_console(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AutomationConsole:
    """Build a console from settings (environment and .env when not given)."""
    settings = settings or get_settings()
    logger.debug("Automation server: %s", settings.automation_server_url)
    return AutomationConsole(settings, transport=transport)
