"""Checks that the automation server is up before a flow is sent to it."""

import logging

import httpx

from flowdeck.health.state import HealthState
from flowdeck.models import HealthStatus
from flowdeck.notifications import NotificationCenter

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_TIMEOUT = 4.0
REACHABLE_MESSAGE = "Automation server is reachable."
UNREACHABLE_FALLBACK = "Automation server is not reachable."


class HealthProbe:
    """
    Single GET against <base_url>/health.

    Exactly status 200 counts as healthy. Anything else (other status,
    connection error, timeout) marks the server unreachable and tells the
    user where the server was expected. One attempt per call, no retries.
    """

    def __init__(
        self,
        base_url: str,
        state: HealthState,
        notifications: NotificationCenter,
        timeout_seconds: float = DEFAULT_HEALTH_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._state = state
        self._notifications = notifications
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def health_url(self) -> str:
        return f"{self.base_url}/health"

    async def check(self) -> bool:
        """Probe the server. Returns True only for a 200 response."""
        detail = ""
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(self.health_url)
            if r.status_code == 200:
                logger.debug("Health check ok", extra={"url": self.health_url})
                self._notifications.success(REACHABLE_MESSAGE)
                self._state.set(HealthStatus.HEALTHY)
                return True
            detail = f"Request failed with status code {r.status_code}"
        except httpx.HTTPError as e:
            detail = str(e) or type(e).__name__
        except Exception as e:
            logger.warning("Health check raised unexpectedly: %s", e, exc_info=True)
            detail = str(e)

        logger.info("Health check failed: %s", detail, extra={"url": self.health_url})
        self._notifications.error(
            f"{detail or UNREACHABLE_FALLBACK}\nPlease ensure server is running at {self.base_url}"
        )
        self._state.set(HealthStatus.UNREACHABLE)
        return False
