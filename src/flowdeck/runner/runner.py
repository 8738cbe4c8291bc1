"""Runs one flow: health check, POST to the flow endpoint, user feedback."""

import logging
from typing import Any

import httpx

from flowdeck.health import HealthProbe
from flowdeck.models import FlowDefinition, FlowResponse, RunOutcome, RunResult
from flowdeck.notifications import NotificationCenter
from flowdeck.registry import FlowRegistry

logger = logging.getLogger(__name__)
# Response output/errors go here, not to the user
diagnostics = logging.getLogger("flowdeck.diagnostics")

DEFAULT_FLOW_TIMEOUT = 600.0
UNKNOWN_ERROR = "Unknown error"


def _has_value(value: Any) -> bool:
    """Set and non-empty: None, False, 0 and "" are blank; empty lists and objects are not."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value == value and value != 0
    if isinstance(value, str):
        return value != ""
    return True


def _server_message(response: httpx.Response | None) -> str:
    """message field of an error response body, if it has one."""
    if response is None:
        return ""
    try:
        data = response.json()
    except ValueError:
        return ""
    if isinstance(data, dict) and _has_value(data.get("message")):
        return str(data["message"])
    return ""


def _error_detail(error: Exception) -> str:
    """Best description of a failed POST: server message, then error text, then a fallback."""
    if isinstance(error, httpx.HTTPStatusError):
        return _server_message(error.response) or (
            f"Request failed with status code {error.response.status_code}"
        )
    return str(error) or UNKNOWN_ERROR


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class FlowRunner:
    """
    Triggers registered flows on the automation server.

    Tracks a busy flag per flow key. Every run goes Idle -> Running -> Idle;
    the flag is cleared on every exit path. Runs of different keys are
    independent. The same key may run twice at once unless reject_concurrent
    is set.
    """

    def __init__(
        self,
        registry: FlowRegistry,
        probe: HealthProbe,
        notifications: NotificationCenter,
        base_url: str,
        timeout_seconds: float = DEFAULT_FLOW_TIMEOUT,
        reject_concurrent: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.registry = registry
        self.base_url = base_url.rstrip("/")
        self._probe = probe
        self._notifications = notifications
        self._timeout = timeout_seconds
        self._reject_concurrent = reject_concurrent
        self._transport = transport
        self._running: dict[str, bool] = {}

    def is_running(self, key: str) -> bool:
        return self._running.get(key, False)

    def running(self) -> dict[str, bool]:
        """Snapshot of the busy flags."""
        return dict(self._running)

    def flow_url(self, flow: FlowDefinition) -> str:
        return f"{self.base_url}{flow.path}"

    async def run_flow(self, key: str, headed: bool | None = None) -> RunResult:
        """
        Run the flow registered under key.

        Unknown keys are ignored without any side effect. Otherwise the
        server is health-checked first; if it is unreachable nothing is
        sent. Errors never propagate: they become error notifications.
        """
        flow = self.registry.get(key)
        if flow is None:
            logger.debug("Ignoring unknown flow key %r", key)
            return RunResult(key=key, outcome=RunOutcome.IGNORED)

        if self._reject_concurrent and self.is_running(key):
            text = f"{flow.label} is already running"
            self._notifications.error(text, flow_key=key)
            return RunResult(key=key, outcome=RunOutcome.REJECTED, message=text)

        self._running[key] = True
        try:
            if not await self._probe.check():
                logger.info("Flow %s aborted: automation server unreachable", key)
                return RunResult(key=key, outcome=RunOutcome.ABORTED)
            return await self._execute(flow, headed)
        except Exception as e:
            logger.warning("Flow %s raised unexpectedly: %s", key, e, exc_info=True)
            text = f"{flow.label} failed: {str(e) or UNKNOWN_ERROR}"
            self._notifications.error(text, flow_key=key)
            return RunResult(key=key, outcome=RunOutcome.FAILED, message=text)
        finally:
            self._running[key] = False

    async def _execute(self, flow: FlowDefinition, headed: bool | None) -> RunResult:
        body = flow.request_body(headed)
        url = self.flow_url(flow)
        logger.info("Starting flow %s", flow.key, extra={"url": url, "headed": body.headed})
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.post(url, json=body.model_dump())
                r.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Flow %s request failed: %s", flow.key, e, exc_info=True)
            text = f"{flow.label} failed: {_error_detail(e)}"
            self._notifications.error(text, flow_key=flow.key)
            return RunResult(key=flow.key, outcome=RunOutcome.FAILED, message=text)

        response = FlowResponse.from_payload(_decode_body(r))
        if response.failed:
            text = str(response.message) if _has_value(response.message) else f"{flow.label} failed"
            self._notifications.error(text, flow_key=flow.key)
            outcome = RunOutcome.FAILED
        else:
            text = f"{flow.label} completed"
            self._notifications.success(text, flow_key=flow.key)
            outcome = RunOutcome.COMPLETED

        if _has_value(response.output):
            diagnostics.info("%s", response.output, extra={"flow_key": flow.key})
        if _has_value(response.errors):
            diagnostics.warning("%s", response.errors, extra={"flow_key": flow.key})

        return RunResult(
            key=flow.key,
            outcome=outcome,
            message=text,
            output=response.output,
            errors=response.errors,
        )
