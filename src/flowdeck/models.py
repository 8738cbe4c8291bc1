"""Shared data models for the automation console."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Reachability of the automation server as last seen by the health probe."""

    UNKNOWN = "Unknown"
    HEALTHY = "Healthy"
    UNREACHABLE = "Unreachable"


class FlowRequest(BaseModel):
    """Body POSTed to a flow endpoint."""

    headed: bool = True


class FlowDefinition(BaseModel):
    """One automation flow the console can trigger."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    endpoint: str
    # None means headed; only an explicit False runs headless
    headed: bool | None = None
    description: str = ""

    @property
    def path(self) -> str:
        """Endpoint with exactly one leading slash."""
        return "/" + self.endpoint.lstrip("/")

    def request_body(self, headed: bool | None = None) -> FlowRequest:
        """Build the request payload; an explicit headed argument wins over the default."""
        if headed is None:
            headed = self.headed is not False
        return FlowRequest(headed=headed)


class FlowResponse(BaseModel):
    """Response body of a flow endpoint. Every field is optional."""

    model_config = ConfigDict(extra="allow")

    success: Any = None
    message: Any = None
    output: Any = None
    errors: Any = None

    @property
    def failed(self) -> bool:
        """Only an explicit success=false counts as a reported failure."""
        return self.success is False

    @classmethod
    def from_payload(cls, payload: Any) -> "FlowResponse":
        """Parse a decoded JSON body; anything that is not an object reads as empty."""
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)


class NotificationLevel(str, Enum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A message shown to the user (toast on the dashboard, line on the CLI)."""

    id: int
    level: NotificationLevel
    text: str
    flow_key: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RunOutcome(str, Enum):
    """How a single run_flow call ended."""

    COMPLETED = "completed"
    FAILED = "failed"
    ABORTED = "aborted"  # health check failed, nothing was sent
    IGNORED = "ignored"  # unknown flow key
    REJECTED = "rejected"  # already running and re-entry is disabled


class RunResult(BaseModel):
    """Summary of one run_flow call."""

    key: str
    outcome: RunOutcome
    message: str = ""
    output: Any = None
    errors: Any = None

    @property
    def ok(self) -> bool:
        return self.outcome == RunOutcome.COMPLETED


class CardButton(BaseModel):
    """Trigger button on a dashboard card."""

    flow_key: str
    caption: str
    primary: bool = False


class DashboardCard(BaseModel):
    """A card on the dashboard page grouping one or more flow triggers."""

    title: str
    description: str = ""
    buttons: list[CardButton] = Field(default_factory=list)
