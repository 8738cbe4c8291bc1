"""Flow definitions and lookup by key."""

from collections.abc import Iterable, Iterator

from flowdeck.models import CardButton, DashboardCard, FlowDefinition

DEFAULT_FLOWS: list[FlowDefinition] = [
    FlowDefinition(
        key="login",
        label="Login (Playwright)",
        endpoint="/api/automation/run-login",
        description="Automate sign-in with predefined credentials.",
    ),
    FlowDefinition(
        key="signup",
        label="Signup Test (Playwright)",
        endpoint="/api/automation/run-student-full-flow",
        description="Full signup automation (email flow).",
    ),
    FlowDefinition(
        key="testCreation",
        label="Test Creation Automation",
        endpoint="/api/automation/run-test-creation",
        description="Automates instructor test creation.",
    ),
    FlowDefinition(
        key="courseCreation",
        label="Course Creation Automation",
        endpoint="/api/automation/run-course-creation",
        description="Automates instructor course creation.",
    ),
    FlowDefinition(
        key="purchase",
        label="Purchase Premium Course",
        endpoint="/api/automation/run-purchase",
        description="Runs the premium course purchase Playwright flow.",
    ),
    FlowDefinition(
        key="socialSignup",
        label="Social Signup (Playwright)",
        endpoint="/api/automation/run-social-signup",
        description="Triggers Google social signup flow.",
    ),
    # Same backend flow as "signup"; kept as its own entry so both cards work independently
    FlowDefinition(
        key="studentFull",
        label="Student Full Flow",
        endpoint="/api/automation/run-student-full-flow",
        description="Runs end-to-end student journey.",
    ),
    FlowDefinition(
        key="liveClass",
        label="Live Class API",
        endpoint="/api/automation/run-live-class",
        headed=False,
        description="Exercises live class API through the automation server.",
    ),
]

DASHBOARD_CARDS: list[DashboardCard] = [
    DashboardCard(
        title="Login Test",
        description="Automate sign-in with predefined credentials.",
        buttons=[CardButton(flow_key="login", caption="Login Test", primary=True)],
    ),
    DashboardCard(
        title="Signup Test",
        description="Full signup automation (email flow).",
        buttons=[CardButton(flow_key="signup", caption="Signup Test")],
    ),
    DashboardCard(
        title="Test Creation",
        description="Automates instructor test creation.",
        buttons=[
            CardButton(flow_key="testCreation", caption="Test Creation Automation"),
            CardButton(flow_key="courseCreation", caption="Course Creation Automation", primary=True),
        ],
    ),
    DashboardCard(
        title="Social Signup",
        description="Triggers Google social signup flow.",
        buttons=[CardButton(flow_key="socialSignup", caption="Social Signup (Playwright)")],
    ),
    DashboardCard(
        title="Purchase Premium Course",
        description="Runs the premium course purchase Playwright flow.",
        buttons=[CardButton(flow_key="purchase", caption="Purchase Premium Course")],
    ),
    DashboardCard(
        title="Student Full Flow",
        description="Runs end-to-end student journey.",
        buttons=[CardButton(flow_key="studentFull", caption="Student Full Flow")],
    ),
    DashboardCard(
        title="Live Class API",
        description="Exercises live class API through the automation server.",
        buttons=[CardButton(flow_key="liveClass", caption="Live Class API")],
    ),
]


class FlowRegistry:
    """
    Read-only mapping from flow key to FlowDefinition.

    Built once from a list of definitions. A repeated key replaces the
    earlier definition but keeps its original position.
    """

    def __init__(self, flows: Iterable[FlowDefinition]) -> None:
        self._flows: dict[str, FlowDefinition] = {}
        for flow in flows:
            self._flows[flow.key] = flow

    def get(self, key: str) -> FlowDefinition | None:
        """Return the flow for key, or None if no such flow is registered."""
        return self._flows.get(key)

    def keys(self) -> list[str]:
        return list(self._flows)

    def __contains__(self, key: object) -> bool:
        return key in self._flows

    def __iter__(self) -> Iterator[FlowDefinition]:
        return iter(list(self._flows.values()))

    def __len__(self) -> int:
        return len(self._flows)


def default_registry() -> FlowRegistry:
    """Registry of the flows exposed by the automation server."""
    return FlowRegistry(DEFAULT_FLOWS)
