"""Tests for the flow registry."""

from flowdeck.models import FlowDefinition
from flowdeck.registry import DASHBOARD_CARDS, DEFAULT_FLOWS, FlowRegistry, default_registry

EXPECTED_ENDPOINTS = {
    "login": "/api/automation/run-login",
    "signup": "/api/automation/run-student-full-flow",
    "testCreation": "/api/automation/run-test-creation",
    "courseCreation": "/api/automation/run-course-creation",
    "purchase": "/api/automation/run-purchase",
    "socialSignup": "/api/automation/run-social-signup",
    "studentFull": "/api/automation/run-student-full-flow",
    "liveClass": "/api/automation/run-live-class",
}


def test_default_registry_has_all_flows_in_order():
    registry = default_registry()
    assert registry.keys() == list(EXPECTED_ENDPOINTS)
    assert len(registry) == 8
    for key, endpoint in EXPECTED_ENDPOINTS.items():
        assert registry.get(key).endpoint == endpoint


def test_signup_and_student_full_share_endpoint_but_stay_separate():
    registry = default_registry()
    signup = registry.get("signup")
    student_full = registry.get("studentFull")
    assert signup.endpoint == student_full.endpoint
    assert signup.label != student_full.label


def test_only_live_class_is_headless():
    registry = default_registry()
    headless = [flow.key for flow in registry if not flow.request_body().headed]
    assert headless == ["liveClass"]


def test_unknown_key_is_not_found():
    registry = default_registry()
    assert registry.get("doesNotExist") is None
    assert "doesNotExist" not in registry
    assert "login" in registry


def test_duplicate_key_last_write_wins():
    registry = FlowRegistry(
        [
            FlowDefinition(key="a", label="First", endpoint="/one"),
            FlowDefinition(key="b", label="Other", endpoint="/two"),
            FlowDefinition(key="a", label="Second", endpoint="/three"),
        ]
    )
    assert len(registry) == 2
    assert registry.get("a").label == "Second"
    assert registry.keys() == ["a", "b"]


def test_request_body_override():
    flow = FlowDefinition(key="x", label="X", endpoint="x")
    assert flow.request_body().headed is True
    assert flow.request_body(headed=False).headed is False
    live = default_registry().get("liveClass")
    assert live.request_body(headed=True).headed is True


def test_path_gets_single_leading_slash():
    assert FlowDefinition(key="x", label="X", endpoint="api/run").path == "/api/run"
    assert FlowDefinition(key="x", label="X", endpoint="/api/run").path == "/api/run"


def test_cards_reference_registered_flows():
    keys = {flow.key for flow in DEFAULT_FLOWS}
    card_keys = [b.flow_key for card in DASHBOARD_CARDS for b in card.buttons]
    assert sorted(card_keys) == sorted(keys)
    test_card = next(c for c in DASHBOARD_CARDS if c.title == "Test Creation")
    assert [b.flow_key for b in test_card.buttons] == ["testCreation", "courseCreation"]
    assert test_card.buttons[1].primary is True
