"""
Tests for the action and scenario model.
"""

import pytest

from web_test_automation.exceptions import ActionValidationError
from web_test_automation.interfaces.action import (
    Action,
    ActionResult,
    ActionStatus,
    ActionType,
    Scenario,
)


class TestActionType:
    """Test ActionType lookup."""

    def test_action_types_exist(self):
        """The six step kinds are defined."""
        assert [t.value for t in ActionType] == [
            "Navigate",
            "Click",
            "Type",
            "WaitForElement",
            "VerifyText",
            "VerifyUrl",
        ]

    @pytest.mark.parametrize("name, expected", [
        ("Navigate", ActionType.NAVIGATE),
        ("click", ActionType.CLICK),
        ("WAIT_FOR_ELEMENT", ActionType.WAIT_FOR_ELEMENT),
        ("verify text", ActionType.VERIFY_TEXT),
        (" VerifyUrl ", ActionType.VERIFY_URL),
    ])
    def test_from_string(self, name, expected):
        """Names are matched ignoring case, underscores and spaces."""
        assert ActionType.from_string(name) is expected

    def test_from_string_unknown(self):
        """Unknown names give None."""
        assert ActionType.from_string("Hover") is None


class TestAction:
    """Test Action invariants."""

    def test_valid_actions(self):
        """Well-formed actions have no violations."""
        actions = [
            Action(ActionType.NAVIGATE, target="example.com"),
            Action(ActionType.CLICK, target="Login"),
            Action(ActionType.TYPE, target="email", value="a@b.c"),
            Action(ActionType.WAIT_FOR_ELEMENT, target="Results"),
            Action(ActionType.VERIFY_TEXT, value="Welcome"),
            Action(ActionType.VERIFY_URL, value="/dashboard"),
        ]
        for action in actions:
            assert action.violations() == {}
            action.validate()

    @pytest.mark.parametrize("action_type", [
        ActionType.NAVIGATE,
        ActionType.CLICK,
        ActionType.TYPE,
        ActionType.WAIT_FOR_ELEMENT,
    ])
    def test_target_required(self, action_type):
        """Blank targets are reported."""
        assert "target" in Action(action_type, target="  ", value="x").violations()

    @pytest.mark.parametrize("action_type", [ActionType.TYPE, ActionType.VERIFY_TEXT])
    def test_value_required(self, action_type):
        """Blank values are reported."""
        assert "value" in Action(action_type, target="field").violations()

    def test_verify_url_may_be_empty(self):
        """VerifyUrl accepts an empty value."""
        assert Action(ActionType.VERIFY_URL).violations() == {}

    def test_timeout_must_be_positive(self):
        """timeout_seconds must be greater than zero."""
        action = Action(ActionType.WAIT_FOR_ELEMENT, target="Results", timeout_seconds=0)
        assert "timeout_seconds" in action.violations()

    def test_validate_raises(self):
        """validate() raises with the offending fields."""
        with pytest.raises(ActionValidationError) as exc_info:
            Action(ActionType.TYPE, target="email").validate()

        assert exc_info.value.details["invalid_params"] == {"value": "Type requires a value"}

    def test_describe(self):
        """describe() renders type, target and value."""
        action = Action(ActionType.TYPE, target="email", value="admin@test.com")
        assert action.describe() == "Type: email = admin@test.com"

    def test_immutable(self):
        """Actions cannot be modified after creation."""
        action = Action(ActionType.CLICK, target="Login")
        with pytest.raises(AttributeError):
            action.target = "Logout"


class TestScenario:
    """Test Scenario."""

    def test_actions_stored_as_tuple(self):
        """Lists are converted so the scenario stays immutable."""
        scenario = Scenario(name="S", actions=[Action(ActionType.CLICK, target="Go")])
        assert isinstance(scenario.actions, tuple)
        assert len(scenario) == 1

    def test_defaults(self):
        """Description and base URL default to empty."""
        scenario = Scenario(name="S")
        assert scenario.description == ""
        assert scenario.base_url == ""
        assert len(scenario) == 0


class TestActionResult:
    """Test ActionResult constructors."""

    def test_success_result(self):
        """success_result() carries metadata."""
        result = ActionResult.success_result(ActionType.CLICK, attempts=2, strategy="role_button")

        assert result.success is True
        assert bool(result) is True
        assert result.status == ActionStatus.SUCCESS
        assert result.attempts == 2
        assert result.metadata == {"strategy": "role_button"}

    def test_failure_result(self):
        """failure_result() carries the error and its category."""
        result = ActionResult.failure_result(ActionType.CLICK, error="not found", error_type="NotFound")

        assert result.success is False
        assert bool(result) is False
        assert result.status == ActionStatus.FAILED
        assert result.error == "not found"
        assert result.error_type == "NotFound"
