"""
Action Model - Typed steps, scenarios and their execution results.

A Scenario is an ordered list of Actions produced once per parsed prompt.
Actions are immutable; the executor only reads them.

Example:
    >>> action = Action(ActionType.CLICK, target="Products")
    >>> scenario = Scenario(name="smoke", actions=(action,))
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from web_test_automation.exceptions.action import ActionValidationError


class ActionType(Enum):
    """The closed set of steps a scenario can contain."""
    NAVIGATE = "Navigate"
    CLICK = "Click"
    TYPE = "Type"
    WAIT_FOR_ELEMENT = "WaitForElement"
    VERIFY_TEXT = "VerifyText"
    VERIFY_URL = "VerifyUrl"

    @classmethod
    def from_string(cls, name: str) -> Optional["ActionType"]:
        """
        Look up an action type by name, ignoring case.

        Accepts both the display form ("WaitForElement") and the
        enum member form ("WAIT_FOR_ELEMENT").

        Returns:
            The matching ActionType, or None if the name is unknown
        """
        key = name.strip().replace("_", "").replace(" ", "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


# Fields that must be non-empty, per action type
_REQUIRES_TARGET = frozenset({
    ActionType.NAVIGATE,
    ActionType.CLICK,
    ActionType.TYPE,
    ActionType.WAIT_FOR_ELEMENT,
})
_REQUIRES_VALUE = frozenset({
    ActionType.TYPE,
    ActionType.VERIFY_TEXT,
})


@dataclass(frozen=True)
class Action:
    """
    A single test step.

    Construction never raises; call ``validate()`` to check the
    per-type contract. The executor does so before touching the page.

    Attributes:
        type: What the step does
        target: Element descriptor or URL (unused for VerifyUrl)
        value: Text to type or verify (empty for Navigate/Click)
        timeout_seconds: Upper bound for WaitForElement
        parameters: Extra parameters carried through from the parser
    """
    type: ActionType
    target: str = ""
    value: str = ""
    timeout_seconds: int = 30
    parameters: Mapping[str, str] = field(default_factory=dict)

    def violations(self) -> Dict[str, str]:
        """Return a field -> problem mapping; empty when the action is valid."""
        problems: Dict[str, str] = {}
        if self.type in _REQUIRES_TARGET and not self.target.strip():
            problems["target"] = f"{self.type.value} requires a target"
        if self.type in _REQUIRES_VALUE and not self.value.strip():
            problems["value"] = f"{self.type.value} requires a value"
        if self.timeout_seconds <= 0:
            problems["timeout_seconds"] = "timeout_seconds must be positive"
        return problems

    def validate(self) -> None:
        """
        Check the per-type invariants.

        Raises:
            ActionValidationError: If a required field is empty
        """
        problems = self.violations()
        if problems:
            raise ActionValidationError(
                "; ".join(problems.values()),
                action_type=self.type.value,
                invalid_params=problems,
            )

    def describe(self) -> str:
        """One-line human-readable form, e.g. ``Type: email = admin@test.com``."""
        return f"{self.type.value}: {self.target} = {self.value}"


@dataclass(frozen=True)
class Scenario:
    """
    An ordered sequence of actions.

    Attributes:
        name: Display name
        description: The original prompt, kept for audit
        actions: Steps in execution order
        base_url: Optional base URL (advisory only)
    """
    name: str
    actions: Tuple[Action, ...] = ()
    description: str = ""
    base_url: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the scenario stays immutable
        if not isinstance(self.actions, tuple):
            object.__setattr__(self, "actions", tuple(self.actions))

    def __len__(self) -> int:
        return len(self.actions)


class ActionStatus(Enum):
    """Status of an action execution."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ActionResult:
    """
    Result of an action execution.

    Attributes:
        success: Whether the action succeeded
        action_type: The type of action that was executed
        status: Detailed status of the action
        error: Reason for the failure, suitable for a human operator
        error_type: Failure category (e.g. 'ValidationError', 'NotFound')
        duration_ms: Time taken to execute the action in milliseconds
        attempts: Number of interaction attempts made
        metadata: Additional action-specific metadata
    """
    success: bool
    action_type: ActionType
    status: ActionStatus = ActionStatus.SUCCESS
    error: Optional[str] = None
    error_type: Optional[str] = None
    duration_ms: float = 0.0
    attempts: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def success_result(
        cls,
        action_type: ActionType,
        attempts: int = 1,
        **metadata: Any,
    ) -> "ActionResult":
        """Create a successful action result."""
        return cls(
            success=True,
            action_type=action_type,
            status=ActionStatus.SUCCESS,
            attempts=attempts,
            metadata=metadata,
        )

    @classmethod
    def failure_result(
        cls,
        action_type: ActionType,
        error: str,
        error_type: str = "ActionError",
        attempts: int = 0,
        **metadata: Any,
    ) -> "ActionResult":
        """Create a failed action result."""
        return cls(
            success=False,
            action_type=action_type,
            status=ActionStatus.FAILED,
            error=error,
            error_type=error_type,
            attempts=attempts,
            metadata=metadata,
        )
