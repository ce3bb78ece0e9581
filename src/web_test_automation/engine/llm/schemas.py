"""
Schemas - Structured output definitions for LLM responses.

Uses Pydantic to validate the ``{"actions": [...]}`` document the model
returns before it is turned into a Scenario.
"""

import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from web_test_automation.interfaces.action import Action, ActionType


class ParsedAction(BaseModel):
    """A single action as written by the model."""
    type: str
    target: str = ""
    value: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("target", "value", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("type", mode="before")
    @classmethod
    def _type_to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    def to_action(self) -> Optional[Action]:
        """Convert to an Action, or None when the type is unknown."""
        action_type = ActionType.from_string(self.type)
        if action_type is None:
            return None
        return Action(type=action_type, target=self.target, value=self.value)


class ParsedScenario(BaseModel):
    """Complete parsed scenario from the model."""
    actions: List[ParsedAction]

    @classmethod
    def from_json(cls, data: Union[List, Dict]) -> "ParsedScenario":
        """Parse from JSON (handles both list and object formats)."""
        if isinstance(data, list):
            return cls(actions=data)
        elif isinstance(data, dict) and "actions" in data:
            return cls(actions=data["actions"])
        else:
            raise ValueError(f"Invalid parsed scenario format: {type(data).__name__}")

    def to_actions(self) -> List[Action]:
        """Known actions in order; unknown types are dropped."""
        actions = []
        for parsed in self.actions:
            action = parsed.to_action()
            if action is not None:
                actions.append(action)
        return actions


def extract_json(text: str) -> Any:
    """
    Decode the JSON document in a model reply.

    Handles markdown code blocks and leading prose before the document.

    Raises:
        ValueError: If no JSON document can be decoded
    """
    json_text = text.strip()
    if "```json" in json_text:
        start = json_text.find("```json") + 7
        end = json_text.find("```", start)
        json_text = json_text[start:end if end != -1 else None].strip()
    elif "```" in json_text:
        start = json_text.find("```") + 3
        end = json_text.find("```", start)
        json_text = json_text[start:end if end != -1 else None].strip()

    try:
        return json.loads(json_text)
    except json.JSONDecodeError:
        pass

    # Fall back to the first object or array in the text
    starts = [i for i in (json_text.find("{"), json_text.find("[")) if i != -1]
    if not starts:
        raise ValueError("No JSON document found in response")
    try:
        data, _ = json.JSONDecoder().raw_decode(json_text[min(starts):])
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON parse error: {e}") from e
    return data
