from dataclasses import asdict

from pydantic import BaseModel, Field

from wasteland.domain import models as dm
from wasteland.domain.enums import ActionType


class ActionSubmission(BaseModel):
    action_type: ActionType
    data: dict[str, object] = Field(
        default_factory=dict, description="Payload fields for the chosen action type"
    )


class ActionSetSubmit(BaseModel):
    actions: list[ActionSubmission] = Field(default_factory=list, max_length=32)


class ActionRead(BaseModel):
    id: str
    action_type: ActionType
    data: dict[str, object]

    @classmethod
    def from_domain(cls, action: dm.PlannedAction) -> "ActionRead":
        return cls(id=action.id, action_type=action.action_type, data=asdict(action.data))


class TurnPlanRead(BaseModel):
    turn: int
    actions: dict[str, list[ActionRead]]
