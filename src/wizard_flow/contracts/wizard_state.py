"""
Wizard State Definitions - Runtime state of steps and of the wizard as a whole.

All models are frozen. The state store never mutates a model in place; it
builds a new one with ``model_copy(update=...)`` and swaps it in, so readers
always observe a fully-applied step.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StepStatus(str, Enum):
    """Lifecycle status of a step."""
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    ERROR = "error"
    SKIPPED = "skipped"


STEP_INDICATOR_CLASSES: Dict[StepStatus, str] = {
    StepStatus.PENDING: "step-pending",
    StepStatus.ACTIVE: "step-active",
    StepStatus.COMPLETED: "step-completed",
    StepStatus.ERROR: "step-error",
    StepStatus.SKIPPED: "step-skipped",
}


def get_step_indicator_class(status: StepStatus) -> str:
    """Get the CSS class used by step indicators for a status."""
    return STEP_INDICATOR_CLASSES[StepStatus(status)]


class StepRuntimeState(BaseModel):
    """Runtime state of one step, at the same position as its definition."""

    id: str = Field(..., description="Step id (mirrors the definition)")
    status: StepStatus = Field(default=StepStatus.PENDING, description="Lifecycle status")
    visited: bool = Field(default=False, description="Whether the step has ever been entered")
    error: Optional[str] = Field(default=None, description="Last validation error message")
    data: Any = Field(default=None, description="Opaque step payload")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def update(self, **partial: Any) -> "StepRuntimeState":
        """Create a new step state with a shallow merge of ``partial``."""
        return self.model_copy(update=partial)


class WizardState(BaseModel):
    """Aggregate root: ordered step states plus the current index."""

    steps: Tuple[StepRuntimeState, ...] = Field(..., description="Step states in definition order")
    current_index: int = Field(default=0, ge=0, description="Index of the current step")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_index_in_range(self) -> "WizardState":
        if self.steps and self.current_index >= len(self.steps):
            raise ValueError(
                f"current_index {self.current_index} out of range for {len(self.steps)} steps"
            )
        return self

    @property
    def current(self) -> StepRuntimeState:
        return self.steps[self.current_index]

    def replace_step(self, index: int, **partial: Any) -> "WizardState":
        """Create a new state with the step at ``index`` shallow-merged."""
        steps = list(self.steps)
        steps[index] = steps[index].update(**partial)
        return self.model_copy(update={"steps": tuple(steps)})

    def move_to(self, index: int) -> "WizardState":
        """Create a new state with a different current index."""
        if not 0 <= index < len(self.steps):
            raise IndexError(f"Step index out of range: {index}")
        return self.model_copy(update={"current_index": index})

    def find(self, step_id: str) -> Optional[StepRuntimeState]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None
