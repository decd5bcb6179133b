"""
Wizard Data Aggregator - Values derived from the canonical wizard state.

Every function here is a pure function of a WizardState snapshot (plus
config where the policy matters). Nothing is cached; callers recompute on
access.
"""

import math
from typing import Any, Dict

from wizard_flow.contracts import StepStatus, WizardState

_DONE_STATUSES = (StepStatus.COMPLETED, StepStatus.SKIPPED)


def completed_count(state: WizardState) -> int:
    return sum(1 for step in state.steps if step.status == StepStatus.COMPLETED)


def compute_progress(state: WizardState) -> int:
    """Percentage (0-100) of completed steps, rounded half up; skipped steps do not count."""
    total = len(state.steps)
    if total == 0:
        return 0
    return math.floor(completed_count(state) / total * 100 + 0.5)


def aggregate_data(state: WizardState) -> Dict[str, Any]:
    """Merge step payloads into one dict keyed by step id."""
    return {step.id: step.data for step in state.steps if step.data is not None}


def is_complete(state: WizardState) -> bool:
    return all(step.status in _DONE_STATUSES for step in state.steps)


def is_first(state: WizardState) -> bool:
    return state.current_index == 0


def is_last(state: WizardState) -> bool:
    return state.current_index == len(state.steps) - 1


def can_next(state: WizardState) -> bool:
    return not is_last(state) and state.current.status != StepStatus.ERROR


def can_prev(state: WizardState, allow_back: bool) -> bool:
    return allow_back and not is_first(state)


def summarize(state: WizardState, allow_back: bool = True) -> Dict[str, Any]:
    """Get a summary of the wizard state for UIs and logs."""
    return {
        "current_step": state.current.id,
        "current_index": state.current_index,
        "total_steps": len(state.steps),
        "completed_steps": completed_count(state),
        "progress_percentage": compute_progress(state),
        "is_complete": is_complete(state),
        "can_next": can_next(state),
        "can_prev": can_prev(state, allow_back),
        "statuses": {step.id: step.status.value for step in state.steps},
        "errors": {step.id: step.error for step in state.steps if step.error},
    }
