"""
Wizard State Store - Single source of truth for step runtime state.

Holds the canonical WizardState. Every change builds a new frozen state and
swaps it in, then notifies listeners.
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from wizard_flow.contracts import StepRegistry, StepRuntimeState, StepStatus, WizardState

logger = logging.getLogger(__name__)

StateListener = Callable[[WizardState], None]


class WizardStateStore:
    """State holder for one wizard instance."""

    def __init__(self, registry: StepRegistry, initial_data: Optional[Mapping[str, Any]] = None):
        self._registry = registry
        self._initial_data: Dict[str, Any] = copy.deepcopy(dict(initial_data or {}))
        self._listeners: List[StateListener] = []
        self._state = self._build_initial_state()

    def _build_initial_state(self) -> WizardState:
        steps = []
        for index, step in enumerate(self._registry):
            data = self._initial_data.get(step.id)
            steps.append(
                StepRuntimeState(
                    id=step.id,
                    status=StepStatus.ACTIVE if index == 0 else StepStatus.PENDING,
                    visited=index == 0,
                    error=None,
                    data=copy.deepcopy(data) if data is not None else {},
                )
            )
        return WizardState(steps=tuple(steps), current_index=0)

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def steps(self):
        return self._state.steps

    @property
    def current_index(self) -> int:
        return self._state.current_index

    def get_step_state(self, index: int) -> StepRuntimeState:
        return self._state.steps[index]

    def update_step_state(self, index: int, **partial: Any) -> StepRuntimeState:
        """Replace the step at ``index`` with a shallow merge of ``partial``."""
        self._swap(self._state.replace_step(index, **partial))
        return self._state.steps[index]

    def set_current_index(self, index: int) -> None:
        self._swap(self._state.move_to(index))

    def commit_transition(
        self,
        from_index: int,
        to_index: int,
        departing_status: Optional[StepStatus] = None,
    ) -> None:
        """
        Apply a navigation commit as a single state change.

        The departing step takes ``departing_status`` (unchanged when None),
        the target becomes active and visited, and the current index moves.
        Listeners are notified once, with the fully-applied state.
        """
        new_state = self._state
        if departing_status is not None:
            new_state = new_state.replace_step(from_index, status=departing_status)
        new_state = new_state.replace_step(to_index, status=StepStatus.ACTIVE, visited=True)
        self._swap(new_state.move_to(to_index))

    def reset(self) -> None:
        """Reinitialize every step to its constructor-time state."""
        self._swap(self._build_initial_state())
        logger.debug("Wizard state reset")

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with the new state after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _swap(self, new_state: WizardState) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
