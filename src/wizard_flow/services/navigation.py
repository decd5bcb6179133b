"""
Wizard Navigation Controller - The wizard's state machine.

Every transition funnels through ``go_to``: resolve target, apply the
navigation policy, validate the departing step, run guards, then commit the
status changes and the new index. Expected failures are reported as False
(or None from ``complete``); exceptions raised by collaborator validators and
hooks propagate to the caller unchanged.

Callers must await one navigation call before issuing the next; the engine
does not serialize concurrent calls.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from wizard_flow.config import WizardConfig
from wizard_flow.contracts import (
    StepDefinition,
    StepRegistry,
    StepRuntimeState,
    StepStatus,
    StepTarget,
    WizardState,
    build_step_registry,
)

from . import aggregator
from .state_store import StateListener, WizardStateStore
from .step_validation import StepValidationPipeline, resolve_maybe_awaitable

logger = logging.getLogger(__name__)


@dataclass
class WizardController:
    """Navigation controller composing registry, store, validation and aggregation."""

    registry: StepRegistry
    config: WizardConfig = field(default_factory=WizardConfig)
    initial_data: Optional[Dict[str, Any]] = None

    # Collaborator callbacks
    on_step_change: Optional[Callable[[int, int], None]] = None
    on_complete: Optional[Callable[[Dict[str, Any]], None]] = None

    def __post_init__(self):
        """Build the state store and validation pipeline."""
        self.store = WizardStateStore(self.registry, self.initial_data)
        self.pipeline = StepValidationPipeline(
            self.registry,
            self.store,
            aggregated_data=lambda: self.aggregated_data,
        )

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def state(self) -> WizardState:
        return self.store.state

    @property
    def steps(self) -> Tuple[StepRuntimeState, ...]:
        return self.store.steps

    @property
    def current_index(self) -> int:
        return self.store.current_index

    @property
    def current_step(self) -> StepDefinition:
        return self.registry[self.current_index]

    @property
    def current_state(self) -> StepRuntimeState:
        return self.store.state.current

    @property
    def is_first(self) -> bool:
        return aggregator.is_first(self.store.state)

    @property
    def is_last(self) -> bool:
        return aggregator.is_last(self.store.state)

    @property
    def can_next(self) -> bool:
        return aggregator.can_next(self.store.state)

    @property
    def can_prev(self) -> bool:
        return aggregator.can_prev(self.store.state, self.config.allow_back)

    @property
    def progress(self) -> int:
        return aggregator.compute_progress(self.store.state)

    @property
    def aggregated_data(self) -> Dict[str, Any]:
        return aggregator.aggregate_data(self.store.state)

    @property
    def is_complete(self) -> bool:
        return aggregator.is_complete(self.store.state)

    @property
    def is_validating(self) -> bool:
        return self.pipeline.is_validating

    def summary(self) -> Dict[str, Any]:
        return aggregator.summarize(self.store.state, self.config.allow_back)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def go_to(self, target: StepTarget) -> bool:
        """
        Navigate to a step by index or id.

        Args:
            target: Ordinal index or step id

        Returns:
            bool: True if the transition was committed
        """
        target_index = self.registry.resolve_index(target)
        if not 0 <= target_index < len(self.registry):
            logger.warning(f"Navigation target out of range: {target!r}")
            return False
        return await self._transition(target_index, validate_departing=self.config.validate_on_leave)

    async def next(self) -> bool:
        if self.is_last:
            return False
        return await self.go_to(self.current_index + 1)

    async def prev(self) -> bool:
        if self.is_first or not self.config.allow_back:
            return False
        return await self.go_to(self.current_index - 1)

    async def skip(self) -> bool:
        """
        Skip the current step if it is optional.

        The step is marked skipped before the transition runs. On the last
        step nothing else happens and True is returned.
        """
        current = self.current_index
        if not self.registry[current].optional:
            logger.warning(f"Cannot skip required step {self.registry[current].id}")
            return False

        self.store.update_step_state(current, status=StepStatus.SKIPPED)
        if self.is_last:
            return True
        return await self._transition(current + 1, validate_departing=self.config.validate_on_skip)

    async def _transition(self, target_index: int, validate_departing: bool) -> bool:
        current = self.current_index
        forward = target_index > current
        target_state = self.store.get_step_state(target_index)

        if not self.config.allow_jump and self.config.linear:
            if forward and target_index != current + 1 and not target_state.visited:
                logger.warning(
                    f"Navigation blocked: cannot jump ahead from {self.registry[current].id} "
                    f"to unvisited step {target_state.id}"
                )
                return False

        validation_passed = False
        if forward and validate_departing:
            if not await self.pipeline.validate_step(current):
                logger.warning(f"Navigation blocked: step {self.registry[current].id} failed validation")
                return False
            validation_passed = True

        departing = self.registry[current]
        if departing.before_leave is not None:
            can_leave = await resolve_maybe_awaitable(
                departing.before_leave(self.store.get_step_state(current).data)
            )
            if not can_leave:
                logger.warning(f"Navigation blocked: before_leave guard of {departing.id}")
                return False

        arriving = self.registry[target_index]
        if arriving.before_enter is not None:
            can_enter = await resolve_maybe_awaitable(arriving.before_enter(self.aggregated_data))
            if not can_enter:
                logger.warning(f"Navigation blocked: before_enter guard of {arriving.id}")
                return False

        departing_status = None
        if self.store.get_step_state(current).status != StepStatus.SKIPPED:
            departing_status = StepStatus.COMPLETED if forward and validation_passed else StepStatus.PENDING

        self.store.commit_transition(current, target_index, departing_status)
        logger.debug(f"Wizard moved from {departing.id} to {arriving.id}")

        if self.on_step_change:
            self.on_step_change(current, target_index)
        return True

    # ------------------------------------------------------------------
    # Data and validation
    # ------------------------------------------------------------------

    def set_step_data(self, step_id: str, data: Any) -> None:
        """Write a step payload directly, bypassing navigation policy."""
        index = self.registry.index_of(step_id)
        if index < 0:
            logger.debug(f"Ignoring data for unknown step {step_id}")
            return
        self.store.update_step_state(index, data=data, error=None)

    def get_step_data(self, step_id: str) -> Any:
        step_state = self.store.state.find(step_id)
        if step_state is None:
            return None
        return step_state.data

    async def validate_current(self) -> bool:
        return await self.pipeline.validate_step(self.current_index)

    async def validate_all(self) -> bool:
        """
        Validate every required step in order, one at a time.

        Stops at the first failing step and navigates to it. A failing
        current step stays in place with its ``error`` status.
        """
        for index, step in enumerate(self.registry):
            if step.optional:
                continue
            if not await self.pipeline.validate_step(index):
                if index != self.current_index:
                    await self.go_to(index)
                return False
        return True

    def reset(self) -> None:
        self.store.reset()

    async def complete(self) -> Optional[Dict[str, Any]]:
        """
        Validate all required steps and hand the aggregated data to on_complete.

        Returns:
            The aggregated data, or None if validation failed
        """
        if not await self.validate_all():
            return None

        data = self.aggregated_data
        if self.on_complete:
            self.on_complete(data)
        logger.debug(f"Wizard completed with {len(data)} step payload(s)")
        return data


def create_wizard(
    steps: Union[StepRegistry, Iterable[Union[StepDefinition, Mapping[str, Any]]]],
    initial_data: Optional[Mapping[str, Any]] = None,
    config: Union[WizardConfig, Mapping[str, Any], None] = None,
    on_step_change: Optional[Callable[[int, int], None]] = None,
    on_complete: Optional[Callable[[Dict[str, Any]], None]] = None,
    **options: Any,
) -> WizardController:
    """
    Create a wizard controller.

    Args:
        steps: StepRegistry, StepDefinitions, or step mappings
        initial_data: Initial payloads keyed by step id
        config: WizardConfig or a mapping of its fields
        on_step_change: Called with (from_index, to_index) after each transition
        on_complete: Called with the aggregated data on successful complete()
        **options: Individual WizardConfig fields overriding ``config``

    Returns:
        WizardController instance
    """
    registry = steps if isinstance(steps, StepRegistry) else build_step_registry(steps)

    if config is None:
        config = WizardConfig(**options)
    elif isinstance(config, WizardConfig):
        config = WizardConfig(**{**config.model_dump(), **options}) if options else config
    else:
        config = WizardConfig(**{**dict(config), **options})

    return WizardController(
        registry=registry,
        config=config,
        initial_data=dict(initial_data) if initial_data is not None else None,
        on_step_change=on_step_change,
        on_complete=on_complete,
    )
