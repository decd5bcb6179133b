"""
Step Validation Pipeline - Schema and custom validation for a single step.

Validation writes its outcome onto the step's runtime state (``error`` status
and message on failure, cleared message on success). It never marks a step
completed; that only happens when a transition commits.
"""

import inspect
import logging
from typing import Any, Callable, Dict

from wizard_flow.contracts import StepRegistry, StepStatus, run_schema

from .state_store import WizardStateStore

logger = logging.getLogger(__name__)


async def resolve_maybe_awaitable(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


class StepValidationPipeline:
    """Runs a step's schema and custom validator against its current data."""

    def __init__(
        self,
        registry: StepRegistry,
        store: WizardStateStore,
        aggregated_data: Callable[[], Dict[str, Any]],
    ):
        self._registry = registry
        self._store = store
        self._aggregated_data = aggregated_data
        self.is_validating = False

    async def validate_step(self, index: int) -> bool:
        """
        Validate the step at ``index``.

        1. Schema check against the step data; first error is reported.
        2. Custom validator with (step_data, aggregated_data); a non-empty
           string is the error message.
        3. On success the step's error is cleared.

        Exceptions raised by collaborator validators propagate to the caller.

        Returns:
            bool: True if the step passed validation
        """
        step = self._registry.get(index)
        if step is None:
            return False
        if not step.has_validation:
            self._store.update_step_state(index, error=None)
            return True

        self.is_validating = True
        try:
            data = self._store.get_step_state(index).data

            if step.data_schema is not None:
                result = run_schema(step.data_schema, data)
                if not result.success:
                    self._fail(index, result.first_error_message)
                    return False

            if step.validator is not None:
                error = await resolve_maybe_awaitable(step.validator(data, self._aggregated_data()))
                if error:
                    self._fail(index, str(error))
                    return False

            self._store.update_step_state(index, error=None)
            logger.debug(f"Step {step.id} validation passed")
            return True
        finally:
            self.is_validating = False

    def _fail(self, index: int, message: str) -> None:
        self._store.update_step_state(index, status=StepStatus.ERROR, error=message)
        logger.debug(f"Step {self._registry[index].id} validation failed: {message}")
