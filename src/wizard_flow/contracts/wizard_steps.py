"""
Wizard Step Definitions - Immutable step configuration and the step registry.

This module defines what a wizard step is (title, optionality, schema,
custom validator and guard hooks) and the ordered registry that the engine
reads for its whole lifetime. Order is significant: it defines the linear
semantics of navigation.
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wizard_flow.contracts.wizard_schema import StepSchema, as_step_schema
from wizard_flow.errors import StepRegistryError

StepTarget = Union[int, str]


class StepDefinition(BaseModel):
    """Configuration for a single wizard step."""

    id: str = Field(..., min_length=1, description="Unique identifier of the step")
    title: str = Field(..., description="Human-readable title")
    description: Optional[str] = Field(default=None, description="Longer description shown under the title")
    icon: Optional[str] = Field(default=None, description="Icon name for step indicators")
    optional: bool = Field(default=False, description="Whether the step may be skipped")
    field_names: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Names of the input fields bound to this step (informational)",
    )
    data_schema: Optional[Any] = Field(default=None, description="Schema the step payload must satisfy")
    validator: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Custom validator (step_data, aggregated_data) -> error message or None",
    )
    before_leave: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Guard (step_data) -> bool run before leaving the step",
    )
    before_enter: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Guard (aggregated_data) -> bool run before entering the step",
    )

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("data_schema")
    @classmethod
    def normalize_schema(cls, v: Any) -> Optional[StepSchema]:
        if v is None:
            return None
        return as_step_schema(v)

    @property
    def has_validation(self) -> bool:
        return self.data_schema is not None or self.validator is not None


class StepRegistry:
    """
    Ordered, read-only collection of step definitions.

    Steps are kept as a tuple; the id index is only a lookup aid and never
    replaces ordinal order.
    """

    def __init__(self, steps: Iterable[StepDefinition]):
        self._steps: Tuple[StepDefinition, ...] = tuple(steps)
        if not self._steps:
            raise StepRegistryError("A wizard needs at least one step")

        self._index_by_id: Dict[str, int] = {}
        for index, step in enumerate(self._steps):
            if step.id in self._index_by_id:
                raise StepRegistryError(f"Duplicate step id: {step.id}")
            self._index_by_id[step.id] = index

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[StepDefinition]:
        return iter(self._steps)

    def __getitem__(self, index: int) -> StepDefinition:
        return self._steps[index]

    @property
    def ids(self) -> List[str]:
        return [step.id for step in self._steps]

    def get(self, index: int) -> Optional[StepDefinition]:
        """Get step by ordinal index, or None when out of range."""
        if 0 <= index < len(self._steps):
            return self._steps[index]
        return None

    def get_by_id(self, step_id: str) -> Optional[StepDefinition]:
        index = self._index_by_id.get(step_id)
        if index is None:
            return None
        return self._steps[index]

    def index_of(self, step_id: str) -> int:
        """Return the index of a step id, or -1 if unknown."""
        return self._index_by_id.get(step_id, -1)

    def resolve_index(self, target: StepTarget) -> int:
        """
        Resolve a navigation target to an ordinal index.

        Integers are returned as-is (callers range-check them); string ids are
        looked up, yielding -1 when the id is unknown.
        """
        if isinstance(target, bool):
            raise TypeError("Step target must be an index or a step id, not bool")
        if isinstance(target, int):
            return target
        return self.index_of(target)


def build_step_registry(steps: Iterable[Union[StepDefinition, Mapping[str, Any]]]) -> StepRegistry:
    """Build a registry from StepDefinitions or plain mappings (e.g. a loaded YAML catalog)."""
    definitions = [
        step if isinstance(step, StepDefinition) else StepDefinition(**step)
        for step in steps
    ]
    return StepRegistry(definitions)
