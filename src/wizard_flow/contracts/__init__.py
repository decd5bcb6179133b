"""
Wizard Contracts - Pure data definitions for the wizard engine.

Key Principles:
1. Pure Pydantic models (no engine logic)
2. Frozen configuration and state (replaced, never mutated)
3. Ordered steps; ids are only a lookup aid
"""

from .wizard_schema import (
    SchemaValidationResult,
    StepSchema,
    PydanticSchema,
    as_step_schema,
    run_schema,
)
from .wizard_steps import StepDefinition, StepRegistry, StepTarget, build_step_registry
from .wizard_state import (
    StepStatus,
    StepRuntimeState,
    WizardState,
    get_step_indicator_class,
)

__all__ = [
    "SchemaValidationResult",
    "StepSchema",
    "PydanticSchema",
    "as_step_schema",
    "run_schema",
    "StepDefinition",
    "StepRegistry",
    "StepTarget",
    "build_step_registry",
    "StepStatus",
    "StepRuntimeState",
    "WizardState",
    "get_step_indicator_class",
]
