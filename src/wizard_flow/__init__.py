"""
wizard_flow - Asynchronous multi-step workflow engine.

Drives sequential, guarded, partially-skippable processes such as onboarding
flows, checkouts and setup sequences: ordered transitions, async guards,
validation gating and data aggregation.
"""

from .errors import WizardFlowError, StepRegistryError
from .config import (
    WizardConfig,
    load_wizard_config,
    load_step_catalog,
    ConfigError,
    ConfigValidationError,
    ConfigNotFoundError,
)
from .contracts import (
    SchemaValidationResult,
    PydanticSchema,
    StepDefinition,
    StepRegistry,
    StepStatus,
    StepRuntimeState,
    WizardState,
    build_step_registry,
    get_step_indicator_class,
)
from .services import WizardController, WizardStateStore, StepValidationPipeline, create_wizard

__version__ = "1.0.0"

__all__ = [
    "WizardFlowError",
    "StepRegistryError",
    "WizardConfig",
    "load_wizard_config",
    "load_step_catalog",
    "ConfigError",
    "ConfigValidationError",
    "ConfigNotFoundError",
    "SchemaValidationResult",
    "PydanticSchema",
    "StepDefinition",
    "StepRegistry",
    "StepStatus",
    "StepRuntimeState",
    "WizardState",
    "build_step_registry",
    "get_step_indicator_class",
    "WizardController",
    "WizardStateStore",
    "StepValidationPipeline",
    "create_wizard",
]
