"""
Wizard Engine Services - State store, validation and navigation logic.

Key Principles:
1. Pure logic (no UI imports)
2. Expected failures reported as return values, never exceptions
3. One mutating entrypoint: WizardController
"""

from .state_store import WizardStateStore
from .step_validation import StepValidationPipeline, resolve_maybe_awaitable
from .navigation import WizardController, create_wizard
from . import aggregator

__all__ = [
    "WizardStateStore",
    "StepValidationPipeline",
    "resolve_maybe_awaitable",
    "WizardController",
    "create_wizard",
    "aggregator",
]
