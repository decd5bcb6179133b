"""
Wizard Flow Errors - Exception hierarchy for construction-time failures.

Expected runtime failures (validation errors, blocked navigation, invalid
targets) are reported through return values and step state, never through
these exceptions.
"""


class WizardFlowError(Exception):
    """Base exception for wizard_flow."""
    pass


class StepRegistryError(WizardFlowError):
    """Raised when a step registry cannot be built from its definitions."""
    pass
