"""
Wizard Configuration - YAML loading and validation for wizard settings.

Human-edited configuration is YAML-only and validated strictly with
pydantic before it reaches the engine:
- wizard settings (navigation policy flags)
- step catalogs (step metadata; callables are bound in code)
"""

import hashlib
import logging
from pathlib import Path

import yaml

from wizard_flow.errors import WizardFlowError

logger = logging.getLogger(__name__)


class ConfigError(WizardFlowError):
    """Base exception for configuration errors."""
    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""
    pass


class ConfigNotFoundError(ConfigError):
    """Raised when configuration file is not found."""
    pass


def compute_yaml_sha256(path: Path) -> str:
    """Compute SHA256 of the raw YAML bytes."""
    return hashlib.sha256(path.read_bytes()).hexdigest()


def load_yaml(path: Path) -> dict:
    """
    Load YAML file with proper error handling.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML data as dict (empty dict for an empty file)

    Raises:
        ConfigNotFoundError: If file doesn't exist
        ConfigValidationError: If YAML is malformed or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_bytes())
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to load config from {path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"Top-level YAML in {path} must be a mapping")

    logger.debug(f"Loaded config {path} (sha256={compute_yaml_sha256(path)[:12]})")
    return data


from .wizard_config import WizardConfig, load_wizard_config, load_step_catalog  # noqa: E402

__all__ = [
    "WizardConfig",
    "load_wizard_config",
    "load_step_catalog",
    "ConfigError",
    "ConfigValidationError",
    "ConfigNotFoundError",
    "load_yaml",
    "compute_yaml_sha256",
]
