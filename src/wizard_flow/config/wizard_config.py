"""
Wizard Config Loader

Navigation policy settings and step catalogs read from YAML.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class WizardConfig(BaseModel):
    """Navigation policy for a wizard instance."""

    allow_back: bool = Field(default=True, description="Enable prev()")
    allow_jump: bool = Field(default=False, description="Allow navigating to any step regardless of order")
    validate_on_leave: bool = Field(default=True, description="Validate the departing step on forward moves")
    linear: bool = Field(default=True, description="Restrict forward moves to the next step unless visited")
    validate_on_skip: bool = Field(default=False, description="Validate an optional step before skipping it")

    model_config = ConfigDict(frozen=True, extra="forbid")


class StepCatalogEntry(BaseModel):
    """Step metadata as written in a YAML step catalog."""

    id: str = Field(..., min_length=1)
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    optional: bool = False
    field_names: Tuple[str, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True, extra="forbid")


class StepCatalog(BaseModel):
    """Ordered step catalog."""

    version: str = Field(default="1.0", description="Catalog schema version")
    steps: List[StepCatalogEntry] = Field(..., description="Steps in wizard order")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("steps")
    @classmethod
    def validate_unique_ids(cls, v: List[StepCatalogEntry]) -> List[StepCatalogEntry]:
        if not v:
            raise ValueError("steps cannot be empty")
        seen = set()
        for entry in v:
            if entry.id in seen:
                raise ValueError(f"Duplicate step id: {entry.id}")
            seen.add(entry.id)
        return v


def load_wizard_config(path: Path) -> WizardConfig:
    """
    Load wizard settings from a YAML file.

    Settings may sit at the top level or under a ``wizard:`` key.

    Raises:
        ConfigNotFoundError: If the file is missing
        ConfigValidationError: If the YAML or its values are invalid
    """
    from . import ConfigValidationError, load_yaml

    data = load_yaml(Path(path))
    section = data.get("wizard", data)
    if not isinstance(section, dict):
        raise ConfigValidationError(f"'wizard' section in {path} must be a mapping")
    try:
        return WizardConfig(**section)
    except ValidationError as e:
        raise ConfigValidationError(f"Failed to validate wizard config at {path}: {e}")


def load_step_catalog(path: Path) -> List[Dict[str, Any]]:
    """
    Load step metadata from a YAML catalog.

    Returns plain mappings ready for ``build_step_registry``; schemas,
    validators and guards are attached in code.
    """
    from . import ConfigValidationError, load_yaml

    data = load_yaml(Path(path))
    try:
        catalog = StepCatalog(**data)
    except ValidationError as e:
        raise ConfigValidationError(f"Failed to validate step catalog at {path}: {e}")
    return [entry.model_dump() for entry in catalog.steps]
