"""
Pytest configuration and fixtures.

Ensures PYTHONPATH is set correctly for imports.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src/ to Python path if not already present
# This ensures tests can import wizard_flow without an editable install
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from wizard_flow import StepDefinition  # noqa: E402


@pytest.fixture
def three_steps() -> list[StepDefinition]:
    """Three plain steps with no schemas, validators or guards."""
    return [
        StepDefinition(id="account", title="Account"),
        StepDefinition(id="profile", title="Profile"),
        StepDefinition(id="confirm", title="Confirm"),
    ]


@pytest.fixture
def optional_middle_steps() -> list[StepDefinition]:
    """Three steps where the middle one may be skipped."""
    return [
        StepDefinition(id="account", title="Account"),
        StepDefinition(id="newsletter", title="Newsletter", optional=True),
        StepDefinition(id="confirm", title="Confirm"),
    ]


@pytest.fixture
def wizard_yaml(tmp_path: Path):
    """Write a YAML file under tmp_path and return its path."""
    def _write(content: str, name: str = "wizard.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
