"""
Tests for the step validation pipeline.

Validation must:
1. Check the schema first and report its first error
2. Call the custom validator with (step_data, aggregated_data), sync or async
3. Clear the error on success without completing the step
4. Let collaborator exceptions propagate
5. Raise is_validating only while running
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from pydantic import BaseModel, Field, TypeAdapter

from wizard_flow import (
    SchemaValidationResult,
    StepDefinition,
    StepStatus,
    create_wizard,
)


class AccountData(BaseModel):
    email: str = Field(min_length=3)


class DuckSchema:
    """Schema exposing validate() without pydantic."""

    def __init__(self, message=None):
        self.message = message
        self.seen = []

    def validate(self, data):
        self.seen.append(data)
        if self.message:
            return SchemaValidationResult(success=False, first_error_message=self.message)
        return SchemaValidationResult(success=True)


@pytest.mark.asyncio
async def test_schema_failure_sets_error_status_and_message():
    wizard = create_wizard([StepDefinition(id="account", title="Account", data_schema=AccountData)])

    assert await wizard.validate_current() is False

    state = wizard.steps[0]
    assert state.status == StepStatus.ERROR
    assert state.error == "Field required"


@pytest.mark.asyncio
async def test_schema_reports_first_error_only():
    wizard = create_wizard([StepDefinition(id="account", title="Account", data_schema=AccountData)])
    wizard.set_step_data("account", {"email": "x"})

    assert await wizard.validate_current() is False
    assert "at least 3" in wizard.steps[0].error


@pytest.mark.asyncio
async def test_schema_success_clears_error_without_completing():
    wizard = create_wizard([StepDefinition(id="account", title="Account", data_schema=AccountData)])
    await wizard.validate_current()
    assert wizard.steps[0].error is not None

    wizard.set_step_data("account", {"email": "ada@example.com"})
    assert await wizard.validate_current() is True

    state = wizard.steps[0]
    assert state.error is None
    # Setting data does not touch status; validation never completes a step
    assert state.status == StepStatus.ERROR


@pytest.mark.asyncio
async def test_type_adapter_schema():
    step = StepDefinition(id="age", title="Age", data_schema=TypeAdapter(int))
    wizard = create_wizard([step], initial_data={"age": 41})

    assert await wizard.validate_current() is True


@pytest.mark.asyncio
async def test_duck_typed_schema():
    schema = DuckSchema(message="Terms must be accepted")
    wizard = create_wizard(
        [StepDefinition(id="terms", title="Terms", data_schema=schema)],
        initial_data={"terms": {"accepted": False}},
    )

    assert await wizard.validate_current() is False
    assert wizard.steps[0].error == "Terms must be accepted"
    assert schema.seen == [{"accepted": False}]


@pytest.mark.asyncio
async def test_schema_failure_skips_custom_validator():
    validator = Mock(return_value=None)
    wizard = create_wizard([
        StepDefinition(id="account", title="Account", data_schema=AccountData, validator=validator),
    ])

    assert await wizard.validate_current() is False
    validator.assert_not_called()


@pytest.mark.asyncio
async def test_sync_custom_validator_receives_step_and_aggregated_data():
    validator = Mock(return_value="Username taken")
    steps = [
        StepDefinition(id="account", title="Account", validator=validator),
        StepDefinition(id="profile", title="Profile"),
    ]
    wizard = create_wizard(steps, initial_data={"account": {"user": "ada"}, "profile": {"bio": "hi"}})

    assert await wizard.validate_current() is False

    validator.assert_called_once_with(
        {"user": "ada"},
        {"account": {"user": "ada"}, "profile": {"bio": "hi"}},
    )
    assert wizard.steps[0].status == StepStatus.ERROR
    assert wizard.steps[0].error == "Username taken"


@pytest.mark.asyncio
async def test_async_custom_validator():
    validator = AsyncMock(return_value=None)
    wizard = create_wizard([StepDefinition(id="account", title="Account", validator=validator)])

    assert await wizard.validate_current() is True
    validator.assert_awaited_once()
    assert wizard.steps[0].error is None


@pytest.mark.asyncio
async def test_empty_string_from_validator_counts_as_success():
    wizard = create_wizard([StepDefinition(id="a", title="A", validator=lambda data, all_data: "")])
    assert await wizard.validate_current() is True


@pytest.mark.asyncio
async def test_is_validating_raised_only_during_validation():
    observed = []

    async def slow_validator(data, all_data):
        observed.append(wizard.is_validating)
        await asyncio.sleep(0)
        return None

    wizard = create_wizard([StepDefinition(id="a", title="A", validator=slow_validator)])

    assert wizard.is_validating is False
    assert await wizard.validate_current() is True
    assert observed == [True]
    assert wizard.is_validating is False


@pytest.mark.asyncio
async def test_validator_exception_propagates_and_resets_flag():
    def broken(data, all_data):
        raise RuntimeError("remote check unavailable")

    wizard = create_wizard([StepDefinition(id="a", title="A", validator=broken)])

    with pytest.raises(RuntimeError, match="remote check unavailable"):
        await wizard.validate_current()
    assert wizard.is_validating is False
    assert wizard.steps[0].status == StepStatus.ACTIVE


@pytest.mark.asyncio
async def test_out_of_range_index_returns_false(three_steps):
    wizard = create_wizard(three_steps)
    before = wizard.state

    assert await wizard.pipeline.validate_step(5) is False
    assert await wizard.pipeline.validate_step(-1) is False
    assert wizard.state is before


@pytest.mark.asyncio
async def test_step_without_validation_passes_and_clears_stale_error():
    wizard = create_wizard([StepDefinition(id="a", title="A")])
    wizard.store.update_step_state(0, error="stale")
    flags = []
    wizard.subscribe(lambda state: flags.append(wizard.is_validating))

    assert await wizard.validate_current() is True

    assert wizard.steps[0].error is None
    assert flags == [False]
