"""
Wizard Schema Adapters - Normalize step schemas to a single validate() contract.

A step schema may be a pydantic model class, a pydantic TypeAdapter, or any
object exposing ``validate(data)`` that returns something with ``success`` and
``first_error_message`` attributes. The validation pipeline only ever talks to
the normalized :class:`StepSchema` interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

DEFAULT_SCHEMA_ERROR = "Validation failed"


class SchemaValidationResult(BaseModel):
    """Outcome of validating one step payload against its schema."""

    success: bool = Field(..., description="Whether the payload satisfied the schema")
    first_error_message: Optional[str] = Field(
        default=None,
        description="Message of the first reported error when success is False",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def ok(cls) -> "SchemaValidationResult":
        return cls(success=True)

    @classmethod
    def failed(cls, message: Optional[str]) -> "SchemaValidationResult":
        return cls(success=False, first_error_message=message or DEFAULT_SCHEMA_ERROR)


@runtime_checkable
class StepSchema(Protocol):
    """Anything that can validate a step payload."""

    def validate(self, data: Any) -> Any:
        ...


def first_error_message(error: ValidationError) -> str:
    """Return the message of the first error in a pydantic ValidationError."""
    errors = error.errors()
    if not errors:
        return DEFAULT_SCHEMA_ERROR
    return errors[0].get("msg") or DEFAULT_SCHEMA_ERROR


class PydanticSchema:
    """Validate payloads against a pydantic model class or TypeAdapter."""

    def __init__(self, target: Any):
        if isinstance(target, TypeAdapter):
            self._adapter = target
        else:
            self._adapter = TypeAdapter(target)
        self.target = target

    def validate(self, data: Any) -> SchemaValidationResult:
        try:
            self._adapter.validate_python(data)
        except ValidationError as e:
            return SchemaValidationResult.failed(first_error_message(e))
        return SchemaValidationResult.ok()

    def __repr__(self) -> str:
        return f"PydanticSchema({self.target!r})"


def as_step_schema(schema: Any) -> StepSchema:
    """
    Wrap a user-supplied schema into the StepSchema interface.

    Pydantic model classes and TypeAdapters are wrapped in PydanticSchema.
    Objects that already expose ``validate`` are returned unchanged.

    Raises:
        TypeError: If the object cannot validate payloads.
    """
    if isinstance(schema, TypeAdapter):
        return PydanticSchema(schema)
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return PydanticSchema(schema)
    if callable(getattr(schema, "validate", None)):
        return schema
    raise TypeError(f"Unsupported step schema: {schema!r}")


def run_schema(schema: StepSchema, data: Any) -> SchemaValidationResult:
    """Validate data and coerce the schema's answer to SchemaValidationResult."""
    result = schema.validate(data)
    if isinstance(result, SchemaValidationResult):
        return result
    if getattr(result, "success", False):
        return SchemaValidationResult.ok()
    return SchemaValidationResult.failed(getattr(result, "first_error_message", None))
