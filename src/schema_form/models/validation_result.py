"""
Validation report models.

A ValidationReport is the serializable, human-readable snapshot of a
ValidationResult: every error rendered with a message under its JSON
pointer, or the validated data.
"""

from typing import Any

from pydantic import BaseModel, Field

from schema_form.models.error_value import ErrorKind
from schema_form.validation.combinators import MISSING, ValidationResult
from schema_form.validation.error_messages import ErrorRenderer, error_message


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    path: str = Field(..., description="JSON pointer of the field with the error")
    kind: ErrorKind = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    expected: Any | None = Field(default=None, description="Bound, allowed values or reason")


class ValidationReport(BaseModel):
    """Result of form validation."""

    is_valid: bool = Field(..., description="Whether the form data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: Any | None = Field(
        default=None, description="Validated output if valid"
    )

    @classmethod
    def from_result(
        cls,
        result: ValidationResult,
        renderer: ErrorRenderer = error_message,
    ) -> "ValidationReport":
        """Render a ValidationResult."""
        if result:
            data = None if result.output is MISSING else result.output
            return cls(is_valid=True, validated_data=data)
        errors = []
        for path, error in result.errors.flatten():
            expected = error.param
            if hasattr(expected, "model_dump"):
                expected = expected.model_dump(mode="json")
            errors.append(FieldValidationError(
                path=path,
                kind=error.kind,
                message=renderer(path, error),
                expected=expected,
            ))
        return cls(is_valid=False, errors=errors)

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, path: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.path == path]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field paths to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.path not in result:
                result[error.path] = []
            result[error.path].append(error.message)
        return result
