"""
Data models for schema-form.

This module contains Pydantic models for:
- Field values (the scalar value stored per field)
- Validation errors (error kinds and payloads)
- Field state (read-only view of one field)
- Form fields derived from a JSON Schema + UI Schema
- Validation reports
"""

from schema_form.models.error_value import (
    CustomError,
    CustomErrorCode,
    ErrorKind,
    ErrorValue,
)
from schema_form.models.field_state import FieldState
from schema_form.models.field_value import (
    ABSENT,
    BoolValue,
    EmptyValue,
    FieldValue,
    IntValue,
    NumberValue,
    StringValue,
    field_value_from_json,
)
from schema_form.models.form_fields import FormField, derive_form_fields
from schema_form.models.validation_result import (
    FieldValidationError,
    ValidationReport,
)

__all__ = [
    # Field values
    "ABSENT",
    "BoolValue",
    "EmptyValue",
    "FieldValue",
    "IntValue",
    "NumberValue",
    "StringValue",
    "field_value_from_json",
    # Errors
    "CustomError",
    "CustomErrorCode",
    "ErrorKind",
    "ErrorValue",
    # Form
    "FieldState",
    "FormField",
    "derive_form_fields",
    # Reports
    "FieldValidationError",
    "ValidationReport",
]
