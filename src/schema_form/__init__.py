"""
schema-form: JSON-Schema-driven form state and validation.

Give it a JSON Schema, get back an editable form session that tracks every
field's value, focus, dirtiness and changes, and re-validates on every edit
into either an output value or errors keyed by field path.

Simple Usage:
    from schema_form import validate_data

    report = validate_data(
        {"type": "object", "properties": {"age": {"type": "integer", "minimum": 18}}},
        {"age": 16},
    )
    report.to_error_dict()   # {"/properties/age": ["Must be at least 18"]}

Form Sessions:
    from schema_form import (
        Input, InputKind, StringValue, Submit,
        default_values, get_field, initial, schema_validation, update,
    )

    validation = schema_validation(schema)
    model = initial(default_values(schema), validation)

    model = update(validation, Input(("name",), InputKind.TEXT, StringValue(value="Ada")), model)
    model = update(validation, Submit(), model)

    get_field(("name",), model).live_error
    model.output

Custom Formats:
    from schema_form import FormatRegistry

    formats = FormatRegistry()

    @formats.register("zip-code")
    def zip_code(value: str) -> str:
        if len(value) != 5 or not value.isdigit():
            raise ValueError("Expected five digits")
        return value

    validation = schema_validation(schema, formats)
"""

from typing import Any

from schema_form.form import (
    Blur,
    Focus,
    FormModel,
    Input,
    InputKind,
    NoOp,
    Reset,
    Submit,
    Validate,
    build_raw_value,
    default_values,
    flatten_raw_value,
    get_changed_fields,
    get_errors,
    get_field,
    get_focus,
    get_output,
    initial,
    is_submitted,
    update,
)
from schema_form.models import (
    BoolValue,
    CustomError,
    CustomErrorCode,
    EmptyValue,
    ErrorKind,
    ErrorValue,
    FieldState,
    FieldValidationError,
    FieldValue,
    FormField,
    IntValue,
    NumberValue,
    StringValue,
    ValidationReport,
    derive_form_fields,
    field_value_from_json,
)
from schema_form.validation import (
    ErrorTree,
    FormatRegistry,
    ValidationResult,
    error_message,
    schema_validation,
    walk,
)


def validate_data(
    schema: Any,
    data: Any,
    formats: FormatRegistry | None = None,
) -> ValidationReport:
    """
    Validate a raw JSON-like value against schema in one call.

    Args:
        schema: JSON Schema (dict or boolean)
        data: Value to validate, e.g. a submitted form as a dict
        formats: Optional custom string formats

    Returns:
        ValidationReport with rendered errors or the validated data
    """
    return ValidationReport.from_result(walk(schema, formats)(data))


__all__ = [
    # One-shot validation
    "validate_data",
    "walk",
    "schema_validation",
    "ValidationResult",
    "ValidationReport",
    "FieldValidationError",
    "ErrorTree",
    "error_message",
    "FormatRegistry",
    # Values and errors
    "FieldValue",
    "StringValue",
    "IntValue",
    "NumberValue",
    "BoolValue",
    "EmptyValue",
    "field_value_from_json",
    "ErrorKind",
    "ErrorValue",
    "CustomError",
    "CustomErrorCode",
    # Form sessions
    "FormModel",
    "FieldState",
    "FormField",
    "derive_form_fields",
    "initial",
    "update",
    "Focus",
    "Blur",
    "Input",
    "InputKind",
    "Submit",
    "Validate",
    "Reset",
    "NoOp",
    "get_field",
    "get_output",
    "get_errors",
    "is_submitted",
    "get_focus",
    "get_changed_fields",
    "build_raw_value",
    "default_values",
    "flatten_raw_value",
]

__version__ = "0.1.0"
