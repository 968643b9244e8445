"""
Form session state for schema-form.

This module contains the message-driven form model and its accessors.
"""

from schema_form.form.accessor import (
    get_changed_fields,
    get_errors,
    get_field,
    get_focus,
    get_output,
    is_submitted,
)
from schema_form.form.messages import (
    Blur,
    Focus,
    Input,
    InputKind,
    Msg,
    NoOp,
    Reset,
    Submit,
    Validate,
)
from schema_form.form.model import FormModel, initial, update
from schema_form.form.values import build_raw_value, default_values, flatten_raw_value

__all__ = [
    # Model
    "FormModel",
    "initial",
    "update",
    # Messages
    "Blur",
    "Focus",
    "Input",
    "InputKind",
    "Msg",
    "NoOp",
    "Reset",
    "Submit",
    "Validate",
    # Accessors
    "get_changed_fields",
    "get_errors",
    "get_field",
    "get_focus",
    "get_output",
    "is_submitted",
    # Values
    "build_raw_value",
    "default_values",
    "flatten_raw_value",
]
