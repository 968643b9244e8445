"""
Default English messages for validation errors.

Rendering is a presentation concern; hosts with their own wording pass a
different renderer wherever one is accepted.
"""

from typing import Any, Callable

from schema_form.models.error_value import CustomError, CustomErrorCode, ErrorKind, ErrorValue

ErrorRenderer = Callable[[str, ErrorValue], str]

_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.EMPTY: "This field is required",
    ErrorKind.INVALID: "This value is not allowed",
    ErrorKind.INVALID_STRING: "Must be text",
    ErrorKind.INVALID_EMAIL: "Must be a valid email address",
    ErrorKind.INVALID_FORMAT: "Has an invalid format",
    ErrorKind.INVALID_INT: "Must be a whole number",
    ErrorKind.INVALID_FLOAT: "Must be a number",
    ErrorKind.INVALID_BOOL: "Must be true or false",
    ErrorKind.INVALID_NULL: "Must be empty",
    ErrorKind.INVALID_OBJECT: "Must be an object",
    ErrorKind.INVALID_LIST: "Must be a list",
    ErrorKind.NOT_CONST: "Must be {param}",
    ErrorKind.NOT_MULTIPLE_OF_INT: "Must be a multiple of {param}",
    ErrorKind.LESS_INT_THAN: "Must be at least {param}",
    ErrorKind.LESS_EQUAL_INT_THAN: "Must be greater than {param}",
    ErrorKind.GREATER_INT_THAN: "Must be at most {param}",
    ErrorKind.GREATER_EQUAL_INT_THAN: "Must be less than {param}",
    ErrorKind.NOT_MULTIPLE_OF_FLOAT: "Must be a multiple of {param}",
    ErrorKind.LESS_FLOAT_THAN: "Must be at least {param}",
    ErrorKind.LESS_EQUAL_FLOAT_THAN: "Must be greater than {param}",
    ErrorKind.GREATER_FLOAT_THAN: "Must be at most {param}",
    ErrorKind.GREATER_EQUAL_FLOAT_THAN: "Must be less than {param}",
    ErrorKind.SHORTER_STRING_THAN: "Must be at least {param} characters",
    ErrorKind.LONGER_STRING_THAN: "Must be at most {param} characters",
    ErrorKind.NOT_INCLUDED_IN: "Must be one of: {param}",
    ErrorKind.UNIMPLEMENTED: "Cannot be validated: {param}",
}

_CUSTOM_MESSAGES: dict[CustomErrorCode, str] = {
    CustomErrorCode.INVALID_SET: "Items must be unique",
    CustomErrorCode.SHORTER_LIST_THAN: "Must have at least {value} items",
    CustomErrorCode.LONGER_LIST_THAN: "Must have at most {value} items",
    CustomErrorCode.ITEM_COUNT_MISMATCH: "Must have exactly {value} items",
    CustomErrorCode.FORMAT: "{value}",
}


def _format_param(param: Any) -> str:
    if isinstance(param, (list, tuple)):
        return ", ".join(str(item) for item in param)
    return str(param)


def error_message(path: str, error: ErrorValue) -> str:
    """Message for error at path (a JSON pointer). The path is not repeated."""
    if error.kind is ErrorKind.CUSTOM:
        custom = error.custom_error
        if isinstance(custom, CustomError):
            return _CUSTOM_MESSAGES[custom.code].format(value=custom.value)
        return str(custom)
    return _MESSAGES[error.kind].format(param=_format_param(error.param))
