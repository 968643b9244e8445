"""
Validation failure kinds.

ErrorValue is a closed set of kinds with an optional payload. Hosts extend
it through the CUSTOM kind, which wraps any value they like; the engine's
own list and format errors travel the same way as CustomError.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Every failure the engine can report."""

    EMPTY = "empty"
    INVALID = "invalid"
    INVALID_STRING = "invalid_string"
    INVALID_EMAIL = "invalid_email"
    INVALID_FORMAT = "invalid_format"
    INVALID_INT = "invalid_int"
    INVALID_FLOAT = "invalid_float"
    INVALID_BOOL = "invalid_bool"
    INVALID_NULL = "invalid_null"
    INVALID_OBJECT = "invalid_object"
    INVALID_LIST = "invalid_list"
    NOT_CONST = "not_const"
    NOT_MULTIPLE_OF_INT = "not_multiple_of_int"
    LESS_INT_THAN = "less_int_than"
    LESS_EQUAL_INT_THAN = "less_equal_int_than"
    GREATER_INT_THAN = "greater_int_than"
    GREATER_EQUAL_INT_THAN = "greater_equal_int_than"
    NOT_MULTIPLE_OF_FLOAT = "not_multiple_of_float"
    LESS_FLOAT_THAN = "less_float_than"
    LESS_EQUAL_FLOAT_THAN = "less_equal_float_than"
    GREATER_FLOAT_THAN = "greater_float_than"
    GREATER_EQUAL_FLOAT_THAN = "greater_equal_float_than"
    SHORTER_STRING_THAN = "shorter_string_than"
    LONGER_STRING_THAN = "longer_string_than"
    NOT_INCLUDED_IN = "not_included_in"
    UNIMPLEMENTED = "unimplemented"
    CUSTOM = "custom"


class CustomErrorCode(str, Enum):
    """Engine-defined custom errors."""

    INVALID_SET = "invalid_set"
    SHORTER_LIST_THAN = "shorter_list_than"
    LONGER_LIST_THAN = "longer_list_than"
    ITEM_COUNT_MISMATCH = "item_count_mismatch"
    FORMAT = "format"


class CustomError(BaseModel):
    """Payload of the engine's own custom errors."""

    model_config = ConfigDict(frozen=True)

    code: CustomErrorCode = Field(..., description="Custom error code")
    value: Any = Field(default=None, description="Bound, count or message")


class ErrorValue(BaseModel):
    """A single validation failure."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind = Field(..., description="Failure kind")
    param: Any = Field(default=None, description="Payload: bound, value, allowed values or reason")

    @classmethod
    def of(cls, kind: ErrorKind, param: Any = None) -> "ErrorValue":
        return cls(kind=kind, param=param)

    @classmethod
    def empty(cls) -> "ErrorValue":
        return cls(kind=ErrorKind.EMPTY)

    @classmethod
    def not_const(cls, value: Any) -> "ErrorValue":
        return cls(kind=ErrorKind.NOT_CONST, param=value)

    @classmethod
    def not_included_in(cls, values: list[Any]) -> "ErrorValue":
        return cls(kind=ErrorKind.NOT_INCLUDED_IN, param=list(values))

    @classmethod
    def unimplemented(cls, reason: str) -> "ErrorValue":
        return cls(kind=ErrorKind.UNIMPLEMENTED, param=reason)

    @classmethod
    def custom(cls, error: Any) -> "ErrorValue":
        return cls(kind=ErrorKind.CUSTOM, param=error)

    @property
    def custom_error(self) -> Any:
        """The wrapped host error for CUSTOM kinds, else None."""
        return self.param if self.kind is ErrorKind.CUSTOM else None
