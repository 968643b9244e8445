"""
Scalar form values.

A form stores one FieldValue per field path. The variants mirror the JSON
scalar types plus EmptyValue, which means "nothing entered" and is distinct
from an empty string, zero or false.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Absent:
    """Encoding of an EmptyValue: the key is omitted, it is not null."""

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


class _ScalarValue(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    def to_display_string(self) -> str:
        return str(self.value)

    def to_encoded_value(self) -> Any:
        return self.value

    def as_bool(self) -> bool | None:
        return None


class StringValue(_ScalarValue):
    """Text value."""

    kind: Literal["string"] = "string"
    value: str


class IntValue(_ScalarValue):
    """Integer value."""

    kind: Literal["int"] = "int"
    value: int


class NumberValue(_ScalarValue):
    """Floating point value."""

    kind: Literal["number"] = "number"
    value: float

    def to_display_string(self) -> str:
        # repr gives the shortest string that round-trips
        return repr(self.value)


class BoolValue(_ScalarValue):
    """Boolean value, displayed as True/False."""

    kind: Literal["bool"] = "bool"
    value: bool

    def as_bool(self) -> bool | None:
        return self.value


class EmptyValue(_ScalarValue):
    """No value entered."""

    kind: Literal["empty"] = "empty"

    def to_display_string(self) -> str:
        return ""

    def to_encoded_value(self) -> Any:
        return ABSENT


FieldValue = Annotated[
    Union[StringValue, IntValue, NumberValue, BoolValue, EmptyValue],
    Field(discriminator="kind"),
]

field_value_adapter: TypeAdapter[FieldValue] = TypeAdapter(FieldValue)


def field_value_from_json(value: Any) -> FieldValue:
    """
    Build the FieldValue for a JSON scalar.

    None becomes EmptyValue. Objects and arrays are not scalars and raise
    TypeError; flatten them into per-path values first.
    """
    if value is None:
        return EmptyValue()
    if isinstance(value, bool):
        return BoolValue(value=value)
    if isinstance(value, int):
        return IntValue(value=value)
    if isinstance(value, float):
        return NumberValue(value=value)
    if isinstance(value, str):
        return StringValue(value=value)
    raise TypeError(f"Not a scalar form value: {type(value).__name__}")
