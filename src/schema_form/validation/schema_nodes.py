"""
Schema node classification.

parse_schema() sorts every raw JSON Schema into exactly one node class.
Shapes the walker cannot validate become UnsupportedSchema with a reason,
so a new shape has to be classified on purpose before it is validated.
Child schemas (properties, items) stay raw and are parsed when walked.
"""

import logging
import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger("schema-form")

UNSUPPORTED_KEYWORDS = ("$ref", "anyOf", "oneOf", "allOf")


class _SchemaNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str | None = Field(default=None)
    description: str | None = Field(default=None)
    default: Any = Field(default=None)

    def has(self, keyword: str) -> bool:
        """Whether keyword was present in the raw schema (null included)."""
        return keyword in self.model_fields_set


class ConstantSchema(BaseModel):
    """The literal schemas true (accept anything) and false (reject)."""

    model_config = ConfigDict(frozen=True)

    value: bool


class BlankSchema(_SchemaNode):
    """A schema without type: accepts any value."""


class UnsupportedSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: str


class ObjectSchema(_SchemaNode):
    type: Literal["object"] = "object"
    properties: dict[str, Any] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)


class _NumericSchema(_SchemaNode):
    minimum: int | float | None = Field(default=None)
    maximum: int | float | None = Field(default=None)
    exclusive_minimum: bool | int | float | None = Field(default=None, alias="exclusiveMinimum")
    exclusive_maximum: bool | int | float | None = Field(default=None, alias="exclusiveMaximum")
    multiple_of: int | float | None = Field(default=None, alias="multipleOf")
    enum: list[Any] | None = Field(default=None)
    const: Any = Field(default=None)

    @field_validator("multiple_of")
    @classmethod
    def multiple_of_positive(cls, v: int | float | None) -> int | float | None:
        if v is not None and v <= 0:
            raise ValueError("multipleOf must be greater than 0")
        return v


class IntegerSchema(_NumericSchema):
    type: Literal["integer"] = "integer"


class NumberSchema(_NumericSchema):
    type: Literal["number"] = "number"


class StringSchema(_SchemaNode):
    type: Literal["string"] = "string"
    min_length: int | None = Field(default=None, alias="minLength", ge=0)
    max_length: int | None = Field(default=None, alias="maxLength", ge=0)
    pattern: str | None = Field(default=None)
    format: str | None = Field(default=None)
    enum: list[Any] | None = Field(default=None)
    const: Any = Field(default=None)


class BooleanSchema(_SchemaNode):
    type: Literal["boolean"] = "boolean"
    const: Any = Field(default=None)


class ArraySchema(_SchemaNode):
    type: Literal["array"] = "array"
    items: dict[str, Any] | bool | list[Any] | None = Field(default=None)
    prefix_items: list[Any] | None = Field(default=None, alias="prefixItems")
    min_items: int | None = Field(default=None, alias="minItems", ge=0)
    max_items: int | None = Field(default=None, alias="maxItems", ge=0)
    unique_items: bool = Field(default=False, alias="uniqueItems")

    @property
    def tuple_items(self) -> list[Any] | None:
        """Positional item schemas, if the array is tuple-shaped."""
        if self.prefix_items is not None:
            return self.prefix_items
        if isinstance(self.items, list):
            return self.items
        return None


class NullSchema(_SchemaNode):
    type: Literal["null"] = "null"


SchemaNode = (
    ConstantSchema
    | BlankSchema
    | ObjectSchema
    | IntegerSchema
    | NumberSchema
    | StringSchema
    | BooleanSchema
    | ArraySchema
    | NullSchema
    | UnsupportedSchema
)

_NODE_TYPES: dict[str, type[_SchemaNode]] = {
    "object": ObjectSchema,
    "integer": IntegerSchema,
    "number": NumberSchema,
    "string": StringSchema,
    "boolean": BooleanSchema,
    "array": ArraySchema,
    "null": NullSchema,
}


def _unsupported(reason: str) -> UnsupportedSchema:
    logger.debug(f"Unsupported schema: {reason}")
    return UnsupportedSchema(reason=reason)


def parse_schema(raw: Any) -> SchemaNode:
    """Classify a raw schema. Never raises."""
    if isinstance(raw, bool):
        return ConstantSchema(value=raw)
    if not isinstance(raw, dict):
        return _unsupported(f"schema must be an object or a boolean, got {type(raw).__name__}")

    for keyword in UNSUPPORTED_KEYWORDS:
        if keyword in raw:
            return _unsupported(f"'{keyword}' is not supported")

    schema_type = raw.get("type")
    if isinstance(schema_type, list):
        if len(schema_type) != 1:
            return _unsupported(f"multiple types {schema_type} are not supported")
        schema_type = schema_type[0]
    if schema_type is None and "properties" in raw:
        schema_type = "object"

    if schema_type is None:
        node_class: type[_SchemaNode] = BlankSchema
    elif isinstance(schema_type, str) and schema_type in _NODE_TYPES:
        node_class = _NODE_TYPES[schema_type]
    else:
        return _unsupported(f"unknown type {schema_type!r}")

    data = dict(raw)
    if schema_type is not None:
        data["type"] = schema_type
    try:
        return node_class.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(loc) for loc in err["loc"]) for err in e.errors())
        return _unsupported(f"malformed {schema_type or 'untyped'} schema: {fields}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def effective_minimum(node: _NumericSchema) -> int | None:
    """
    Smallest integer allowed by minimum/exclusiveMinimum.

    exclusiveMinimum true makes minimum itself exclusive (bound minimum + 1);
    a numeric exclusiveMinimum excludes that number (bound value + 1). When
    both apply the tighter bound wins. Fractional bounds round inward.
    """
    bounds = []
    if node.minimum is not None:
        if node.exclusive_minimum is True:
            bounds.append(math.floor(node.minimum) + 1)
        else:
            bounds.append(math.ceil(node.minimum))
    if _is_number(node.exclusive_minimum):
        bounds.append(math.floor(node.exclusive_minimum) + 1)
    return max(bounds) if bounds else None


def effective_maximum(node: _NumericSchema) -> int | None:
    """Largest integer allowed by maximum/exclusiveMaximum (see effective_minimum)."""
    bounds = []
    if node.maximum is not None:
        if node.exclusive_maximum is True:
            bounds.append(math.ceil(node.maximum) - 1)
        else:
            bounds.append(math.floor(node.maximum))
    if _is_number(node.exclusive_maximum):
        bounds.append(math.ceil(node.exclusive_maximum) - 1)
    return min(bounds) if bounds else None


def lower_bound(node: _NumericSchema) -> tuple[float, bool] | None:
    """Tightest (bound, exclusive) lower limit for floating point values."""
    bounds = []
    if node.minimum is not None:
        bounds.append((node.minimum, node.exclusive_minimum is True))
    if _is_number(node.exclusive_minimum):
        bounds.append((node.exclusive_minimum, True))
    return max(bounds, default=None)


def upper_bound(node: _NumericSchema) -> tuple[float, bool] | None:
    """Tightest (bound, exclusive) upper limit for floating point values."""
    bounds = []
    if node.maximum is not None:
        bounds.append((node.maximum, node.exclusive_maximum is True))
    if _is_number(node.exclusive_maximum):
        bounds.append((node.exclusive_maximum, True))
    # lowest bound first; at equal bounds the exclusive one is tighter
    return min(bounds, key=lambda bound: (bound[0], not bound[1]), default=None)
