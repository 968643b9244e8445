"""
Schema walker.

walk() turns a JSON Schema into a Validation over a raw JSON-like value by
dispatching on the classified node type and recursing into properties and
items. Child errors are placed under schema pointers: ("properties", key)
for object members and ("items", index) for array elements.

schema_validation() is the form-level entry point: it validates the form's
flat Path -> FieldValue mapping.
"""

import json
import math
import re
from fractions import Fraction
from typing import Any, Callable, Mapping

from schema_form.form.values import build_raw_value
from schema_form.models.error_value import CustomError, CustomErrorCode, ErrorKind, ErrorValue
from schema_form.models.field_value import FieldValue
from schema_form.validation.combinators import (
    Check,
    Validation,
    ValidationResult,
    check_all,
    fail,
    field,
    map_error_pointers,
    validate_all,
    validate_bool,
    validate_each,
    validate_float,
    validate_int,
    validate_null,
    validate_string,
)
from schema_form.validation.error_tree import EMPTY_TREE, ErrorTree
from schema_form.validation.formats import FormatRegistry, check_format
from schema_form.validation.paths import Path
from schema_form.validation.schema_nodes import (
    ArraySchema,
    BlankSchema,
    BooleanSchema,
    ConstantSchema,
    IntegerSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    SchemaNode,
    StringSchema,
    UnsupportedSchema,
    effective_maximum,
    effective_minimum,
    lower_bound,
    parse_schema,
    upper_bound,
)


def canonical_json(value: Any) -> str:
    """Encoding used to compare JSON values: sorted keys, 1.0 == 1."""
    return json.dumps(_normalize(value), sort_keys=True, separators=(",", ":"), default=str)


def _normalize(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {str(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def _same_value(a: Any, b: Any) -> bool:
    return canonical_json(a) == canonical_json(b)


def _failure(error: ErrorValue) -> ValidationResult:
    return ValidationResult.failure(ErrorTree.single(error))


def _accept(value: Any) -> ValidationResult:
    return ValidationResult.success(value)


def _const_check(expected: Any) -> Check:
    return lambda value: None if _same_value(value, expected) else ErrorValue.not_const(expected)


def _enum_check(allowed: list[Any]) -> Check:
    def check(value: Any) -> ErrorValue | None:
        if any(_same_value(value, option) for option in allowed):
            return None
        return ErrorValue.not_included_in(allowed)

    return check


def _is_multiple(value: int | float, divisor: int | float) -> bool:
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    try:
        quotient = value / divisor
    except OverflowError:
        quotient = math.inf
    if not math.isfinite(quotient):
        # out of float range, so compare exactly
        return Fraction(value) % Fraction(divisor) == 0
    return math.isclose(quotient, round(quotient), rel_tol=1e-9, abs_tol=1e-9)


def _integer_validation(node: IntegerSchema) -> Validation:
    checks: list[Check] = []
    if node.has("const"):
        checks.append(_const_check(node.const))
    if node.multiple_of is not None:
        divisor = node.multiple_of
        checks.append(
            lambda v: None if _is_multiple(v, divisor) else ErrorValue.of(ErrorKind.NOT_MULTIPLE_OF_INT, divisor)
        )
    minimum = effective_minimum(node)
    if minimum is not None:
        checks.append(lambda v: ErrorValue.of(ErrorKind.LESS_INT_THAN, minimum) if v < minimum else None)
    maximum = effective_maximum(node)
    if maximum is not None:
        checks.append(lambda v: ErrorValue.of(ErrorKind.GREATER_INT_THAN, maximum) if v > maximum else None)
    if node.enum is not None:
        checks.append(_enum_check(node.enum))
    return check_all(validate_int, checks)


def _number_validation(node: NumberSchema) -> Validation:
    checks: list[Check] = []
    if node.has("const"):
        checks.append(_const_check(node.const))
    if node.multiple_of is not None:
        divisor = node.multiple_of
        checks.append(
            lambda v: None if _is_multiple(v, divisor) else ErrorValue.of(ErrorKind.NOT_MULTIPLE_OF_FLOAT, divisor)
        )
    lower = lower_bound(node)
    if lower is not None:
        low, exclusive = lower
        if exclusive:
            checks.append(lambda v: ErrorValue.of(ErrorKind.LESS_EQUAL_FLOAT_THAN, low) if v <= low else None)
        else:
            checks.append(lambda v: ErrorValue.of(ErrorKind.LESS_FLOAT_THAN, low) if v < low else None)
    upper = upper_bound(node)
    if upper is not None:
        high, exclusive = upper
        if exclusive:
            checks.append(lambda v: ErrorValue.of(ErrorKind.GREATER_EQUAL_FLOAT_THAN, high) if v >= high else None)
        else:
            checks.append(lambda v: ErrorValue.of(ErrorKind.GREATER_FLOAT_THAN, high) if v > high else None)
    if node.enum is not None:
        checks.append(_enum_check(node.enum))
    return check_all(validate_float, checks)


def _string_validation(node: StringSchema, formats: FormatRegistry | None) -> Validation:
    checks: list[Check] = []
    if node.min_length is not None:
        min_length = node.min_length
        checks.append(
            lambda v: ErrorValue.of(ErrorKind.SHORTER_STRING_THAN, min_length) if len(v) < min_length else None
        )
    if node.max_length is not None:
        max_length = node.max_length
        checks.append(
            lambda v: ErrorValue.of(ErrorKind.LONGER_STRING_THAN, max_length) if len(v) > max_length else None
        )
    if node.pattern is not None:
        pattern = node.pattern
        try:
            regex = re.compile(pattern)
        except re.error as e:
            error = ErrorValue.unimplemented(f"pattern {pattern!r} does not compile: {e}")
            checks.append(lambda v: error)
        else:
            checks.append(lambda v: None if regex.search(v) else ErrorValue.of(ErrorKind.INVALID_FORMAT, pattern))
    if node.format is not None:
        format_name = node.format
        checks.append(lambda v: check_format(format_name, v, formats))
    if node.enum is not None:
        checks.append(_enum_check(node.enum))
    if node.has("const"):
        checks.append(_const_check(node.const))
    return check_all(validate_string, checks)


def _boolean_validation(node: BooleanSchema) -> Validation:
    checks: list[Check] = []
    if node.has("const"):
        checks.append(_const_check(node.const))
    return check_all(validate_bool, checks)


def _accepts_null(node: SchemaNode) -> bool:
    if isinstance(node, ConstantSchema):
        return node.value
    return isinstance(node, (NullSchema, BlankSchema))


def _object_validation(node: ObjectSchema, formats: FormatRegistry | None) -> Validation:
    required = set(node.required)
    fields: list[tuple[Path, Validation]] = []
    for key, raw_child in node.properties.items():
        child = parse_schema(raw_child)
        fields.append((
            ("properties", key),
            field(key, node_validation(child, formats), required=key in required, accepts_null=_accepts_null(child)),
        ))
    for key in node.required:
        if key not in node.properties:
            fields.append((("properties", key), field(key, _accept, required=True)))
    properties = validate_all(fields)

    def run(value: Any) -> ValidationResult:
        if value is None:
            return _failure(ErrorValue.empty())
        if not isinstance(value, dict):
            return _failure(ErrorValue.of(ErrorKind.INVALID_OBJECT))
        return properties(value)

    return run


def _items_pointer(index: int):
    return lambda path: ("items", index) + path


def _array_checks(node: ArraySchema) -> list[Check]:
    checks: list[Check] = []
    if node.min_items is not None:
        min_items = node.min_items
        checks.append(
            lambda items: ErrorValue.custom(CustomError(code=CustomErrorCode.SHORTER_LIST_THAN, value=min_items))
            if len(items) < min_items
            else None
        )
    if node.max_items is not None:
        max_items = node.max_items
        checks.append(
            lambda items: ErrorValue.custom(CustomError(code=CustomErrorCode.LONGER_LIST_THAN, value=max_items))
            if len(items) > max_items
            else None
        )
    if node.unique_items:
        checks.append(_unique_check)
    return checks


def _unique_check(items: list[Any]) -> ErrorValue | None:
    seen: set[str] = set()
    for item in items:
        encoded = canonical_json(item)
        if encoded in seen:
            return ErrorValue.custom(CustomError(code=CustomErrorCode.INVALID_SET, value=item))
        seen.add(encoded)
    return None


def _array_validation(node: ArraySchema, formats: FormatRegistry | None) -> Validation:
    tuple_items = node.tuple_items
    if tuple_items is not None:
        positional = [node_validation(parse_schema(raw), formats) for raw in tuple_items]
    elif node.items is not None:
        item_validation = node_validation(parse_schema(node.items), formats)
    else:
        item_validation = _accept
    checks = _array_checks(node)

    def run(value: Any) -> ValidationResult:
        if value is None:
            return _failure(ErrorValue.empty())
        if not isinstance(value, list):
            return _failure(ErrorValue.of(ErrorKind.INVALID_LIST))

        tree = EMPTY_TREE
        if tuple_items is not None:
            if len(value) != len(positional):
                tree = tree.insert_at_path(
                    (),
                    ErrorValue.custom(CustomError(code=CustomErrorCode.ITEM_COUNT_MISMATCH, value=len(positional))),
                )
            pairs = list(zip(value, positional))
        else:
            pairs = [(item, item_validation) for item in value]

        for check in checks:
            error = check(value)
            if error is not None:
                tree = tree.insert_at_path((), error)

        elements = validate_each([
            (item, map_error_pointers(_items_pointer(index), validation))
            for index, (item, validation) in enumerate(pairs)
        ])
        tree = tree.merge(elements.errors)
        if tree:
            return ValidationResult.failure(tree)
        return elements

    return run


def node_validation(node: SchemaNode, formats: FormatRegistry | None = None) -> Validation:
    """Build the Validation for an already classified schema node."""
    if isinstance(node, ConstantSchema):
        return _accept if node.value else fail(ErrorValue.of(ErrorKind.INVALID))
    if isinstance(node, BlankSchema):
        return _accept
    if isinstance(node, ObjectSchema):
        return _object_validation(node, formats)
    if isinstance(node, IntegerSchema):
        return _integer_validation(node)
    if isinstance(node, NumberSchema):
        return _number_validation(node)
    if isinstance(node, StringSchema):
        return _string_validation(node, formats)
    if isinstance(node, BooleanSchema):
        return _boolean_validation(node)
    if isinstance(node, ArraySchema):
        return _array_validation(node, formats)
    if isinstance(node, NullSchema):
        return validate_null
    if isinstance(node, UnsupportedSchema):
        return fail(ErrorValue.unimplemented(node.reason))
    raise TypeError(f"Unclassified schema node: {type(node).__name__}")


def walk(schema: Any, formats: FormatRegistry | None = None) -> Validation:
    """Validation of a raw JSON-like value against schema."""
    return node_validation(parse_schema(schema), formats)


def _root_factory(node: SchemaNode) -> Callable[[], Any]:
    if isinstance(node, ArraySchema):
        return list
    if isinstance(node, ObjectSchema):
        return dict
    return lambda: None


def schema_validation(schema: Any, formats: FormatRegistry | None = None) -> Validation:
    """
    Validation of a form's flat value mapping against schema.

    The mapping is nested into a raw value first (see build_raw_value); an
    empty mapping stands for {} under an object schema, [] under an array
    schema and None otherwise.
    """
    node = parse_schema(schema)
    validation = node_validation(node, formats)
    root_factory = _root_factory(node)

    def run(values: Mapping[Path, FieldValue]) -> ValidationResult:
        return validation(build_raw_value(values, root_factory))

    return run
