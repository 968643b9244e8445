"""
Validation combinators.

A Validation is a plain function from an input value to a ValidationResult.
Validators never raise for bad input: every failure comes back as an
ErrorTree, and composite validators collect the errors of all their parts
instead of stopping at the first one.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from schema_form.models.error_value import ErrorKind, ErrorValue
from schema_form.validation.error_tree import EMPTY_TREE, ErrorTree
from schema_form.validation.paths import Path


class _Missing:
    """Output of an optional field that was not filled in."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a validation: an output value or a non-empty error tree.

    The result is falsy when invalid, so callers can write
    ``if not result: show(result.errors)``.
    """

    output: Any = None
    errors: ErrorTree = EMPTY_TREE

    @property
    def is_valid(self) -> bool:
        return self.errors.is_empty

    def __bool__(self) -> bool:
        return self.is_valid

    @classmethod
    def success(cls, output: Any) -> "ValidationResult":
        return cls(output=output)

    @classmethod
    def failure(cls, errors: ErrorTree) -> "ValidationResult":
        return cls(errors=errors)


Validation = Callable[[Any], ValidationResult]

# A constraint check returns the error it finds, or None
Check = Callable[[Any], ErrorValue | None]


def succeed(output: Any) -> Validation:
    """Always succeeds with output, ignoring the input."""
    return lambda _value: ValidationResult.success(output)


def fail(error: ErrorValue) -> Validation:
    """Always fails with error at the root."""
    return lambda _value: ValidationResult.failure(ErrorTree.single(error))


def _error(kind: ErrorKind) -> ValidationResult:
    return ValidationResult.failure(ErrorTree.single(ErrorValue.of(kind)))


# ASCII digits only; Python literals such as "1_000" or "inf" are not JSON
_JSON_INTEGER = re.compile(r"-?(?:0|[1-9][0-9]*)")
_JSON_NUMBER = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_int(value: Any) -> ValidationResult:
    """Decode an integer from a JSON number or JSON integer text."""
    if value is None:
        return _error(ErrorKind.EMPTY)
    if isinstance(value, str):
        text = value.strip()
        if not _JSON_INTEGER.fullmatch(text):
            return _error(ErrorKind.INVALID_INT)
        try:
            return ValidationResult.success(int(text))
        except ValueError:
            # beyond the interpreter's integer string conversion limit
            return _error(ErrorKind.INVALID_INT)
    if isinstance(value, int) and not isinstance(value, bool):
        return ValidationResult.success(value)
    if isinstance(value, float) and value.is_integer():
        return ValidationResult.success(int(value))
    return _error(ErrorKind.INVALID_INT)


def validate_float(value: Any) -> ValidationResult:
    """
    Decode a finite float from a JSON number or JSON number text.

    Numbers too large for a float are invalid rather than infinite.
    """
    if value is None:
        return _error(ErrorKind.EMPTY)
    if isinstance(value, str):
        text = value.strip()
        if not _JSON_NUMBER.fullmatch(text):
            return _error(ErrorKind.INVALID_FLOAT)
        value = text
    elif not _is_number(value):
        return _error(ErrorKind.INVALID_FLOAT)
    try:
        number = float(value)
    except OverflowError:
        return _error(ErrorKind.INVALID_FLOAT)
    if not math.isfinite(number):
        return _error(ErrorKind.INVALID_FLOAT)
    return ValidationResult.success(number)


def validate_string(value: Any) -> ValidationResult:
    if value is None:
        return _error(ErrorKind.EMPTY)
    if isinstance(value, str):
        return ValidationResult.success(value)
    return _error(ErrorKind.INVALID_STRING)


def validate_bool(value: Any) -> ValidationResult:
    """Only real booleans pass; the text "true" is not a boolean."""
    if value is None:
        return _error(ErrorKind.EMPTY)
    if isinstance(value, bool):
        return ValidationResult.success(value)
    return _error(ErrorKind.INVALID_BOOL)


def validate_null(value: Any) -> ValidationResult:
    if value is None:
        return ValidationResult.success(None)
    return _error(ErrorKind.INVALID_NULL)


def map_output(validation: Validation, f: Callable[[Any], Any]) -> Validation:
    def run(value: Any) -> ValidationResult:
        result = validation(value)
        if not result:
            return result
        return ValidationResult.success(f(result.output))

    return run


def and_then(validation: Validation, f: Callable[[Any], Validation]) -> Validation:
    """Run validation, then the validation f builds from its output."""

    def run(value: Any) -> ValidationResult:
        result = validation(value)
        if not result:
            return result
        return f(result.output)(value)

    return run


def check_all(validation: Validation, checks: Sequence[Check]) -> Validation:
    """
    Run validation, then every check against its output.

    Checks run independently; all failing checks report at the same path.
    """

    def run(value: Any) -> ValidationResult:
        result = validation(value)
        if not result:
            return result
        tree = EMPTY_TREE
        for check in checks:
            error = check(result.output)
            if error is not None:
                tree = tree.insert_at_path((), error)
        if tree:
            return ValidationResult.failure(tree)
        return result

    return run


def map_error_pointers(f: Callable[[Path], Path], validation: Validation) -> Validation:
    """Rewrite every error path the validation reports."""

    def run(value: Any) -> ValidationResult:
        result = validation(value)
        if result:
            return result
        return ValidationResult.failure(result.errors.map_paths(f))

    return run


def validate_all(field_validators: Iterable[tuple[Path, Validation]]) -> Validation:
    """
    Run every (path, validation) pair against the same input.

    On success the output is a dict keyed by the last segment of each path,
    leaving out MISSING outputs. On failure the errors of all fields are
    prefixed by their path and merged; no field is skipped.
    """
    field_validators = list(field_validators)

    def run(value: Any) -> ValidationResult:
        output: dict[Any, Any] = {}
        tree = EMPTY_TREE
        for path, validation in field_validators:
            result = validation(value)
            if not result:
                tree = tree.merge(result.errors.prefixed(path))
            elif result.output is not MISSING:
                output[path[-1]] = result.output
        if tree:
            return ValidationResult.failure(tree)
        return ValidationResult.success(output)

    return run


def validate_each(validations: Sequence[tuple[Any, Validation]]) -> ValidationResult:
    """
    Run (input, validation) pairs positionally into a list output.

    Errors are merged unprefixed; wrap each validation with
    map_error_pointers to place them.
    """
    output = []
    tree = EMPTY_TREE
    for value, validation in validations:
        result = validation(value)
        if result:
            output.append(result.output)
        else:
            tree = tree.merge(result.errors)
    if tree:
        return ValidationResult.failure(tree)
    return ValidationResult.success(output)


def field(
    key: str,
    validation: Validation,
    required: bool = False,
    accepts_null: bool = False,
) -> Validation:
    """
    Validate input[key].

    A missing or null key yields MISSING when optional and an EMPTY error
    when required. With accepts_null the validation itself sees the null
    whenever the key is present or required. Non-dict input is treated as
    having no keys.
    """

    def run(value: Any) -> ValidationResult:
        present = isinstance(value, dict) and key in value
        item = value[key] if present else None
        if item is None and not (accepts_null and (present or required)):
            if required:
                return _error(ErrorKind.EMPTY)
            return ValidationResult.success(MISSING)
        return validation(item)

    return run
