"""
Form state model.

FormModel is an immutable snapshot of one editing session. update() takes
a message and returns the next snapshot; every message except Focus and
NoOp re-validates the whole value mapping, so the stored result always
matches the current values.

Usage:
    validation = schema_validation(schema)
    model = initial(default_values(schema), validation)
    model = update(validation, Input(("name",), InputKind.TEXT, StringValue(value="Ada")), model)
    model = update(validation, Submit(), model)
    get_output(model)
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from schema_form.form.messages import Blur, Focus, Input, Msg, NoOp, Reset, Submit, Validate
from schema_form.models.field_value import BoolValue, EmptyValue, FieldValue, StringValue
from schema_form.validation.combinators import Validation, ValidationResult
from schema_form.validation.error_tree import ErrorTree
from schema_form.validation.paths import Path

logger = logging.getLogger("schema-form")


@dataclass(frozen=True)
class FormModel:
    """
    State of one form session.

    values: current value per field path
    focus: path of the focused field, if any
    dirty_fields: fields edited as free text since they were last blurred
    changed_fields: fields whose value differs from their snapshot
    original_values: value of each field when it first became changed
        (None when the field had no value yet)
    is_submitted: set by Submit, cleared only by Reset
    result: outcome of the last validation pass
    """

    values: Mapping[Path, FieldValue] = field(default_factory=dict)
    focus: Path | None = None
    dirty_fields: frozenset[Path] = frozenset()
    changed_fields: frozenset[Path] = frozenset()
    original_values: Mapping[Path, FieldValue | None] = field(default_factory=dict)
    is_submitted: bool = False
    result: ValidationResult = field(default_factory=ValidationResult)

    @property
    def output(self) -> Any:
        """Output of the last successful validation, None while invalid."""
        return self.result.output if self.result.is_valid else None

    @property
    def errors(self) -> ErrorTree:
        return self.result.errors

    @property
    def is_valid(self) -> bool:
        return self.result.is_valid


def _normalize_values(values: Mapping[Path, FieldValue]) -> dict[Path, FieldValue]:
    return {tuple(path): value for path, value in values.items()}


def _validated(model: FormModel, validation: Validation) -> FormModel:
    result = validation(model.values)
    if not result:
        logger.debug(f"Form invalid: {len(result.errors)} error(s)")
    return replace(model, result=result)


def initial(initial_values: Mapping[Path, FieldValue], validation: Validation) -> FormModel:
    """A fresh, validated session over initial_values."""
    return _validated(FormModel(values=_normalize_values(initial_values)), validation)


def _blank_like(value: FieldValue) -> FieldValue:
    """The "nothing entered" value of the same variant: "" or False."""
    if isinstance(value, StringValue):
        return StringValue(value="")
    if isinstance(value, BoolValue):
        return BoolValue(value=False)
    return EmptyValue()


def _apply_input(model: FormModel, msg: Input) -> FormModel:
    path = tuple(msg.path)
    values = dict(model.values)
    values[path] = msg.value

    dirty_fields = model.dirty_fields
    if msg.kind.is_free_text:
        dirty_fields = dirty_fields | {path}

    changed_fields = model.changed_fields
    original_values = model.original_values
    if path in changed_fields:
        original = original_values.get(path)
        baseline = original if original is not None else _blank_like(msg.value)
        if baseline == msg.value:
            # back to the snapshot; the snapshot itself is kept
            changed_fields = changed_fields - {path}
    else:
        changed_fields = changed_fields | {path}
        if path not in original_values:
            original_values = {**original_values, path: model.values.get(path)}

    return replace(
        model,
        values=values,
        dirty_fields=dirty_fields,
        changed_fields=changed_fields,
        original_values=original_values,
    )


def update(validation: Validation, msg: Msg, model: FormModel) -> FormModel:
    """
    Apply one message and return the next model.

    Raises:
        TypeError: If msg is not one of the form messages.
    """
    logger.debug(f"Form message: {msg!r}")

    if isinstance(msg, NoOp):
        return model
    if isinstance(msg, Focus):
        return replace(model, focus=tuple(msg.path))
    if isinstance(msg, Blur):
        blurred = replace(model, focus=None, dirty_fields=model.dirty_fields - {tuple(msg.path)})
        return _validated(blurred, validation)
    if isinstance(msg, Input):
        return _validated(_apply_input(model, msg), validation)
    if isinstance(msg, Submit):
        return replace(_validated(model, validation), is_submitted=True)
    if isinstance(msg, Validate):
        return _validated(model, validation)
    if isinstance(msg, Reset):
        reset = replace(
            model,
            values=_normalize_values(msg.values),
            dirty_fields=frozenset(),
            changed_fields=frozenset(),
            original_values={},
            is_submitted=False,
        )
        return _validated(reset, validation)
    raise TypeError(f"Unknown form message: {type(msg).__name__}")
