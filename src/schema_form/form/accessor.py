"""
Accessors over a FormModel.

These are the read side of the form: renderers and hosts query the model
only through them.
"""

from typing import Any, Iterable

from schema_form.form.model import FormModel
from schema_form.models.error_value import ErrorValue
from schema_form.models.field_state import FieldState
from schema_form.validation.paths import Path, Segment, schema_pointer, to_path


def get_field(path: Iterable[Segment] | str, model: FormModel, schema: Any = None) -> FieldState:
    """
    Derive the state of the field at path.

    A JSON Pointer path is resolved against schema when one is given, so
    digit keys of objects are not taken for array indices.

    live_error shows the error only once the form is submitted, or once the
    field has been changed and is no longer being edited. While a field is
    dirty its error stays hidden so users are not interrupted mid-edit.
    """
    path = to_path(path, schema)
    error = model.errors.lookup(schema_pointer(path))
    is_dirty = path in model.dirty_fields
    is_changed = path in model.changed_fields
    show_error = model.is_submitted or (is_changed and not is_dirty)
    return FieldState(
        path=path,
        value=model.values.get(path),
        error=error,
        live_error=error if show_error else None,
        is_dirty=is_dirty,
        is_changed=is_changed,
        has_focus=model.focus == path,
    )


def get_output(model: FormModel) -> Any:
    return model.output


def get_errors(model: FormModel) -> list[tuple[str, ErrorValue]]:
    """All errors as (JSON pointer, error) pairs, parents first."""
    return model.errors.flatten()


def is_submitted(model: FormModel) -> bool:
    return model.is_submitted


def get_focus(model: FormModel) -> Path | None:
    return model.focus


def get_changed_fields(model: FormModel) -> frozenset[Path]:
    return model.changed_fields
