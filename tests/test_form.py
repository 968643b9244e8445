"""Tests for form values, the form model and its accessors."""

import pytest

from schema_form.form.accessor import (
    get_changed_fields,
    get_errors,
    get_field,
    get_focus,
    get_output,
    is_submitted,
)
from schema_form.form.messages import Blur, Focus, Input, InputKind, NoOp, Reset, Submit, Validate
from schema_form.form.model import FormModel, initial, update
from schema_form.form.values import build_raw_value, default_values, flatten_raw_value
from schema_form.models.error_value import ErrorKind, ErrorValue
from schema_form.models.field_value import BoolValue, EmptyValue, IntValue, StringValue
from schema_form.validation.schema_walker import schema_validation

SCHEMA = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 2},
        "age": {"type": "integer", "minimum": 18},
        "newsletter": {"type": "boolean", "default": False},
        "plan": {"type": "string", "enum": ["free", "pro"], "default": "free"},
    },
}

NAME = ("name",)
AGE = ("age",)
PLAN = ("plan",)
NEWSLETTER = ("newsletter",)


def text(path, value: str) -> Input:
    return Input(path, InputKind.TEXT, StringValue(value=value))


@pytest.fixture
def validation():
    return schema_validation(SCHEMA)


@pytest.fixture
def model(validation):
    return initial(default_values(SCHEMA), validation)


class TestValues:
    """Tests for converting between flat values and raw values."""

    def test_build_raw_value(self):
        """Test nesting flat values."""
        raw = build_raw_value({
            ("user", "name"): StringValue(value="Ada"),
            ("user", "tags", 1): StringValue(value="b"),
            ("user", "tags", 0): StringValue(value="a"),
            ("count",): IntValue(value=2),
        })
        assert raw == {"user": {"name": "Ada", "tags": ["a", "b"]}, "count": 2}

    def test_empty_values(self):
        """Test Empty is omitted from objects and null inside lists."""
        raw = build_raw_value({
            ("name",): EmptyValue(),
            ("tags", 1): StringValue(value="b"),
            ("tags", 0): EmptyValue(),
        })
        assert raw == {"tags": [None, "b"]}

    def test_list_gaps_are_padded(self):
        """Test missing list positions become null."""
        assert build_raw_value({("tags", 2): IntValue(value=1)}) == {"tags": [None, None, 1]}

    def test_conflicting_paths_are_skipped(self):
        """Test a path through a scalar is dropped."""
        raw = build_raw_value({
            ("a",): IntValue(value=1),
            ("a", "b"): IntValue(value=2),
        })
        assert raw == {"a": 1}

    def test_flatten_raw_value(self):
        """Test splitting a raw value into leaves."""
        values = flatten_raw_value({"user": {"name": "Ada", "tags": ["x"]}, "active": True})
        assert values == {
            ("user", "name"): StringValue(value="Ada"),
            ("user", "tags", 0): StringValue(value="x"),
            ("active",): BoolValue(value=True),
        }

    def test_default_values(self):
        """Test defaults are collected and property defaults win."""
        schema = {
            "type": "object",
            "default": {"plan": "pro", "seats": 3},
            "properties": {
                "plan": {"type": "string", "default": "free"},
                "owner": {"type": "object", "properties": {"name": {"type": "string", "default": "root"}}},
            },
        }
        assert default_values(schema) == {
            ("plan",): StringValue(value="free"),
            ("seats",): IntValue(value=3),
            ("owner", "name"): StringValue(value="root"),
        }


class TestInitial:
    """Tests for the initial model."""

    def test_initial_is_validated(self, model):
        """Test the initial model carries a validation result."""
        assert not model.is_valid
        assert model.output is None
        assert model.errors.lookup(("properties", "name")) == ErrorValue.empty()

    def test_initial_flags(self, model):
        """Test nothing is dirty, changed, focused or submitted."""
        assert model.dirty_fields == frozenset()
        assert get_changed_fields(model) == frozenset()
        assert get_focus(model) is None
        assert not is_submitted(model)

    def test_valid_initial_values(self, validation):
        """Test valid initial values produce output."""
        model = initial({NAME: StringValue(value="Ada")}, validation)
        assert get_output(model) == {"name": "Ada"}
        assert get_errors(model) == []


class TestUpdate:
    """Tests for message handling."""

    def test_focus_does_not_revalidate(self, model, validation):
        """Test Focus only moves focus."""
        focused = update(validation, Focus(NAME), model)
        assert focused.focus == NAME
        assert focused.result is model.result

    def test_noop_is_identity(self, model, validation):
        """Test NoOp returns the same model."""
        assert update(validation, NoOp(), model) is model

    def test_input_writes_and_validates(self, model, validation):
        """Test Input stores the value and re-validates."""
        model = update(validation, text(NAME, "Ada"), model)
        assert model.values[NAME] == StringValue(value="Ada")
        assert model.is_valid
        assert model.output == {"name": "Ada", "newsletter": False, "plan": "free"}

    def test_output_and_errors_are_exclusive(self, model, validation):
        """Test success clears errors and failure clears output."""
        model = update(validation, text(NAME, "Ada"), model)
        assert model.output is not None and not model.errors
        model = update(validation, text(NAME, "A"), model)
        assert model.output is None and model.errors

    def test_free_text_marks_dirty(self, model, validation):
        """Test text inputs are dirty until blurred."""
        model = update(validation, text(NAME, "Ad"), model)
        assert NAME in model.dirty_fields
        model = update(validation, Blur(NAME), model)
        assert NAME not in model.dirty_fields
        assert model.focus is None

    def test_selection_is_never_dirty(self, model, validation):
        """Test selection inputs only mark the field changed."""
        model = update(validation, Input(PLAN, InputKind.SELECT, StringValue(value="pro")), model)
        assert PLAN not in model.dirty_fields
        assert PLAN in model.changed_fields

    def test_changed_field_reversion(self, model, validation):
        """Test typing back the original value un-changes the field."""
        model = update(validation, text(PLAN, "pro"), model)
        assert PLAN in model.changed_fields
        assert model.original_values[PLAN] == StringValue(value="free")
        model = update(validation, text(PLAN, "free"), model)
        assert PLAN not in model.changed_fields
        assert PLAN in model.dirty_fields
        assert model.original_values[PLAN] == StringValue(value="free")

    def test_snapshot_is_kept_from_first_change(self, model, validation):
        """Test later edits do not move the snapshot."""
        for value in ("pro", "x", "y"):
            model = update(validation, text(PLAN, value), model)
        assert model.original_values[PLAN] == StringValue(value="free")

    def test_reversion_without_snapshot(self, model, validation):
        """Test a field without a value reverts at the blank value."""
        model = update(validation, text(NAME, "A"), model)
        assert model.original_values[NAME] is None
        model = update(validation, text(NAME, ""), model)
        assert NAME not in model.changed_fields

    def test_checkbox_reversion_without_snapshot(self, model, validation):
        """Test unchecking a never-set checkbox reverts it."""
        path = ("terms",)
        model = update(validation, Input(path, InputKind.CHECKBOX, BoolValue(value=True)), model)
        assert path in model.changed_fields
        model = update(validation, Input(path, InputKind.CHECKBOX, BoolValue(value=False)), model)
        assert path not in model.changed_fields

    def test_submit(self, model, validation):
        """Test Submit validates and marks the form submitted."""
        model = update(validation, Submit(), model)
        assert model.is_submitted
        model = update(validation, text(NAME, "Ada"), model)
        assert model.is_submitted

    def test_validate_is_idempotent(self, model, validation):
        """Test re-validating twice changes nothing."""
        model = update(validation, text(AGE, "12"), model)
        once = update(validation, Validate(), model)
        twice = update(validation, Validate(), once)
        assert once == twice
        assert once.errors == model.errors

    def test_reset(self, model, validation):
        """Test Reset replaces values and clears tracking."""
        model = update(validation, Focus(NAME), model)
        model = update(validation, text(NAME, "A"), model)
        model = update(validation, Submit(), model)
        model = update(validation, Reset({NAME: StringValue(value="Grace")}), model)
        assert model.values == {NAME: StringValue(value="Grace")}
        assert model.dirty_fields == frozenset()
        assert model.changed_fields == frozenset()
        assert model.original_values == {}
        assert not model.is_submitted
        assert model.is_valid
        assert model.focus == NAME

    def test_models_are_immutable(self, model, validation):
        """Test update leaves the previous model untouched."""
        before = dict(model.values)
        update(validation, text(NAME, "Ada"), model)
        assert model.values == before

    def test_number_beyond_float_range(self):
        """Test an out-of-range number becomes a field error."""
        validation = schema_validation({"type": "object", "properties": {"ratio": {"type": "number"}}})
        model = initial({}, validation)
        model = update(validation, Input(("ratio",), InputKind.TEXT, IntValue(value=10**400)), model)
        assert model.output is None
        assert get_errors(model) == [("/properties/ratio", ErrorValue.of(ErrorKind.INVALID_FLOAT))]

    def test_unknown_message(self, model, validation):
        """Test unknown messages are programming errors."""
        with pytest.raises(TypeError):
            update(validation, "submit", model)

    def test_list_paths_are_normalized(self, model, validation):
        """Test list paths address the same field as tuples."""
        model = update(validation, Input(["name"], InputKind.TEXT, StringValue(value="Ada")), model)
        assert model.values[NAME] == StringValue(value="Ada")
        assert NAME in model.dirty_fields


class TestAccessor:
    """Tests for reading field state."""

    def test_dirty_invalid_field_hides_live_error(self, model, validation):
        """Test errors stay hidden while a field is being edited."""
        model = update(validation, text(NAME, "A"), model)
        state = get_field(NAME, model)
        assert state.error == ErrorValue.of(ErrorKind.SHORTER_STRING_THAN, 2)
        assert state.live_error is None
        assert state.is_dirty and state.is_changed

    def test_blur_shows_live_error(self, model, validation):
        """Test a changed field shows its error once left."""
        model = update(validation, text(NAME, "A"), model)
        model = update(validation, Blur(NAME), model)
        assert get_field(NAME, model).live_error == ErrorValue.of(ErrorKind.SHORTER_STRING_THAN, 2)

    def test_submit_forces_visibility(self, validation):
        """Test an untouched invalid value shows its error after Submit."""
        model = initial({NAME: StringValue(value="A")}, validation)
        assert get_field(NAME, model).error is not None
        assert get_field(NAME, model).live_error is None
        model = update(validation, Submit(), model)
        state = get_field(NAME, model)
        assert state.live_error == state.error

    def test_submit_shows_error_of_dirty_field(self, model, validation):
        """Test submitted forms show errors even mid-edit."""
        model = update(validation, text(NAME, "A"), model)
        model = update(validation, Submit(), model)
        assert get_field(NAME, model).live_error is not None

    def test_field_state(self, model, validation):
        """Test the remaining flags and the value."""
        model = update(validation, Focus(AGE), model)
        model = update(validation, text(AGE, "30"), model)
        state = get_field(AGE, model)
        assert state.has_focus
        assert state.value == StringValue(value="30")
        assert state.display_value == "30"
        assert state.error is None
        assert not get_field(NAME, model).has_focus

    def test_pointer_paths(self, model, validation):
        """Test fields can be addressed by JSON pointer."""
        model = update(validation, text(NAME, "A"), model)
        assert get_field("/name", model).is_changed

    def test_digit_keys_by_pointer(self):
        """Test a digit object key is addressed by pointer when the schema is given."""
        schema = {"type": "object", "properties": {"2024": {"type": "integer", "minimum": 1}}}
        validation = schema_validation(schema)
        model = initial({("2024",): IntValue(value=0)}, validation)
        state = get_field("/2024", model, schema)
        assert state.path == ("2024",)
        assert state.value == IntValue(value=0)
        assert state.error == ErrorValue.of(ErrorKind.LESS_INT_THAN, 1)

    def test_unknown_field(self, model):
        """Test a field without value or error."""
        state = get_field(("nope",), model)
        assert state.value is None
        assert state.error is None

    def test_get_errors(self, model, validation):
        """Test errors come as pointer pairs."""
        model = update(validation, text(AGE, "12"), model)
        assert get_errors(model) == [
            ("/properties/name", ErrorValue.empty()),
            ("/properties/age", ErrorValue.of(ErrorKind.LESS_INT_THAN, 18)),
        ]

    def test_nested_and_list_fields(self):
        """Test error lookup under nested objects and arrays."""
        schema = {
            "type": "object",
            "properties": {
                "address": {"type": "object", "properties": {"zip": {"type": "string", "minLength": 5}}},
                "scores": {"type": "array", "items": {"type": "integer"}},
            },
        }
        validation = schema_validation(schema)
        model = initial({
            ("address", "zip"): StringValue(value="123"),
            ("scores", 0): StringValue(value="7"),
            ("scores", 1): StringValue(value="x"),
        }, validation)
        assert get_field(("address", "zip"), model).error.kind is ErrorKind.SHORTER_STRING_THAN
        assert get_field(("scores", 1), model).error.kind is ErrorKind.INVALID_INT
        assert get_field(("scores", 0), model).error is None
