"""Tests for schema-form data models."""

import pytest
from pydantic import ValidationError

from schema_form import validate_data
from schema_form.models.error_value import CustomError, CustomErrorCode, ErrorKind, ErrorValue
from schema_form.models.field_state import FieldState
from schema_form.models.field_value import (
    ABSENT,
    BoolValue,
    EmptyValue,
    IntValue,
    NumberValue,
    StringValue,
    field_value_adapter,
    field_value_from_json,
)
from schema_form.models.form_fields import derive_form_fields, ordered_keys
from schema_form.models.validation_result import FieldValidationError, ValidationReport
from schema_form.validation.combinators import ValidationResult, validate_float, validate_int, validate_string
from schema_form.validation.error_messages import error_message
from schema_form.validation.error_tree import ErrorTree


class TestFieldValue:
    """Tests for FieldValue variants."""

    def test_display_strings(self):
        """Test display rendering of every variant."""
        assert StringValue(value="Ada").to_display_string() == "Ada"
        assert IntValue(value=42).to_display_string() == "42"
        assert NumberValue(value=0.1).to_display_string() == "0.1"
        assert BoolValue(value=True).to_display_string() == "True"
        assert BoolValue(value=False).to_display_string() == "False"
        assert EmptyValue().to_display_string() == ""

    def test_empty_encodes_as_absent(self):
        """Test Empty is omitted, not encoded as null."""
        assert EmptyValue().to_encoded_value() is ABSENT
        assert EmptyValue().to_encoded_value() is not None
        assert not ABSENT

    def test_as_bool(self):
        """Test as_bool only answers for BoolValue."""
        assert BoolValue(value=True).as_bool() is True
        assert BoolValue(value=False).as_bool() is False
        assert StringValue(value="true").as_bool() is None
        assert IntValue(value=1).as_bool() is None
        assert EmptyValue().as_bool() is None

    def test_values_are_frozen(self):
        """Test values cannot be mutated."""
        value = StringValue(value="a")
        with pytest.raises(ValidationError):
            value.value = "b"

    def test_equality(self):
        """Test variants compare by kind and value."""
        assert StringValue(value="1") == StringValue(value="1")
        assert StringValue(value="1") != IntValue(value=1)
        assert EmptyValue() == EmptyValue()

    def test_strict_variants(self):
        """Test a bool is not accepted as an int."""
        with pytest.raises(ValidationError):
            IntValue(value=True)

    def test_from_json(self):
        """Test building values from JSON scalars."""
        assert field_value_from_json("x") == StringValue(value="x")
        assert field_value_from_json(3) == IntValue(value=3)
        assert field_value_from_json(2.5) == NumberValue(value=2.5)
        assert field_value_from_json(True) == BoolValue(value=True)
        assert field_value_from_json(None) == EmptyValue()

    def test_from_json_rejects_containers(self):
        """Test objects and arrays are not scalar values."""
        with pytest.raises(TypeError):
            field_value_from_json({"a": 1})
        with pytest.raises(TypeError):
            field_value_from_json([1])

    def test_discriminated_union(self):
        """Test the adapter picks the variant by kind."""
        value = field_value_adapter.validate_python({"kind": "int", "value": 7})
        assert value == IntValue(value=7)

    @pytest.mark.parametrize(
        "value,validation",
        [
            (StringValue(value="hello"), validate_string),
            (IntValue(value=-12), validate_int),
            (NumberValue(value=3.25), validate_float),
        ],
    )
    def test_encoded_value_decodes_back(self, value, validation):
        """Test decoding the encoded value yields the same value."""
        result = validation(value.to_encoded_value())
        assert result.is_valid
        assert field_value_from_json(result.output) == value


class TestErrorValue:
    """Tests for ErrorValue model."""

    def test_constructors(self):
        """Test payload-carrying constructors."""
        assert ErrorValue.empty().kind is ErrorKind.EMPTY
        assert ErrorValue.not_const(3).param == 3
        assert ErrorValue.not_included_in(("a", "b")).param == ["a", "b"]
        assert ErrorValue.unimplemented("anyOf").param == "anyOf"
        assert ErrorValue.of(ErrorKind.LESS_INT_THAN, 5) == ErrorValue(kind=ErrorKind.LESS_INT_THAN, param=5)

    def test_custom_error(self):
        """Test the custom extension slot wraps any host value."""
        error = ErrorValue.custom({"code": "taken"})
        assert error.kind is ErrorKind.CUSTOM
        assert error.custom_error == {"code": "taken"}
        assert ErrorValue.empty().custom_error is None

    def test_engine_custom_error(self):
        """Test the engine's own custom errors."""
        error = ErrorValue.custom(CustomError(code=CustomErrorCode.INVALID_SET, value=1))
        assert error.custom_error.code is CustomErrorCode.INVALID_SET

    def test_kind_values(self):
        """Test kinds serialize as snake_case strings."""
        assert ErrorKind.LESS_EQUAL_FLOAT_THAN.value == "less_equal_float_than"
        assert ErrorKind("invalid_email") is ErrorKind.INVALID_EMAIL


class TestFieldState:
    """Tests for FieldState model."""

    def test_display_value(self):
        """Test display value of set and unset fields."""
        assert FieldState(path=("age",), value=IntValue(value=3)).display_value == "3"
        assert FieldState(path=("age",)).display_value == ""

    def test_defaults(self):
        """Test a bare field state has no error and no flags."""
        state = FieldState(path=("name",))
        assert state.error is None
        assert state.live_error is None
        assert not state.is_dirty
        assert not state.is_changed
        assert not state.has_focus


class TestFormFields:
    """Tests for FormField derivation."""

    SCHEMA = {
        "type": "object",
        "required": ["email"],
        "properties": {
            "email": {"type": "string", "format": "email", "title": "Email Address"},
            "age": {"type": "integer", "default": 30},
            "address": {
                "type": "object",
                "properties": {
                    "street": {"type": "string"},
                    "city": {"type": "string", "enum": ["Paris", "Rome"]},
                },
            },
            "tags": {"type": "array", "items": {"type": "string"}},
        },
    }

    def test_leaf_fields(self):
        """Test nested objects expand into leaf fields."""
        fields = derive_form_fields(self.SCHEMA)
        assert [f.path for f in fields] == [
            ("email",),
            ("age",),
            ("address", "street"),
            ("address", "city"),
            ("tags",),
        ]

    def test_field_details(self):
        """Test field attributes come from the schema."""
        email, age, street, city, tags = derive_form_fields(self.SCHEMA)
        assert email.title == "Email Address"
        assert email.format == "email"
        assert email.required is True
        assert age.title == "age"
        assert age.default == 30
        assert age.required is False
        assert city.enum_values == ["Paris", "Rome"]
        assert city.pointer == "/address/city"
        assert city.name == "city"
        assert tags.type == "array"

    def test_ui_schema_options(self):
        """Test ui:* options are passed through."""
        ui_schema = {
            "email": {"ui:widget": "email", "ui:placeholder": "you@example.com", "ui:autofocus": True},
        }
        email = derive_form_fields(self.SCHEMA, ui_schema)[0]
        assert email.ui_widget == "email"
        assert email.placeholder == "you@example.com"
        assert email.ui_options["ui:autofocus"] is True

    def test_ui_order(self):
        """Test ui:order with a wildcard."""
        ui_schema = {"ui:order": ["tags", "*", "email"]}
        paths = [f.path[0] for f in derive_form_fields(self.SCHEMA, ui_schema)]
        assert paths[0] == "tags"
        assert paths[-1] == "email"

    def test_ordered_keys(self):
        """Test ordering without a wildcard appends the rest."""
        properties = {"a": {}, "b": {}, "c": {}}
        assert ordered_keys(properties, None) == ["a", "b", "c"]
        assert ordered_keys(properties, ["c", "missing"]) == ["c", "a", "b"]
        assert ordered_keys(properties, ["b", "*", "a"]) == ["b", "c", "a"]

    def test_scalar_root(self):
        """Test a non-object schema is a single root field."""
        fields = derive_form_fields({"type": "string", "title": "Name"})
        assert len(fields) == 1
        assert fields[0].path == ()
        assert fields[0].pointer == ""


class TestFieldValidationError:
    """Tests for FieldValidationError model."""

    def test_error_creation(self):
        """Test creating a field error."""
        error = FieldValidationError(
            path="/properties/age",
            kind=ErrorKind.LESS_INT_THAN,
            message="Must be at least 18",
            expected=18,
        )
        assert error.kind is ErrorKind.LESS_INT_THAN
        assert error.expected == 18


class TestValidationReport:
    """Tests for ValidationReport model."""

    def test_valid_result(self):
        """Test valid validation report."""
        report = ValidationReport.from_result(ValidationResult.success({"email": "test@example.com"}))
        assert report.is_valid
        assert report.error_count == 0
        assert report.validated_data == {"email": "test@example.com"}

    def test_invalid_result(self):
        """Test invalid report with rendered messages."""
        tree = ErrorTree.from_entries([
            (("properties", "age"), ErrorValue.of(ErrorKind.LESS_INT_THAN, 18)),
        ])
        report = ValidationReport.from_result(ValidationResult.failure(tree))
        assert not report.is_valid
        assert report.error_count == 1
        assert report.validated_data is None
        error = report.get_field_errors("/properties/age")[0]
        assert error.message == "Must be at least 18"
        assert error.expected == 18

    def test_error_dict_conversion(self):
        """Test converting errors to dict format."""
        tree = ErrorTree.from_entries([
            (("properties", "email"), ErrorValue.of(ErrorKind.INVALID_EMAIL)),
            (("properties", "email"), ErrorValue.of(ErrorKind.SHORTER_STRING_THAN, 5)),
            (("properties", "age"), ErrorValue.empty()),
        ])
        error_dict = ValidationReport.from_result(ValidationResult.failure(tree)).to_error_dict()
        assert len(error_dict["/properties/email"]) == 2
        assert error_dict["/properties/age"] == ["This field is required"]

    def test_custom_renderer(self):
        """Test a host renderer replaces the default messages."""
        tree = ErrorTree.single(ErrorValue.empty())
        report = ValidationReport.from_result(
            ValidationResult.failure(tree),
            renderer=lambda path, error: f"{path or '/'}: {error.kind.value}",
        )
        assert report.errors[0].message == "/: empty"

    def test_custom_error_payload_serializes(self):
        """Test custom error payloads are dumped to JSON-ready values."""
        error = ErrorValue.custom(CustomError(code=CustomErrorCode.SHORTER_LIST_THAN, value=2))
        report = ValidationReport.from_result(ValidationResult.failure(ErrorTree.single(error)))
        assert report.errors[0].expected == {"code": "shorter_list_than", "value": 2}
        assert report.errors[0].message == "Must have at least 2 items"


class TestErrorMessages:
    """Tests for the default message renderer."""

    def test_messages(self):
        """Test messages for plain and parameterized kinds."""
        assert error_message("/properties/a", ErrorValue.empty()) == "This field is required"
        assert error_message("", ErrorValue.of(ErrorKind.LONGER_STRING_THAN, 10)) == "Must be at most 10 characters"
        assert error_message("", ErrorValue.not_included_in(["free", "pro"])) == "Must be one of: free, pro"

    def test_host_custom_error(self):
        """Test host custom errors render as text."""
        assert error_message("", ErrorValue.custom("Username is taken")) == "Username is taken"

    def test_every_kind_has_a_message(self):
        """Test no kind is left without a message."""
        for kind in ErrorKind:
            if kind is not ErrorKind.CUSTOM:
                assert error_message("", ErrorValue.of(kind, 1))


class TestValidateData:
    """Tests for the one-call entry point."""

    def test_validate_data(self):
        """Test the documented usage."""
        report = validate_data(
            {"type": "object", "properties": {"age": {"type": "integer", "minimum": 18}}},
            {"age": 16},
        )
        assert report.to_error_dict() == {"/properties/age": ["Must be at least 18"]}
