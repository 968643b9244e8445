"""Tests for string formats."""

import pytest

from schema_form.models.error_value import CustomErrorCode, ErrorKind, ErrorValue
from schema_form.validation.formats import (
    FormatRegistry,
    check_format,
    is_date,
    is_date_time,
    is_hostname,
    is_ipv4,
    is_ipv6,
    is_time,
)
from schema_form.validation.schema_walker import walk


class TestBuiltinFormats:
    """Tests for the built-in format checks."""

    @pytest.mark.parametrize("value,expected", [
        ("2024-02-29", True),
        ("2023-02-29", False),
        ("2024-2-1", False),
        ("yesterday", False),
    ])
    def test_date(self, value, expected):
        """Test calendar dates."""
        assert is_date(value) is expected

    @pytest.mark.parametrize("value,expected", [
        ("13:45", True),
        ("13:45:30", True),
        ("13:45:30.250Z", True),
        ("23:59:60+02:00", True),
        ("24:00", False),
        ("12:60", False),
        ("noon", False),
    ])
    def test_time(self, value, expected):
        """Test times with optional seconds and offset."""
        assert is_time(value) is expected

    def test_date_time(self):
        """Test date-time combines both."""
        assert is_date_time("2024-05-01T08:30:00Z")
        assert is_date_time("2024-05-01 08:30")
        assert not is_date_time("2024-05-01")
        assert not is_date_time("2024-05-01X08:30")

    def test_hostname(self):
        """Test hostname labels."""
        assert is_hostname("api.example.org")
        assert is_hostname("localhost")
        assert not is_hostname("-bad.example.org")
        assert not is_hostname("a..b")
        assert not is_hostname("")

    def test_ip_addresses(self):
        """Test IPv4 and IPv6."""
        assert is_ipv4("192.168.1.10")
        assert not is_ipv4("256.1.1.1")
        assert is_ipv6("::1")
        assert not is_ipv6("192.168.1.10")

    def test_check_format_errors(self):
        """Test the error kinds of failed formats."""
        assert check_format("email", "nope") == ErrorValue.of(ErrorKind.INVALID_EMAIL)
        assert check_format("date", "nope") == ErrorValue.of(ErrorKind.INVALID_FORMAT, "date")
        assert check_format("ipv4", "10.0.0.1") is None

    def test_unknown_format_passes(self):
        """Test formats nobody knows are not checked."""
        assert check_format("color", "not a color") is None


class TestFormatRegistry:
    """Tests for custom formats."""

    def make_registry(self) -> FormatRegistry:
        formats = FormatRegistry()

        @formats.register("zip-code")
        def zip_code(value: str) -> str:
            if len(value) != 5 or not value.isdigit():
                raise ValueError("Expected five digits")
            return value

        return formats

    def test_registry_container(self):
        """Test registration and lookup."""
        formats = self.make_registry()
        assert "zip-code" in formats
        assert list(formats) == ["zip-code"]
        assert len(formats) == 1
        assert formats.get("zip-code").name == "zip-code"
        assert formats.get("missing") is None

    def test_custom_failure_is_custom_error(self):
        """Test custom failures carry the validator's message."""
        error = check_format("zip-code", "12ab", self.make_registry())
        assert error.kind is ErrorKind.CUSTOM
        assert error.custom_error.code is CustomErrorCode.FORMAT
        assert error.custom_error.value == "Expected five digits"

    def test_custom_overrides_builtin(self):
        """Test a registered format wins over the built-in one."""
        formats = FormatRegistry({"email": lambda value: value})
        assert check_format("email", "not-an-email", formats) is None

    def test_walker_uses_registry(self):
        """Test string schemas consult the registry."""
        schema = {"type": "object", "properties": {"zip": {"type": "string", "format": "zip-code"}}}
        validation = walk(schema, self.make_registry())
        assert validation({"zip": "75001"}).output == {"zip": "75001"}
        [(path, error)] = validation({"zip": "7500"}).errors.flatten()
        assert path == "/properties/zip"
        assert error.custom_error.code is CustomErrorCode.FORMAT
