"""
String formats.

Built-in checks cover date, date-time, time, email, hostname, ipv4 and
ipv6. Hosts add their own through a FormatRegistry; a registered format
takes precedence over a built-in one of the same name. Unknown formats are
not checked.
"""

import ipaddress
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterator

from pydantic import EmailStr, TypeAdapter, ValidationError

from schema_form.models.error_value import CustomError, CustomErrorCode, ErrorKind, ErrorValue

logger = logging.getLogger("schema-form")

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.\d+)?)?"
    r"(?:[Zz]|[+-](?P<offset_hour>\d{2}):(?P<offset_minute>\d{2}))?$"
)
HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")

_email_adapter = TypeAdapter(EmailStr)


def is_date(value: str) -> bool:
    if not DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_time(value: str) -> bool:
    """HH:MM with optional seconds, fraction and UTC offset."""
    match = TIME_PATTERN.match(value)
    if not match:
        return False
    if int(match["hour"]) > 23 or int(match["minute"]) > 59:
        return False
    # 60 allows a leap second
    if match["second"] is not None and int(match["second"]) > 60:
        return False
    if match["offset_hour"] is not None:
        if int(match["offset_hour"]) > 23 or int(match["offset_minute"]) > 59:
            return False
    return True


def is_date_time(value: str) -> bool:
    """RFC 3339 date-time; the separator may be T, t or a space."""
    if len(value) < 11 or value[10] not in "Tt ":
        return False
    return is_date(value[:10]) and is_time(value[11:])


def is_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def is_hostname(value: str) -> bool:
    hostname = value[:-1] if value.endswith(".") else value
    if not hostname or len(hostname) > 253:
        return False
    return all(HOSTNAME_LABEL.match(label) for label in hostname.split("."))


def is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


BUILTIN_FORMATS: dict[str, Callable[[str], bool]] = {
    "date": is_date,
    "date-time": is_date_time,
    "time": is_time,
    "email": is_email,
    "hostname": is_hostname,
    "ipv4": is_ipv4,
    "ipv6": is_ipv6,
}


@dataclass(frozen=True)
class CustomFormat:
    """
    A host-supplied string format.

    validator returns the accepted string or raises ValueError; the error
    message becomes the payload of a CUSTOM error.
    """

    name: str
    validator: Callable[[str], str]


class FormatRegistry:
    """
    Named custom formats consulted by string schemas.

    Usage:
        formats = FormatRegistry()

        @formats.register("zip-code")
        def zip_code(value: str) -> str:
            if not value.isdigit() or len(value) != 5:
                raise ValueError("Expected five digits")
            return value
    """

    def __init__(self, formats: dict[str, Callable[[str], str]] | None = None):
        self._formats: dict[str, CustomFormat] = {}
        for name, validator in (formats or {}).items():
            self.add(name, validator)

    def add(self, name: str, validator: Callable[[str], str]) -> CustomFormat:
        custom = CustomFormat(name=name, validator=validator)
        self._formats[name] = custom
        return custom

    def register(self, name: str):
        """Decorator form of add()."""

        def decorator(validator: Callable[[str], str]) -> Callable[[str], str]:
            self.add(name, validator)
            return validator

        return decorator

    def get(self, name: str) -> CustomFormat | None:
        return self._formats.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._formats

    def __iter__(self) -> Iterator[str]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)


def check_format(name: str, value: str, formats: FormatRegistry | None = None) -> ErrorValue | None:
    """Return the error for value under format name, or None if it conforms."""
    custom = formats.get(name) if formats is not None else None
    if custom is not None:
        try:
            custom.validator(value)
        except ValueError as e:
            return ErrorValue.custom(CustomError(code=CustomErrorCode.FORMAT, value=str(e) or name))
        return None

    builtin = BUILTIN_FORMATS.get(name)
    if builtin is None:
        logger.debug(f"Unknown format '{name}' is not checked")
        return None
    if builtin(value):
        return None
    if name == "email":
        return ErrorValue.of(ErrorKind.INVALID_EMAIL)
    return ErrorValue.of(ErrorKind.INVALID_FORMAT, name)
