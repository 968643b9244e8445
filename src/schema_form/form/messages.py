"""
Messages accepted by the form update function.

UI events are translated into these by the host; update() is the only
place they are interpreted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from schema_form.models.field_value import FieldValue
from schema_form.validation.paths import Path


class InputKind(str, Enum):
    """Widget family that produced an Input message."""

    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"

    @property
    def is_free_text(self) -> bool:
        """Free-text edits make a field dirty; selections never do."""
        return self in (InputKind.TEXT, InputKind.TEXTAREA)


@dataclass(frozen=True)
class Focus:
    path: Path


@dataclass(frozen=True)
class Blur:
    path: Path


@dataclass(frozen=True)
class Input:
    path: Path
    kind: InputKind
    value: FieldValue


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class Validate:
    """Re-run validation without touching anything else."""


@dataclass(frozen=True)
class Reset:
    values: Mapping[Path, FieldValue] = field(default_factory=dict)


@dataclass(frozen=True)
class NoOp:
    pass


Msg = Focus | Blur | Input | Submit | Validate | Reset | NoOp
