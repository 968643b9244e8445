"""
Read-only view of one form field.
"""

from pydantic import BaseModel, ConfigDict, Field

from schema_form.models.error_value import ErrorValue
from schema_form.models.field_value import FieldValue


class FieldState(BaseModel):
    """State of a single field as a renderer sees it."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str | int, ...] = Field(..., description="Value path of the field")
    value: FieldValue | None = Field(default=None, description="Current value, None if never set")
    error: ErrorValue | None = Field(default=None, description="Error at this path from the last validation")
    live_error: ErrorValue | None = Field(
        default=None,
        description="The error, if the form is submitted or the field was changed and left",
    )
    is_dirty: bool = Field(default=False, description="Edited as free text and not blurred yet")
    is_changed: bool = Field(default=False, description="Differs from its original value")
    has_focus: bool = Field(default=False, description="Whether the field has focus")

    @property
    def display_value(self) -> str:
        return self.value.to_display_string() if self.value is not None else ""
