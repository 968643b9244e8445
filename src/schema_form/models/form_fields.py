"""
Editable fields derived from a JSON Schema and an optional UI Schema.

The UI Schema follows the react-jsonschema-form conventions: nested dicts
keyed like the schema's properties, "ui:*" options per field and
"ui:order" to reorder an object's properties ("*" stands for the rest).
Options are passed through as given; choosing widgets is the renderer's job.
"""

from typing import Any

from pydantic import BaseModel, Field

from schema_form.validation.paths import Path, path_to_pointer


class FormField(BaseModel):
    """Schema for a single form field."""

    path: tuple[str | int, ...] = Field(..., description="Value path of the field")
    type: str | None = Field(default=None, description="JSON Schema type, None if untyped")
    title: str = Field(..., description="Human-readable label")
    description: str | None = Field(default=None, description="Help text")
    format: str | None = Field(default=None, description="Format: email, date, etc.")
    required: bool = Field(default=False, description="Whether field is required")
    default: Any = Field(default=None, description="Schema default value")
    enum_values: list[Any] | None = Field(default=None, description="Allowed values for select")

    # UI
    ui_widget: str | None = Field(default=None, description="UI widget type")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    ui_options: dict[str, Any] = Field(default_factory=dict, description="All ui:* options")

    @property
    def pointer(self) -> str:
        return path_to_pointer(self.path)

    @property
    def name(self) -> str:
        return str(self.path[-1]) if self.path else ""


def ordered_keys(properties: dict[str, Any], ui_order: list[str] | None) -> list[str]:
    """Apply ui:order to property names; unknown names in the order are ignored."""
    keys = list(properties)
    if not ui_order:
        return keys
    listed = [key for key in ui_order if key in properties]
    rest = [key for key in keys if key not in listed]
    if "*" not in ui_order:
        return listed + rest
    ordered: list[str] = []
    for key in ui_order:
        if key == "*":
            ordered.extend(rest)
        elif key in properties:
            ordered.append(key)
    return ordered


def _is_object(schema: dict[str, Any]) -> bool:
    return schema.get("type") == "object" or (
        "type" not in schema and isinstance(schema.get("properties"), dict)
    )


def _leaf(path: Path, schema: Any, ui_schema: dict[str, Any], required: bool) -> FormField:
    schema = schema if isinstance(schema, dict) else {}
    schema_type = schema.get("type")
    ui_options = {key: value for key, value in ui_schema.items() if key.startswith("ui:")}
    return FormField(
        path=path,
        type=schema_type if isinstance(schema_type, str) else None,
        title=schema.get("title") or (str(path[-1]) if path else ""),
        description=schema.get("description"),
        format=schema.get("format"),
        required=required,
        default=schema.get("default"),
        enum_values=schema.get("enum"),
        ui_widget=ui_options.get("ui:widget"),
        placeholder=ui_options.get("ui:placeholder"),
        ui_options=ui_options,
    )


def derive_form_fields(
    schema: Any,
    ui_schema: dict[str, Any] | None = None,
    path: Path = (),
    required: bool = False,
) -> list[FormField]:
    """
    List the leaf fields of schema in display order.

    Objects are expanded into their properties; every other schema,
    arrays included, is one field.
    """
    ui_schema = ui_schema if isinstance(ui_schema, dict) else {}
    if not isinstance(schema, dict) or not _is_object(schema):
        return [_leaf(path, schema, ui_schema, required)]

    properties = schema.get("properties") or {}
    required_keys = set(schema.get("required") or [])
    fields: list[FormField] = []
    for key in ordered_keys(properties, ui_schema.get("ui:order")):
        fields.extend(derive_form_fields(
            properties[key],
            ui_schema.get(key),
            path + (key,),
            key in required_keys,
        ))
    return fields
