"""
MCP Tool definitions for schema-form.

Wraps one-shot validation and form sessions as MCP tools. Handlers are
plain functions from tool arguments to a JSON-serializable dict; bad
arguments and unknown sessions come back as {"error": ...} payloads.
"""

import logging
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field

from schema_form.form.accessor import get_field
from schema_form.form.messages import Blur, Focus, Input, InputKind, Msg, NoOp, Reset, Submit, Validate
from schema_form.form.model import initial, update
from schema_form.form.values import default_values, flatten_raw_value
from schema_form.mcp_server.session_store import (
    FormSession,
    close_session,
    get_session,
    new_session_id,
    set_session,
)
from schema_form.models.field_value import ABSENT, field_value_from_json
from schema_form.models.form_fields import FormField, derive_form_fields
from schema_form.models.validation_result import ValidationReport
from schema_form.validation.error_messages import error_message
from schema_form.validation.paths import path_to_pointer, schema_pointer, to_path
from schema_form.validation.schema_walker import schema_validation, walk

logger = logging.getLogger("schema-form-mcp")


class ValidateFormDataArgs(BaseModel):
    """Arguments of validate_form_data."""

    model_config = ConfigDict(populate_by_name=True)

    json_schema: Any = Field(..., alias="schema", description="JSON Schema to validate against")
    data: Any = Field(default=None, description="Value to validate")


class OpenFormArgs(BaseModel):
    """Arguments of open_form."""

    model_config = ConfigDict(populate_by_name=True)

    json_schema: Any = Field(..., alias="schema", description="JSON Schema of the form")
    ui_schema: dict[str, Any] | None = Field(default=None, description="Optional UI Schema")
    values: Any = Field(default=None, description="Initial values overriding schema defaults")


class FormMessage(BaseModel):
    """One form message as sent by a client."""

    type: Literal["focus", "blur", "input", "submit", "validate", "reset", "noop"]
    path: list[str | int] | str | None = Field(
        default=None, description="Field path as a list of segments or a JSON pointer"
    )
    input_kind: InputKind = Field(default=InputKind.TEXT, description="Widget that produced the input")
    value: Any = Field(default=None, description="New field value (input)")
    values: Any = Field(default=None, description="Replacement values (reset); schema defaults if omitted")


class SendFormMessageArgs(BaseModel):
    """Arguments of send_form_message."""

    session_id: str
    message: FormMessage


class SessionArgs(BaseModel):
    """Arguments of tools that only name a session."""

    session_id: str


def to_form_message(message: FormMessage, session: FormSession) -> Msg:
    """
    Translate a client message into a form message.

    Raises:
        ValueError: If a field message has no path
        TypeError: If an input value is not a JSON scalar
    """
    if message.type in ("focus", "blur", "input"):
        if message.path is None:
            raise ValueError(f"'{message.type}' message requires a path")
        path = to_path(message.path, session.schema)
        if message.type == "focus":
            return Focus(path)
        if message.type == "blur":
            return Blur(path)
        return Input(path, message.input_kind, field_value_from_json(message.value))
    if message.type == "reset":
        if message.values is None:
            return Reset(default_values(session.schema))
        return Reset(flatten_raw_value(message.values))
    if message.type == "submit":
        return Submit()
    if message.type == "validate":
        return Validate()
    return NoOp()


def _field_payload(form_field: FormField, session: FormSession) -> dict[str, Any]:
    state = get_field(form_field.path, session.model)
    error_path = path_to_pointer(schema_pointer(state.path))
    return {
        "path": form_field.pointer,
        "title": form_field.title,
        "value": state.display_value,
        "error": error_message(error_path, state.error) if state.error else None,
        "live_error": error_message(error_path, state.live_error) if state.live_error else None,
        "is_dirty": state.is_dirty,
        "is_changed": state.is_changed,
        "has_focus": state.has_focus,
    }


def form_state_payload(session_id: str, session: FormSession) -> dict[str, Any]:
    """Serializable snapshot of a session's form state."""
    model = session.model
    values = {}
    for path, value in model.values.items():
        encoded = value.to_encoded_value()
        values[path_to_pointer(path)] = None if encoded is ABSENT else encoded
    report = ValidationReport.from_result(model.result)
    return {
        "session_id": session_id,
        "is_valid": model.is_valid,
        "is_submitted": model.is_submitted,
        "focus": path_to_pointer(model.focus) if model.focus is not None else None,
        "output": model.output,
        "values": values,
        "fields": [_field_payload(form_field, session) for form_field in session.fields],
        "errors": [error.model_dump(mode="json") for error in report.errors],
        "changed_fields": sorted(path_to_pointer(path) for path in model.changed_fields),
    }


def _require_session(session_id: str) -> FormSession:
    session = get_session(session_id)
    if session is None:
        raise ValueError(f"Unknown form session: {session_id}")
    return session


def mcp_validate_form_data(arguments: dict[str, Any]) -> dict[str, Any]:
    """Validate data against a schema in one call."""
    args = ValidateFormDataArgs.model_validate(arguments)
    report = ValidationReport.from_result(walk(args.json_schema)(args.data))
    return report.model_dump(mode="json")


def mcp_open_form(arguments: dict[str, Any]) -> dict[str, Any]:
    """Open a form session from schema defaults overlaid with the given values."""
    args = OpenFormArgs.model_validate(arguments)
    values = default_values(args.json_schema)
    if args.values is not None:
        values.update(flatten_raw_value(args.values))

    validation = schema_validation(args.json_schema)
    session = FormSession(
        schema=args.json_schema,
        validation=validation,
        model=initial(values, validation),
        fields=derive_form_fields(args.json_schema, args.ui_schema),
        ui_schema=args.ui_schema,
    )
    session_id = new_session_id()
    set_session(session_id, session)
    logger.info(f"Opened form session {session_id} with {len(session.fields)} field(s)")

    payload = form_state_payload(session_id, session)
    payload["form_fields"] = [form_field.model_dump(mode="json") for form_field in session.fields]
    return payload


def mcp_send_form_message(arguments: dict[str, Any]) -> dict[str, Any]:
    """Apply one message to a session and return its new state."""
    args = SendFormMessageArgs.model_validate(arguments)
    session = _require_session(args.session_id)
    msg = to_form_message(args.message, session)
    session.model = update(session.validation, msg, session.model)
    return form_state_payload(args.session_id, session)


def mcp_get_form_state(arguments: dict[str, Any]) -> dict[str, Any]:
    """Return a session's current state."""
    args = SessionArgs.model_validate(arguments)
    return form_state_payload(args.session_id, _require_session(args.session_id))


def mcp_close_form(arguments: dict[str, Any]) -> dict[str, Any]:
    """Close a session, returning its final output if it was valid."""
    args = SessionArgs.model_validate(arguments)
    session = _require_session(args.session_id)
    close_session(args.session_id)
    logger.info(f"Closed form session {args.session_id}")
    return {
        "session_id": args.session_id,
        "closed": True,
        "is_valid": session.model.is_valid,
        "output": session.model.output,
    }


TOOL_HANDLERS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    "validate_form_data": mcp_validate_form_data,
    "open_form": mcp_open_form,
    "send_form_message": mcp_send_form_message,
    "get_form_state": mcp_get_form_state,
    "close_form": mcp_close_form,
}


def call_tool(name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
    """
    Dispatch a tool call by name.

    Returns:
        The handler's payload, or {"error": message} for unknown tools,
        malformed arguments and unknown sessions.
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        return {"error": f"Unknown tool: {name}"}
    try:
        return handler(arguments or {})
    except (ValueError, TypeError) as e:
        logger.error(f"Error in {name}: {e}")
        return {"error": str(e)}


_SESSION_ID_PROPERTY = {
    "type": "string",
    "description": "Session id returned by open_form",
}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "validate_form_data",
            "description": """
Validate a JSON value against a JSON Schema and report every error.

Returns is_valid, validated_data when valid, and errors: a list of
{path, kind, message, expected} where path is a JSON pointer into the
schema, e.g. "/properties/age".
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "schema": {
                        "description": "JSON Schema (object or boolean)",
                    },
                    "data": {
                        "description": "Value to validate, e.g. a submitted form",
                    },
                },
                "required": ["schema"],
            },
        },
        {
            "name": "open_form",
            "description": """
Open an editable form session for a JSON Schema.

Initial values are the schema defaults overlaid with the given values.
Returns the session_id, the form fields in display order and the form state.
Use send_form_message to edit the form and close_form when done.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "schema": {
                        "description": "JSON Schema of the form",
                    },
                    "ui_schema": {
                        "type": "object",
                        "description": "Optional UI Schema (ui:order, ui:widget, ui:placeholder, ...)",
                    },
                    "values": {
                        "description": "Optional initial values, shaped like the form data",
                    },
                },
                "required": ["schema"],
            },
        },
        {
            "name": "send_form_message",
            "description": """
Send one message to a form session and get the new form state.

MESSAGE TYPES:
- focus / blur: {"type": "focus", "path": ["name"]}
- input: {"type": "input", "path": ["name"], "input_kind": "text", "value": "Ada"}
  input_kind is text, textarea, select, radio or checkbox
- submit: show all errors and report the output
- validate: re-run validation only
- reset: {"type": "reset", "values": {...}}; schema defaults if values is omitted
- noop

Paths are lists of keys and indices, or JSON pointers like "/address/street".
Errors of a field appear in live_error once the form is submitted, or once
the field has been changed and is no longer being edited.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "session_id": _SESSION_ID_PROPERTY,
                    "message": {
                        "type": "object",
                        "properties": {
                            "type": {
                                "type": "string",
                                "enum": ["focus", "blur", "input", "submit", "validate", "reset", "noop"],
                            },
                            "path": {
                                "description": "Field path: list of keys/indices or a JSON pointer",
                            },
                            "input_kind": {
                                "type": "string",
                                "enum": [kind.value for kind in InputKind],
                                "default": "text",
                            },
                            "value": {
                                "description": "New value for input messages: string, number, boolean or null",
                            },
                            "values": {
                                "description": "Replacement values for reset messages",
                            },
                        },
                        "required": ["type"],
                    },
                },
                "required": ["session_id", "message"],
            },
        },
        {
            "name": "get_form_state",
            "description": "Get the current state of a form session.",
            "inputSchema": {
                "type": "object",
                "properties": {"session_id": _SESSION_ID_PROPERTY},
                "required": ["session_id"],
            },
        },
        {
            "name": "close_form",
            "description": "Close a form session and return its final output.",
            "inputSchema": {
                "type": "object",
                "properties": {"session_id": _SESSION_ID_PROPERTY},
                "required": ["session_id"],
            },
        },
    ]
