# Global form session store for MCP connections

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

from schema_form.config import get_config
from schema_form.form.model import FormModel
from schema_form.models.form_fields import FormField
from schema_form.validation.combinators import Validation

logger = logging.getLogger("schema-form-mcp")


@dataclass
class FormSession:
    """One open form: its schema, derived fields and current model."""

    schema: Any
    validation: Validation
    model: FormModel
    fields: list[FormField] = field(default_factory=list)
    ui_schema: dict[str, Any] | None = None


# Key: session_id, Value: FormSession; oldest first
form_sessions: "OrderedDict[str, FormSession]" = OrderedDict()


def new_session_id() -> str:
    return str(uuid.uuid4()).replace("-", "")


def get_session(session_id: str) -> FormSession | None:
    """Get an open session, or None if unknown or already closed."""
    return form_sessions.get(session_id)


def set_session(session_id: str, session: FormSession) -> None:
    """Store a session, evicting the oldest ones beyond config.max_sessions."""
    form_sessions[session_id] = session
    form_sessions.move_to_end(session_id)
    max_sessions = get_config().max_sessions
    while len(form_sessions) > max_sessions:
        evicted, _ = form_sessions.popitem(last=False)
        logger.info(f"Evicted form session {evicted}")


def close_session(session_id: str) -> bool:
    """Drop a session. Returns whether it existed."""
    return form_sessions.pop(session_id, None) is not None
