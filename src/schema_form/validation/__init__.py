"""
Validation core for schema-form.

This module contains:
- Paths and JSON pointers
- The error tree
- Validation combinators
- The schema walker and string formats
"""

from schema_form.validation.combinators import (
    MISSING,
    Validation,
    ValidationResult,
    and_then,
    check_all,
    fail,
    field,
    map_error_pointers,
    map_output,
    succeed,
    validate_all,
    validate_bool,
    validate_each,
    validate_float,
    validate_int,
    validate_null,
    validate_string,
)
from schema_form.validation.error_messages import error_message
from schema_form.validation.error_tree import EMPTY_TREE, ErrorTree
from schema_form.validation.formats import FormatRegistry
from schema_form.validation.paths import (
    Path,
    path_to_pointer,
    pointer_to_path,
    schema_pointer,
)
from schema_form.validation.schema_nodes import (
    effective_maximum,
    effective_minimum,
    parse_schema,
)
from schema_form.validation.schema_walker import schema_validation, walk

__all__ = [
    # Results and combinators
    "MISSING",
    "Validation",
    "ValidationResult",
    "and_then",
    "check_all",
    "fail",
    "field",
    "map_error_pointers",
    "map_output",
    "succeed",
    "validate_all",
    "validate_bool",
    "validate_each",
    "validate_float",
    "validate_int",
    "validate_null",
    "validate_string",
    # Errors
    "EMPTY_TREE",
    "ErrorTree",
    "error_message",
    # Paths
    "Path",
    "path_to_pointer",
    "pointer_to_path",
    "schema_pointer",
    # Schema
    "FormatRegistry",
    "effective_maximum",
    "effective_minimum",
    "parse_schema",
    "schema_validation",
    "walk",
]
