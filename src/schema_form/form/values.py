"""
Conversions between the form's flat value mapping and raw JSON-like values.

The form keeps one FieldValue per leaf path. Validation runs over the
nested value those leaves describe: string segments build objects, integer
segments build arrays.
"""

import logging
from typing import Any, Callable, Mapping

from schema_form.models.field_value import ABSENT, FieldValue, field_value_from_json
from schema_form.validation.paths import ROOT, Path, Segment

logger = logging.getLogger("schema-form")


def _sort_key(path: Path) -> tuple:
    return tuple((0, segment) if isinstance(segment, int) else (1, segment) for segment in path)


def _pad(items: list[Any], index: int) -> None:
    if index >= len(items):
        items.extend([None] * (index + 1 - len(items)))


def _container_for(segment: Segment) -> Any:
    return [] if isinstance(segment, int) else {}


def _fits(node: Any, segment: Segment) -> bool:
    if isinstance(node, list):
        return isinstance(segment, int) and segment >= 0
    return isinstance(node, dict) and isinstance(segment, str)


def _set_in(holder: list[Any], path: Path, value: Any) -> bool:
    node: Any = holder
    for segment, next_segment in zip(path, path[1:]):
        if not _fits(node, segment):
            return False
        if isinstance(node, list):
            _pad(node, segment)
            child = node[segment]
        else:
            child = node.get(segment)
        if child is None:
            child = _container_for(next_segment)
            node[segment] = child
        elif not _fits(child, next_segment):
            return False
        node = child
    last = path[-1]
    if not _fits(node, last):
        return False
    if isinstance(node, list):
        _pad(node, last)
    node[last] = value
    return True


def build_raw_value(
    values: Mapping[Path, FieldValue],
    root_factory: Callable[[], Any] = dict,
) -> Any:
    """
    Nest a flat Path -> FieldValue mapping into a raw JSON-like value.

    Empty values are left out of objects and become None inside arrays so
    element positions are kept. The root path () holds a scalar root.
    root_factory supplies the value used when nothing is filled in.
    Paths whose shape conflicts with an earlier path are skipped.
    """
    holder: list[Any] = [root_factory()]
    for path in sorted(values, key=_sort_key):
        encoded = values[path].to_encoded_value()
        if encoded is ABSENT:
            if path and not isinstance(path[-1], int):
                continue
            encoded = None
        if not _set_in(holder, (0,) + tuple(path), encoded):
            logger.debug(f"Skipping value at {path}: conflicts with another field path")
    return holder[0]


def flatten_raw_value(raw: Any, prefix: Path = ROOT) -> dict[Path, FieldValue]:
    """Split a raw JSON-like value into per-leaf FieldValues."""
    if isinstance(raw, dict):
        values: dict[Path, FieldValue] = {}
        for key, item in raw.items():
            values.update(flatten_raw_value(item, prefix + (str(key),)))
        return values
    if isinstance(raw, list):
        values = {}
        for index, item in enumerate(raw):
            values.update(flatten_raw_value(item, prefix + (index,)))
        return values
    return {prefix: field_value_from_json(raw)}


def default_values(schema: Any, prefix: Path = ROOT) -> dict[Path, FieldValue]:
    """
    Initial field values taken from the schema's "default" keywords.

    An object's default is flattened first; defaults declared on its
    properties override the matching entries.
    """
    values: dict[Path, FieldValue] = {}
    if not isinstance(schema, dict):
        return values
    if "default" in schema:
        values.update(flatten_raw_value(schema["default"], prefix))
    properties = schema.get("properties")
    if isinstance(properties, dict):
        for key, child in properties.items():
            values.update(default_values(child, prefix + (key,)))
    return values
