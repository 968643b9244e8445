"""
Field paths.

A path is a tuple of object keys (str) and array indices (int). Two
spaces use paths: the form's values are keyed by value paths such as
("address", "street"), while the schema walker reports errors under schema
pointers such as ("properties", "address", "properties", "street").

A JSON Pointer does not say whether "/0" names an index or a key. Given the
schema it points into, pointer_to_path reads digit segments as indices only
below array schemas; without one, every digit segment is an index.
"""

from typing import Any, Iterable

Segment = str | int
Path = tuple[Segment, ...]

ROOT: Path = ()


def to_path(segments: Iterable[Segment] | str, schema: Any = None) -> Path:
    """Coerce a pointer string or a segment sequence to a Path."""
    if isinstance(segments, str):
        return pointer_to_path(segments, schema)
    return tuple(segments)


def _escape(segment: Segment) -> str:
    return str(segment).replace("~", "~0").replace("/", "~1")


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def _is_index(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()


def _is_array_schema(schema: Any) -> bool:
    if not isinstance(schema, dict):
        return False
    return schema.get("type") == "array" or "items" in schema or "prefixItems" in schema


def _item_schema(schema: dict[str, Any], index: int) -> Any:
    positional = schema.get("prefixItems")
    rest = schema.get("items")
    if positional is None and isinstance(rest, list):
        positional, rest = rest, schema.get("additionalItems")
    if positional is not None and index < len(positional):
        return positional[index]
    return rest


def _property_schema(schema: Any, key: str) -> Any:
    if not isinstance(schema, dict):
        return None
    properties = schema.get("properties")
    if isinstance(properties, dict):
        return properties.get(key)
    return None


def path_to_pointer(path: Path) -> str:
    """Render a path as a JSON Pointer; the root is the empty string."""
    return "".join(f"/{_escape(segment)}" for segment in path)


def pointer_to_path(pointer: str, schema: Any = None) -> Path:
    """
    Parse a JSON Pointer.

    With schema, a digit segment becomes an array index only where the
    schema at that point describes an array, so object keys such as "123"
    stay keys. Without schema, all-digit segments become array indices.
    """
    if not pointer:
        return ROOT
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON pointer: {pointer!r}")
    path: list[Segment] = []
    node = schema
    for part in pointer[1:].split("/"):
        if not _is_index(part):
            key = _unescape(part)
            path.append(key)
            node = _property_schema(node, key)
        elif schema is None:
            path.append(int(part))
        elif _is_array_schema(node):
            path.append(int(part))
            node = _item_schema(node, int(part))
        else:
            path.append(part)
            node = _property_schema(node, part)
    return tuple(path)


def schema_pointer(value_path: Path) -> Path:
    """Map a value path to the schema pointer the walker reports errors under."""
    pointer: list[Segment] = []
    for segment in value_path:
        if isinstance(segment, int):
            pointer.extend(("items", segment))
        else:
            pointer.extend(("properties", segment))
    return tuple(pointer)
