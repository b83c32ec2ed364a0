"""
Dot-path lookups into parsed YAML documents.

A path like ``spec.template.spec.containers.0.image`` walks mappings by key
and sequences by integer index. Any step that cannot be taken yields
UNDEFINED rather than raising, which keeps "the field is missing" distinct
from "the field is present and null".
"""

import re
from typing import Any

_INDEX_PATTERN = re.compile(r"\s*([+-]?\d+)")


class _Undefined:
    """Marker for a path that does not resolve to a value."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


def _parse_index(segment: str) -> int | None:
    # Leading digits are enough ("2abc" -> 2), matching how authors have written paths
    match = _INDEX_PATTERN.match(segment)
    return int(match.group(1)) if match else None


def step(current: Any, segment: str) -> Any:
    """Take a single path step from `current`, returning UNDEFINED when impossible."""
    if isinstance(current, list | tuple):
        index = _parse_index(segment)
        if index is None or index < 0 or index >= len(current):
            return UNDEFINED
        return current[index]

    if isinstance(current, dict):
        if segment in current:
            return current[segment]
        # YAML keys such as `80:` or `true:` load as int/bool
        for key, value in current.items():
            if not isinstance(key, str) and _key_text(key) == segment:
                return value
        return UNDEFINED

    return UNDEFINED


def _key_text(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def query_path(document: Any, path: str) -> Any:
    """
    Resolve a dot-separated path against a parsed document.

    Args:
        document: Value produced by the YAML parser
        path: Dot-separated segments; integer segments index sequences

    Returns:
        The value at the path, or UNDEFINED if any step is missing
    """
    current = document
    for segment in path.split("."):
        if current is UNDEFINED:
            return UNDEFINED
        current = step(current, segment)
    return current


def is_defined(value: Any) -> bool:
    return value is not UNDEFINED
